"""
Exceptions raised by document extraction.
"""

from typing import Optional


class JDAnalyzerError(Exception):
    """Base class for errors raised by jd_analyzer."""


class UnsupportedFormat(JDAnalyzerError, ValueError):
    """The filename extension does not map to a known document format."""

    def __init__(self, filename: str, extension: Optional[str] = None):
        self.filename = filename
        self.extension = extension
        shown = f".{extension}" if extension else "(none)"
        super().__init__(f"Unsupported file format: {shown} ({filename})")


class DecodeError(JDAnalyzerError):
    """A well-defined container or encoding could not be decoded."""

    def __init__(self, message: str, filename: str = ""):
        self.filename = filename
        if filename:
            message = f"{filename}: {message}"
        super().__init__(message)
