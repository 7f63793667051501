"""
Document Text Extractor - Turns uploaded PDF, DOCX and TXT bytes into text.
"""

from io import BytesIO
import codecs
import logging

from docx import Document

from jd_analyzer.core.exceptions import DecodeError
from jd_analyzer.core.models import (
    DocumentFormat,
    ExtractedText,
    RawDocument,
    RecoveryQuality,
)
from .pdf_recovery import ByteTextRecoverer


class RichTextExtractor:
    """Decodes DOCX containers with python-docx."""

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def decode(self, data: bytes, filename: str = "") -> str:
        """
        Extract raw text from a DOCX container.

        Paragraphs come first, then the text of table cells, one per line.

        Raises:
            DecodeError: If the container is corrupt or not a DOCX file
        """
        try:
            doc = Document(BytesIO(data))
        except Exception as e:
            self.logger.error(f"Failed to open DOCX container {filename}: {e}")
            raise DecodeError(f"Failed to extract DOCX text: {e}", filename) from e

        lines = [para.text for para in doc.paragraphs]
        for table in doc.tables:
            for row in table.rows:
                for cell in row.cells:
                    if cell.text.strip():
                        lines.append(cell.text)

        return "\n".join(lines)


class PlainTextDecoder:
    """Decodes plain text files as strict UTF-8."""

    def decode(self, data: bytes, filename: str = "") -> str:
        if data.startswith(codecs.BOM_UTF8):
            data = data[len(codecs.BOM_UTF8):]
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Failed to extract text from TXT file: {e}", filename) from e


class DocumentTextExtractor:
    """Uniform entry point for turning document bytes into text."""

    def __init__(self, min_recovered_chars: int = ByteTextRecoverer.DEFAULT_MIN_CHARS):
        """
        Initialize the extractor and its format decoders.

        Args:
            min_recovered_chars: Length a PDF recovery strategy must reach
        """
        self.pdf_recoverer = ByteTextRecoverer(min_chars=min_recovered_chars)
        self.rich_text = RichTextExtractor()
        self.plain_text = PlainTextDecoder()
        self.logger = logging.getLogger(self.__class__.__name__)

    def extract_text(self, data: bytes, filename: str) -> str:
        """
        Extract text from a document, dispatching on the filename's extension.

        Raises:
            UnsupportedFormat: If the extension is not pdf, docx or txt
            DecodeError: If a DOCX or TXT document cannot be decoded
        """
        return self.extract(data, filename).text

    def extract(self, data: bytes, filename: str) -> ExtractedText:
        """Extract text and report how trustworthy it is."""
        return self.extract_document(RawDocument.from_upload(data, filename))

    def extract_document(self, document: RawDocument) -> ExtractedText:
        fmt = document.declared_format

        if fmt is DocumentFormat.PAGE_DESCRIPTION:
            outcome = self.pdf_recoverer.recover(document.data)
            if not outcome.recovered:
                self.logger.warning(f"No text recovered from {document.filename}")
                return ExtractedText(text="", recovery_quality=RecoveryQuality.EMPTY)
            return ExtractedText(
                text=outcome.text,
                recovery_quality=RecoveryQuality.PARTIAL,
                strategy=outcome.strategy,
            )

        if fmt is DocumentFormat.RICH_TEXT:
            text = self.rich_text.decode(document.data, document.filename)
        else:
            text = self.plain_text.decode(document.data, document.filename)

        quality = RecoveryQuality.FULL if text.strip() else RecoveryQuality.EMPTY
        self.logger.debug(f"Extracted {len(text)} chars from {document.filename} ({fmt.value})")
        return ExtractedText(text=text, recovery_quality=quality)


_default_extractor = DocumentTextExtractor()


def extract_text(data: bytes, filename: str) -> str:
    """Extract text from document bytes using a shared default extractor."""
    return _default_extractor.extract_text(data, filename)
