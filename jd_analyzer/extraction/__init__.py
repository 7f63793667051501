"""Text extraction from uploaded documents."""

from .pdf_recovery import ByteTextRecoverer
from .text_extractor import (
    DocumentTextExtractor,
    PlainTextDecoder,
    RichTextExtractor,
    extract_text,
)

__all__ = [
    "ByteTextRecoverer",
    "DocumentTextExtractor",
    "PlainTextDecoder",
    "RichTextExtractor",
    "extract_text",
]
