"""
Best-effort text recovery for PDF documents.

No PDF library is involved: the raw bytes are scanned with three independent
heuristics, tried in order, and the first one that yields enough text wins.
Malformed input never raises; when nothing usable comes out the recoverer
returns an empty string so that noise never reaches skill extraction.

Strategies:
- structural-stream: content of ``stream ... endstream`` blocks plus string
  literals found elsewhere in the file
- byte-scan: printable ASCII runs filtered against PDF structural vocabulary
- content-object: page ``/Contents`` objects resolved and their text
  operators' string literals collected
"""

import logging
import re
import zlib
from typing import Callable, Optional

from jd_analyzer.core.models import RecoveryOutcome

logger = logging.getLogger(__name__)


# Keywords of the PDF file structure, font and encoding names, and values
# that only ever show up in document metadata.
STRUCTURAL_TERMS = frozenset({
    "obj", "endobj", "stream", "endstream", "xref", "startxref", "trailer",
    "eof", "null", "true", "false", "r", "f", "n", "pdf",
    "type", "subtype", "catalog", "pages", "page", "parent", "kids", "count",
    "mediabox", "cropbox", "resources", "contents", "rotate", "trans",
    "pagemode", "usenone", "root", "info", "size", "length", "filter",
    "flatedecode", "ascii85decode", "asciihexdecode", "decodeparms",
    "procset", "text", "imageb", "imagec", "imagei", "xobject", "extgstate",
    "font", "basefont", "fontdescriptor", "firstchar", "lastchar", "widths",
    "encoding", "winansiencoding", "macromanencoding", "standardencoding",
    "helvetica", "times", "courier", "symbol", "zapfdingbats", "arial",
    "arialmt", "calibri", "type1",
    "truetype", "title", "subject", "author", "creator", "producer",
    "creationdate", "moddate", "trapped", "keywords",
    "reportlab", "www.reportlab.com", "digest", "anonymous", "unspecified",
    "generated", "document", "http",
})

# Substrings that mark generator-tool metadata however they are embedded.
GENERATOR_MARKERS = (
    "reportlab", "ghostscript", "acrobat distiller", "pdftex", "libreoffice",
    "skia/pdf", "itext", "quartz pdfcontext", "microsoft® word",
)

# Content stream operators (drawing, colour, text positioning and showing).
OPERATORS = frozenset({
    "BT", "ET", "Tc", "Tw", "Tz", "TL", "Tf", "Tr", "Ts", "Td", "TD", "Tm",
    "T*", "Tj", "TJ", "cm", "q", "Q", "w", "J", "j", "M", "d", "ri", "i",
    "gs", "m", "l", "c", "v", "y", "h", "re", "S", "s", "f", "F", "f*", "B",
    "B*", "b", "b*", "n", "W", "W*", "g", "G", "rg", "RG", "k", "K", "cs",
    "CS", "sc", "SC", "scn", "SCN", "sh", "Do", "BI", "ID", "EI", "BMC",
    "BDC", "EMC", "MP", "DP", "d0", "d1",
})

_OPERATOR_RX = re.compile(
    r"(?<![\w/'’])(?:"
    + "|".join(re.escape(op) for op in sorted(OPERATORS, key=len, reverse=True))
    + r")(?![\w*])"
)
_TEXT_OPERATOR_RX = re.compile(r"(?<![\w/])(?:BT|ET|Tf|Td|TD|Tj|TJ|Tm|T\*)(?![\w*])")

# A string literal, allowing one level of balanced parentheses inside.
_LITERAL_RX = re.compile(r"\(((?:\\.|[^\\()]|\((?:\\.|[^\\()])*\))*)\)", re.DOTALL)
_ESCAPE_RX = re.compile(r"\\([0-7]{1,3}|.)", re.DOTALL)
_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "b": "\b", "f": "\f"}

_HEX_STRING_RX = re.compile(r"(?<!<)<([0-9A-Fa-f\s]+)>(?!>)")
_HEX_BLOCK_RX = re.compile(r"[0-9A-Fa-f\s]+")
_HEX_RX = re.compile(r"[0-9A-Fa-f]+")

_STREAM_RX = re.compile(r"(?<!end)stream\r?\n(.*?)\r?\n?endstream", re.DOTALL)
_CONTENTS_REF_RX = re.compile(r"/Contents\s*(\[[^\]]*\]|\d+\s+\d+\s+R)")
_REF_RX = re.compile(r"(\d+)\s+(\d+)\s+R")
_TJ_ARRAY_RX = re.compile(r"\[((?:[^\[\]\\]|\\.)*)\]\s*TJ", re.DOTALL)
_TJ_PART_RX = re.compile(r"(\((?:\\.|[^\\()])*\))|(-?\d*\.?\d+)")

_NUMBER_RX = re.compile(r"[-+]?\d*\.?\d+")
_DIGITS_RX = re.compile(r"\d+")
_COORDINATES_RX = re.compile(r"-?\d+(?:\.\d+)?(?:\s+-?\d+(?:\.\d+)?){3}")
_FONT_NAME_RX = re.compile(r"[A-Z]{1,3}\d+")
_PDF_DATE_RX = re.compile(r"D:\d{4}")
_SUBSET_PREFIX_RX = re.compile(r"^[A-Z]{6}\+")
_TOKEN_SPLIT_RX = re.compile(r"[\s/\[\]<>()]+")
_LETTER_RX = re.compile(r"[A-Za-z]")
_SPECIAL_CHAR_RX = re.compile(r"[^A-Za-z0-9\s]")

_WHITESPACE_RX = re.compile(r"\s+")
_COORDINATE_RUN_RX = re.compile(r"(?<!\S)-?\d+(?:\.\d+)?(?:\s+-?\d+(?:\.\d+)?){3}(?!\S)")
_FONT_REF_RX = re.compile(r"/[A-Za-z]{1,3}\d+(?:\s+-?\d+(?:\.\d+)?\s+Tf)?")
_SHORT_TOKEN_RX = re.compile(r"(?<!\S)\S{1,2}(?!\S)")

# Stream dictionaries of metadata packets and embedded font programs
_NON_TEXT_STREAM_RX = re.compile(
    r"/Type\s*/Metadata|/Subtype\s*/(?:XML|Type1C|CIDFontType0C|OpenType)"
    r"|/FontFile\d?|/Length[123]\b"
)

PRINTABLE_MIN, PRINTABLE_MAX = 32, 126
MIN_CHUNK_LENGTH = 5


# ---------------------------------------------------------------------------
# Shared predicates
# ---------------------------------------------------------------------------

def _is_artifact_token(token: str) -> bool:
    if token in OPERATORS:
        return True
    if _NUMBER_RX.fullmatch(token) or _FONT_NAME_RX.fullmatch(token):
        return True
    lowered = token.lower().lstrip("%")
    if lowered in STRUCTURAL_TERMS:
        return True
    base = _SUBSET_PREFIX_RX.sub("", token).lstrip("%").split("-")[0].split(",")[0]
    return base.lower() in STRUCTURAL_TERMS


def is_structural_artifact(text: str) -> bool:
    """True if text is made only of PDF structural vocabulary."""
    stripped = text.strip()
    lowered = stripped.lower()
    if any(marker in lowered for marker in GENERATOR_MARKERS):
        return True
    if _PDF_DATE_RX.match(stripped):
        return True
    tokens = [t for t in _TOKEN_SPLIT_RX.split(stripped) if t]
    return all(_is_artifact_token(t) for t in tokens)


def is_meaningful(text: str) -> bool:
    """Heuristic test for a fragment that reads like human text."""
    text = text.strip()
    length = len(text)
    if length < 3:
        return False
    if not _LETTER_RX.search(text):
        return False
    if is_structural_artifact(text):
        return False
    if length > 4 and _HEX_RX.fullmatch(text):
        return False
    if length > 5 and len(set(text.lower())) / length > 0.8:
        return False
    if len(_SPECIAL_CHAR_RX.findall(text)) / length > 0.3:
        return False
    if _DIGITS_RX.fullmatch(text) or _COORDINATES_RX.fullmatch(text):
        return False
    return True


def passes_artifact_filter(text: str) -> bool:
    """Filter applied to byte-scan chunks."""
    text = text.strip()
    if not text or is_structural_artifact(text):
        return False
    return not (_DIGITS_RX.fullmatch(text) or _HEX_RX.fullmatch(text))


def cleanup(text: str) -> str:
    """Strip leftover layout noise from recovered text."""
    text = _WHITESPACE_RX.sub(" ", text)
    text = _COORDINATE_RUN_RX.sub(" ", text)
    text = _FONT_REF_RX.sub(" ", text)
    text = _OPERATOR_RX.sub(" ", text)
    text = _SHORT_TOKEN_RX.sub(" ", text)
    return _WHITESPACE_RX.sub(" ", text).strip()


# ---------------------------------------------------------------------------
# Literal and stream helpers
# ---------------------------------------------------------------------------

def unescape_literal(raw: str) -> str:
    """Resolve backslash escapes inside a PDF string literal."""
    def replace(match):
        token = match.group(1)
        if token[0] in "01234567":
            return chr(int(token, 8) & 0xFF)
        if token in "\r\n":
            return ""  # line continuation
        return _ESCAPES.get(token, token)

    return _ESCAPE_RX.sub(replace, raw)


def _literals(text: str) -> list[str]:
    return [unescape_literal(raw).strip() for raw in _LITERAL_RX.findall(text)]


def _is_text_fragment(text: str) -> bool:
    return bool(_LETTER_RX.search(text)) and text.isprintable() and not is_structural_artifact(text)


def _sub_outside_literals(pattern: re.Pattern, text: str) -> str:
    parts = []
    last = 0
    for match in _LITERAL_RX.finditer(text):
        parts.append(pattern.sub(" ", text[last:match.start()]))
        parts.append(match.group(0))
        last = match.end()
    parts.append(pattern.sub(" ", text[last:]))
    return "".join(parts)


def _merge_tj_arrays(text: str) -> str:
    """Collapse ``[(Hel) -20 (lo)] TJ`` into a single ``(Hello) Tj``."""
    def merge(match):
        pieces = []
        for literal, number in _TJ_PART_RX.findall(match.group(1)):
            if literal:
                pieces.append(literal[1:-1])
            elif float(number) <= -200:
                pieces.append(" ")  # wide negative kerning separates words
        return "(" + "".join(pieces) + ") Tj"

    return _TJ_ARRAY_RX.sub(merge, text)


def _inflate(body: str) -> Optional[str]:
    raw = body.encode("latin-1")
    try:
        return zlib.decompressobj().decompress(raw).decode("latin-1")
    except zlib.error:
        return None


def _stream_header(text: str, match: re.Match, header_start: int = 0) -> str:
    """The object header and stream dictionary preceding a stream match."""
    return text[max(header_start, text.rfind("obj", header_start, match.start())):match.start()]


def _stream_body(match: re.Match, header: str) -> str:
    """Body of a stream match, inflated when its dictionary asks for it."""
    body = match.group(1)
    if "FlateDecode" in header:
        inflated = _inflate(body)
        if inflated is not None:
            return inflated
    return body


def _is_page_text_stream(header: str, body: str) -> bool:
    """False for XMP packets, CMaps and font programs."""
    if _NON_TEXT_STREAM_RX.search(header):
        return False
    return "begincmap" not in body and not body.lstrip().startswith("<?xpacket")


def _looks_like_prose(block: str) -> bool:
    return (
        is_meaningful(block)
        and not _LITERAL_RX.search(block)
        and not _TEXT_OPERATOR_RX.search(block)
    )


def _decode_hex_block(block: str) -> str:
    digits = _WHITESPACE_RX.sub("", block)
    if len(digits) % 2:
        digits += "0"
    return bytes.fromhex(digits).decode("latin-1")


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

def recover_structural_streams(data: bytes) -> str:
    """Text from stream blocks plus meaningful literals outside them."""
    text = data.decode("latin-1")
    fragments = []

    for match in _STREAM_RX.finditer(text):
        header = _stream_header(text, match)
        block = _stream_body(match, header).strip()
        if not block or not _is_page_text_stream(header, block):
            continue
        if _looks_like_prose(block):
            fragments.append(block)
        elif _HEX_BLOCK_RX.fullmatch(block):
            decoded = _decode_hex_block(block)
            if is_meaningful(decoded):
                fragments.append(decoded.strip())
        else:
            fragments.extend(lit for lit in _literals(_merge_tj_arrays(block)) if _is_text_fragment(lit))

    outside = _STREAM_RX.sub(" ", text)
    fragments.extend(lit for lit in _literals(outside) if is_meaningful(lit))

    return cleanup(" ".join(fragments))


def recover_byte_scan(data: bytes) -> str:
    """Printable ASCII runs that are not PDF structure."""
    chunks = []
    current = bytearray()

    def flush():
        chunk = current.decode("ascii").strip()
        if len(chunk) >= MIN_CHUNK_LENGTH and passes_artifact_filter(chunk):
            chunks.append(chunk)
        current.clear()

    for byte in data:
        if PRINTABLE_MIN <= byte <= PRINTABLE_MAX:
            current.append(byte)
        else:
            flush()
    flush()

    joined = " ".join(chunks)
    joined = _LITERAL_RX.sub(lambda m: " " + unescape_literal(m.group(1)) + " ", joined)
    return cleanup(joined)


def recover_content_objects(data: bytes) -> str:
    """Literals shown by the text operators of each page's content object."""
    text = data.decode("latin-1")
    fragments = []
    seen = set()

    for contents in _CONTENTS_REF_RX.finditer(text):
        for number, generation in _REF_RX.findall(contents.group(1)):
            if (number, generation) in seen:
                continue
            seen.add((number, generation))

            obj = re.search(
                rf"(?<!\d){number}\s+{generation}\s+obj\b(.*?)\bendobj", text, re.DOTALL
            )
            if not obj:
                continue
            stream = _STREAM_RX.search(text, obj.start(1), obj.end(1))
            if not stream:
                continue

            header = _stream_header(text, stream, header_start=obj.start())
            body = _stream_body(stream, header)
            if not _is_page_text_stream(header, body):
                continue
            body = _sub_outside_literals(_HEX_STRING_RX, body)
            body = _merge_tj_arrays(body)
            body = _sub_outside_literals(_OPERATOR_RX, body)
            fragments.extend(lit for lit in _literals(body) if is_meaningful(lit))

    return _WHITESPACE_RX.sub(" ", " ".join(fragments)).strip()


STRATEGIES: tuple[tuple[str, Callable[[bytes], str]], ...] = (
    ("structural-stream", recover_structural_streams),
    ("byte-scan", recover_byte_scan),
    ("content-object", recover_content_objects),
)


class ByteTextRecoverer:
    """Recovers plain text from PDF bytes without ever raising."""

    DEFAULT_MIN_CHARS = 100

    def __init__(self, min_chars: int = DEFAULT_MIN_CHARS):
        """
        Initialize the recoverer.

        Args:
            min_chars: Minimum length a strategy's output must reach to be accepted
        """
        self.min_chars = min_chars
        self.logger = logging.getLogger(self.__class__.__name__)

    def recover(self, data: bytes) -> RecoveryOutcome:
        """
        Run the strategies in order and return the first sufficient outcome.

        Returns:
            The winning outcome, or an outcome with no strategy and empty text
        """
        data = bytes(data)

        for name, strategy in STRATEGIES:
            outcome = RecoveryOutcome(strategy=name, text=self._attempt(name, strategy, data),
                                      min_chars=self.min_chars)
            self.logger.debug(f"Strategy {name}: {len(outcome.text)} chars")
            if outcome.recovered:
                self.logger.info(f"Recovered {len(outcome.text)} chars with {name} strategy")
                return outcome

        self.logger.warning(f"No text recoverable from {len(data)} byte PDF")
        return RecoveryOutcome(strategy=None, text="", min_chars=self.min_chars)

    def extract_text(self, data: bytes) -> str:
        """Recovered text, or an empty string when nothing usable was found."""
        return self.recover(data).text

    def _attempt(self, name: str, strategy: Callable[[bytes], str], data: bytes) -> str:
        try:
            return strategy(data).strip()
        except Exception as e:
            self.logger.debug(f"Strategy {name} failed: {e!r}")
            return ""
