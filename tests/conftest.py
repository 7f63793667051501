"""
Shared fixtures: in-memory PDF and DOCX documents.
"""

from io import BytesIO
import zlib

import pytest
from docx import Document


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_stream_object(body, entries="", compress=False) -> bytes:
    """Body of a stream object; `entries` are extra stream dictionary keys."""
    stream = body.encode("latin-1") if isinstance(body, str) else body
    keys = f" {entries}" if entries else ""
    if compress:
        stream = zlib.compress(stream)
        keys += " /Filter /FlateDecode"
    header = f"<< /Length {len(stream)}{keys} >>".encode("ascii")
    return header + b"\nstream\n" + stream + b"\nendstream"


def build_pdf(lines=(), content=None, compress=False, extra_objects=()) -> bytes:
    """Build a one-page PDF whose content stream shows `lines` (or raw `content`)."""
    if content is None:
        ops = ["BT", "/F1 12 Tf", "72 720 Td"]
        for line in lines:
            ops.append(f"({_escape(line)}) Tj")
            ops.append("0 -16 Td")
        ops.append("ET")
        content = "\n".join(ops)

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R "
        b"/Resources << /Font << /F1 5 0 R >> >> >>",
        build_stream_object(content, compress=compress),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica /Encoding /WinAnsiEncoding >>",
        b"<< /Producer (ReportLab PDF Library - www.reportlab.com) "
        b"/CreationDate (D:20240101120000+00'00') /Title (untitled) >>",
        *extra_objects,
    ]

    out = bytearray(b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n")
    for number, body in enumerate(objects, 1):
        out += f"{number} 0 obj\n".encode("ascii") + body + b"\nendobj\n"
    size = len(objects) + 1
    out += (
        f"xref\n0 {size}\n0000000000 65535 f \n"
        f"trailer\n<< /Size {size} /Root 1 0 R /Info 6 0 R >>\n"
        "startxref\n0\n%%EOF\n"
    ).encode("ascii")
    return bytes(out)


def build_docx(paragraphs=(), table_rows=None) -> bytes:
    """Build a DOCX container in memory."""
    doc = Document()
    for paragraph in paragraphs:
        doc.add_paragraph(paragraph)
    if table_rows:
        table = doc.add_table(rows=len(table_rows), cols=len(table_rows[0]))
        for r, row in enumerate(table_rows):
            for c, value in enumerate(row):
                table.cell(r, c).text = value

    buffer = BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


RESUME_LINES = (
    "Senior Python Developer with Django and PostgreSQL experience",
    "Built REST APIs on AWS using Docker and Kubernetes",
    "Led Agile teams and mentored engineers in Git workflows",
)


@pytest.fixture
def make_pdf():
    return build_pdf


@pytest.fixture
def make_stream_object():
    return build_stream_object


@pytest.fixture
def make_docx():
    return build_docx


@pytest.fixture
def resume_pdf():
    return build_pdf(RESUME_LINES)


@pytest.fixture
def compressed_resume_pdf():
    return build_pdf(RESUME_LINES, compress=True)


@pytest.fixture
def resume_lines():
    return RESUME_LINES
