"""
Tests for best-effort PDF text recovery.
"""

import pytest

from jd_analyzer import DocumentAnalyzer
from jd_analyzer.utils import Config
from jd_analyzer.extraction import pdf_recovery
from jd_analyzer.extraction.pdf_recovery import (
    ByteTextRecoverer,
    cleanup,
    is_meaningful,
    is_structural_artifact,
    passes_artifact_filter,
    recover_byte_scan,
    recover_content_objects,
    recover_structural_streams,
    unescape_literal,
)

XMP_PACKET = """<?xpacket begin="" id="W5M0MpCehiHzreSzNTczkc9d"?>
<x:xmpmeta xmlns:x="adobe:ns:meta/">
<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#">
<rdf:Description rdf:about="" xmlns:photoshop="http://ns.adobe.com/photoshop/1.0/"
 xmlns:dc="http://purl.org/dc/elements/1.1/">
<dc:title>Curriculum vitae</dc:title>
</rdf:Description>
</rdf:RDF>
</x:xmpmeta>
<?xpacket end="w"?>"""

TO_UNICODE_CMAP = """/CIDInit /ProcSet findresource begin
12 dict begin
begincmap
/CIDSystemInfo << /Registry (Adobe) /Ordering (UCS) /Supplement 0 >> def
/CMapName /Adobe-Identity-UCS def
/CMapType 2 def
1 begincodespacerange
<00> <FF>
endcodespacerange
endcmap
CMapName currentdict /CMap defineresource pop
end
end"""


class TestMeaningfulness:
    """Shared text-quality predicate."""

    @pytest.mark.parametrize("text", [
        "ab",                 # too short
        "1234",               # no letters
        "endobj",             # structural keyword
        "deadbeef",           # hex
        "abcdefgh",           # every character distinct
        "a!@#$%^&*",          # mostly punctuation
        "/Type /Page /Parent 2 0 R",
    ])
    def test_rejects_noise(self, text):
        assert not is_meaningful(text)

    @pytest.mark.parametrize("text", [
        "Senior engineer",
        "Python developer with Django experience",
        "Project management",
    ])
    def test_accepts_prose(self, text):
        assert is_meaningful(text)


class TestStructuralArtifacts:
    """Denylist of PDF structure, font and generator vocabulary."""

    @pytest.mark.parametrize("text", [
        "endobj stream xref",
        "5 0 obj",
        "/Type /Font /Subtype /Type1 /BaseFont /Helvetica-Bold",
        "ReportLab PDF Library - www.reportlab.com",
        "D:20240101120000+00'00'",
        "%PDF-1.4",
        "%%EOF",
        "0 0 612 792 re f",
    ])
    def test_artifacts(self, text):
        assert is_structural_artifact(text)

    def test_prose_is_not_an_artifact(self):
        assert not is_structural_artifact("Page layout and font design")

    def test_byte_scan_filter_rejects_numbers_and_hex(self):
        assert not passes_artifact_filter("123456")
        assert not passes_artifact_filter("CAFEBABE")
        assert passes_artifact_filter("Data analyst")


class TestCleanup:
    """Generic cleanup pass."""

    def test_strips_operators_and_font_references(self):
        result = cleanup("BT /F1 12 Tf 72 720 Td Senior Python Developer ET")
        assert "Senior Python Developer" in result
        assert "BT" not in result.split()
        assert "Tf" not in result.split()
        assert "/F1" not in result

    def test_strips_coordinate_quadruples(self):
        assert cleanup("0 0 612 792 Hello world text") == "Hello world text"

    def test_strips_short_tokens_and_collapses_whitespace(self):
        assert cleanup("an  expert \n in   Kotlin") == "expert Kotlin"


class TestUnescapeLiteral:

    def test_escaped_parentheses(self):
        assert unescape_literal(r"Lead \(contract\)") == "Lead (contract)"

    def test_octal_escape(self):
        assert unescape_literal(r"Caf\351") == "Caf\xe9"

    def test_line_continuation(self):
        assert unescape_literal("split\\\nword") == "splitword"


class TestStructuralStreamStrategy:

    def test_literals_from_content_stream(self, resume_pdf):
        text = recover_structural_streams(resume_pdf)
        assert "Senior Python Developer with Django and PostgreSQL experience" in text
        assert "Kubernetes" in text

    def test_flate_compressed_stream(self, compressed_resume_pdf):
        text = recover_structural_streams(compressed_resume_pdf)
        assert "Django and PostgreSQL" in text

    def test_metadata_is_not_recovered(self, resume_pdf):
        text = recover_structural_streams(resume_pdf)
        assert "ReportLab" not in text
        assert "Helvetica" not in text
        assert "D:2024" not in text

    def test_hex_block(self, make_pdf):
        hex_block = "Senior Python developer".encode("ascii").hex()
        text = recover_structural_streams(make_pdf(content=hex_block))
        assert "Senior Python developer" in text

    def test_prose_block_used_directly(self, make_pdf):
        prose = "Experienced project manager leading cross functional teams"
        text = recover_structural_streams(make_pdf(content=prose))
        assert prose in text

    def test_kerned_array_is_merged(self, make_pdf):
        content = "BT /F1 12 Tf 72 720 Td [(Pyth) 20 (on) -300 (Developer)] TJ ET"
        assert "Python Developer" in recover_structural_streams(make_pdf(content=content))


class TestNonTextStreams:
    """Streams that never hold page text are skipped."""

    @pytest.mark.parametrize("entries", ["/Type /Metadata /Subtype /XML", ""])
    def test_xmp_metadata(self, make_pdf, make_stream_object, resume_lines, entries):
        data = make_pdf(resume_lines, extra_objects=[make_stream_object(XMP_PACKET, entries)])

        text = recover_structural_streams(data)

        assert "Kubernetes" in text
        assert "xmpmeta" not in text
        assert "photoshop" not in text.lower()
        assert "http" not in text

    def test_compressed_to_unicode_cmap(self, make_pdf, make_stream_object, resume_lines):
        cmap = make_stream_object(TO_UNICODE_CMAP, compress=True)
        data = make_pdf(resume_lines, extra_objects=[cmap])

        text = recover_structural_streams(data)

        assert text.endswith("Git workflows")
        assert "Adobe" not in text
        assert "UCS" not in text

    def test_embedded_font_program(self, make_pdf, make_stream_object, resume_lines):
        font = make_stream_object("/Notice (Copyright Adobe Systems Incorporated) readonly def",
                                  "/Length1 120")
        data = make_pdf(resume_lines, extra_objects=[font])

        assert "Copyright" not in recover_structural_streams(data)

    def test_metadata_adds_no_skills(self, tmp_path, make_pdf, make_stream_object, resume_lines):
        xmp = make_stream_object(XMP_PACKET, "/Type /Metadata /Subtype /XML")
        data = make_pdf(resume_lines, extra_objects=[xmp])

        analyzer = DocumentAnalyzer(Config(str(tmp_path / "config.json")))
        document = analyzer.analyze_document(data, "resume.pdf")

        assert "Python" in document.skills
        assert "Photoshop" not in document.skills
        assert "http" not in document.skills


class TestByteScanStrategy:

    def test_short_runs_between_binary_bytes(self):
        data = b"\x00Go\x01Kotlin\x02This is a much longer printable run\x03"
        text = recover_byte_scan(data)
        assert "Go" not in text.split()
        assert "Kotlin" in text
        assert "much longer printable run" in text

    def test_line_breaks_end_chunks(self):
        data = b"Kotlin engineer\nAndroid platform\n"
        assert recover_byte_scan(data) == "Kotlin engineer Android platform"

    def test_structure_lines_are_filtered(self, resume_pdf):
        text = recover_byte_scan(resume_pdf)
        assert "endobj" not in text
        assert "MediaBox" not in text
        assert "Senior Python Developer" in text


class TestContentObjectStrategy:

    def test_resolves_page_contents(self, compressed_resume_pdf):
        text = recover_content_objects(compressed_resume_pdf)
        assert "Built REST APIs on AWS using Docker and Kubernetes" in text

    def test_hex_strings_are_stripped(self, make_pdf):
        content = "BT /F1 12 Tf 72 720 Td [(Pyth) 20 (on) -300 (Developer)] TJ <48656C6C6F> Tj ET"
        assert recover_content_objects(make_pdf(content=content)) == "Python Developer"

    def test_no_contents_reference(self):
        assert recover_content_objects(b"%PDF-1.4\n1 0 obj\n<< >>\nendobj\n") == ""


class TestByteTextRecoverer:

    def test_first_sufficient_strategy_wins(self, resume_pdf):
        outcome = ByteTextRecoverer().recover(resume_pdf)
        assert outcome.recovered
        assert outcome.strategy == "structural-stream"
        assert "Kubernetes" in outcome.text

    def test_falls_back_to_byte_scan(self):
        lines = [
            b"Experienced data analyst skilled in SQL and Tableau",
            b"Built dashboards for executive reporting every quarter",
            b"Automated reporting pipelines with Python and Airflow",
        ]
        data = b"%PDF-1.4\n\x00\x01\x02\n" + b"\n".join(lines) + b"\n\xff\xfe\n%%EOF\n"

        outcome = ByteTextRecoverer().recover(data)

        assert outcome.strategy == "byte-scan"
        assert "Automated reporting pipelines with Python and Airflow" in outcome.text

    @pytest.mark.parametrize("data", [
        b"endobj stream xref " * 50,
        b"endobj\nstream\nxref\n" * 50,
    ])
    def test_structural_keywords_only_yield_nothing(self, data):
        assert ByteTextRecoverer().extract_text(data) == ""

    def test_short_text_is_not_accepted(self, make_pdf):
        data = make_pdf(["Python developer"])
        outcome = ByteTextRecoverer().recover(data)
        assert not outcome.recovered
        assert outcome.strategy is None
        assert outcome.text == ""

    def test_threshold_is_configurable(self, resume_pdf):
        assert ByteTextRecoverer(min_chars=10_000).extract_text(resume_pdf) == ""
        assert ByteTextRecoverer(min_chars=10).extract_text(resume_pdf) != ""

    @pytest.mark.parametrize("data", [
        b"",
        bytes(range(256)) * 4,
        b"%PDF-1.7\nstream\n\x78\x9c\xff\xff\nendstream\n/Contents 9 0 R",
        b"(unterminated \\",
    ])
    def test_malformed_input_never_raises(self, data):
        assert isinstance(ByteTextRecoverer().extract_text(data), str)

    def test_strategy_errors_are_suppressed(self, monkeypatch, resume_pdf):
        def broken(data):
            raise RuntimeError("boom")

        monkeypatch.setattr(pdf_recovery, "STRATEGIES", (
            ("broken", broken),
            ("byte-scan", recover_byte_scan),
        ))

        outcome = ByteTextRecoverer().recover(resume_pdf)

        assert outcome.strategy == "byte-scan"
