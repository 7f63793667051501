"""
Tests for the command line interface.
"""

import json

import pytest

from jd_analyzer import cli
from jd_analyzer.utils import configure_logging


@pytest.fixture(autouse=True)
def log_levels(monkeypatch):
    levels = []
    monkeypatch.setattr(cli, "configure_logging", levels.append)
    return levels


@pytest.fixture
def config_path(tmp_path):
    return str(tmp_path / "config.json")


@pytest.fixture
def job_file(tmp_path):
    path = tmp_path / "job.txt"
    path.write_text("Skills: Python, Docker, Kubernetes")
    return str(path)


def test_skills_as_json(capsys, config_path, job_file):
    cli.main(["--config", config_path, "skills", job_file, "--json"])

    data = json.loads(capsys.readouterr().out)
    assert data["filename"] == "job.txt"
    assert data["advisory"] == "ok"
    assert {"Python", "Docker", "Kubernetes"} <= set(data["skills"])


def test_extract_to_file(tmp_path, config_path, resume_pdf, capsys):
    source = tmp_path / "resume.pdf"
    source.write_bytes(resume_pdf)
    target = tmp_path / "resume.txt"

    cli.main(["--config", config_path, "extract", str(source), "--output", str(target)])

    assert "PostgreSQL" in target.read_text(encoding="utf-8")
    assert "structural-stream" in capsys.readouterr().err


def test_match_writes_ranked_reports(tmp_path, config_path, job_file, make_docx):
    partial = tmp_path / "partial.txt"
    partial.write_text("Experienced with Python")
    full = tmp_path / "full.docx"
    full.write_bytes(make_docx(["Skills: Python, Docker, Kubernetes"]))
    skipped = tmp_path / "skipped.rtf"
    skipped.write_text("Python")
    output = tmp_path / "reports.json"

    cli.main([
        "--config", config_path, "match", "--job", job_file,
        "--cv", str(partial), "--cv", str(full), "--cv", str(skipped),
        "--output", str(output),
    ])

    reports = json.loads(output.read_text())
    assert [r["candidate_set_id"] for r in reports] == ["full.docx", "partial.txt"]
    assert reports[0]["match_score_percent"] == 100
    assert reports[0]["requirement_set_id"] == "job.txt"


def test_config_set_parses_json_values(config_path):
    cli.main(["--config", config_path, "config", "--set", "analysis.max_workers", "8"])

    with open(config_path) as f:
        assert json.load(f)["analysis"]["max_workers"] == 8


def test_verbose_flag_enables_debug(config_path, job_file, log_levels):
    cli.main(["--config", config_path, "--verbose", "skills", job_file])
    assert log_levels == ["DEBUG"]


def test_missing_file_exits_with_error(config_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--config", config_path, "skills", "does-not-exist.txt"])

    assert excinfo.value.code == 1
    assert "File not found" in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit):
        cli.main([])
    assert "usage" in capsys.readouterr().out.lower()


def test_top_zero_is_respected(tmp_path, config_path, job_file):
    cv = tmp_path / "cv.txt"
    cv.write_text("Skills: Python")
    output = tmp_path / "reports.json"

    cli.main([
        "--config", config_path, "match", "--job", job_file,
        "--cv", str(cv), "--top", "0", "--output", str(output),
    ])

    assert json.loads(output.read_text()) == []


def test_invalid_log_level_exits_with_error(monkeypatch, capsys, config_path, job_file):
    monkeypatch.setattr(cli, "configure_logging", configure_logging)
    monkeypatch.setenv("JD_ANALYZER_LOG_LEVEL", "chatty")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--config", config_path, "skills", job_file])

    assert excinfo.value.code == 1
    assert "Error: Invalid log level: CHATTY" in capsys.readouterr().out
