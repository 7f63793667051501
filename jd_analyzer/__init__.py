"""
JD Analyzer - Skill extraction and candidate matching for job descriptions

This package:
1. Recovers text from uploaded PDF, DOCX and TXT documents (PDFs best-effort)
2. Extracts a normalized set of skills from that text
3. Scores how well a candidate's skills cover a job description's requirements
4. Ranks candidates by match score
"""

__version__ = "1.0.0"
__author__ = "JD Analyzer"

from jd_analyzer.core import (
    DecodeError,
    MatchReport,
    SkillMatch,
    UnsupportedFormat,
    extract_skills,
    rank_candidates,
    score,
)
from jd_analyzer.extraction import extract_text
from jd_analyzer.core.analyzer import DocumentAnalyzer

__all__ = [
    "DecodeError",
    "DocumentAnalyzer",
    "MatchReport",
    "SkillMatch",
    "UnsupportedFormat",
    "extract_skills",
    "extract_text",
    "rank_candidates",
    "score",
]
