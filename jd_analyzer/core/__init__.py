"""Core models, skill extraction and matching."""

from .exceptions import DecodeError, JDAnalyzerError, UnsupportedFormat
from .models import (
    AnalyzedDocument,
    DocumentFormat,
    ExtractedText,
    ExtractionAdvisory,
    MatchReport,
    RawDocument,
    RecoveryQuality,
    SkillMatch,
)
from .skill_extractor import SkillExtractor, extract_skills
from .matcher import MatchingEngine, rank_candidates, score, top_candidates

__all__ = [
    "AnalyzedDocument",
    "DecodeError",
    "DocumentFormat",
    "ExtractedText",
    "ExtractionAdvisory",
    "JDAnalyzerError",
    "MatchReport",
    "MatchingEngine",
    "RawDocument",
    "RecoveryQuality",
    "SkillExtractor",
    "SkillMatch",
    "UnsupportedFormat",
    "extract_skills",
    "rank_candidates",
    "score",
    "top_candidates",
]
