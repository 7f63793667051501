"""
Core data models for document analysis and skill matching.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import Optional

from .exceptions import UnsupportedFormat


class DocumentFormat(Enum):
    """Declared format of an uploaded document."""
    PLAIN_TEXT = "txt"
    RICH_TEXT = "docx"
    PAGE_DESCRIPTION = "pdf"

    @classmethod
    def from_filename(cls, filename: str) -> "DocumentFormat":
        """Map a filename's extension to a format, case-insensitively."""
        extension = PurePath(filename).suffix.lower().lstrip(".")
        for fmt in cls:
            if fmt.value == extension:
                return fmt
        raise UnsupportedFormat(filename, extension or None)


class RecoveryQuality(Enum):
    """How much confidence there is in extracted text."""
    FULL = "full"
    PARTIAL = "partial"
    EMPTY = "empty"


class ExtractionAdvisory(Enum):
    """User-facing outcome of extracting skills from an uploaded document."""
    OK = "ok"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass(frozen=True)
class RawDocument:
    """An uploaded document as handed over by the caller."""
    data: bytes
    declared_format: DocumentFormat
    filename: str

    @classmethod
    def from_upload(cls, data: bytes, filename: str) -> "RawDocument":
        return cls(data=data, declared_format=DocumentFormat.from_filename(filename), filename=filename)


@dataclass(frozen=True)
class ExtractedText:
    """Text recovered from a document."""
    text: str
    recovery_quality: RecoveryQuality
    strategy: Optional[str] = None  # recovery strategy that produced the text, if any

    @property
    def is_empty(self) -> bool:
        return self.recovery_quality is RecoveryQuality.EMPTY

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "recovery_quality": self.recovery_quality.value,
            "strategy": self.strategy,
        }


@dataclass(frozen=True)
class SkillMatch:
    """Whether one required skill was found in the candidate's skill set."""
    skill: str
    found_in_candidate: bool

    def to_dict(self) -> dict:
        return {
            "skill": self.skill,
            "found_in_candidate": self.found_in_candidate,
        }


@dataclass(frozen=True)
class MatchReport:
    """Scoring breakdown for one requirement set against one candidate set."""
    requirement_set_id: Optional[str] = None
    candidate_set_id: Optional[str] = None
    match_score_percent: int = 0  # 0-100, direct matches only
    skill_matches: tuple[SkillMatch, ...] = ()
    skill_gaps: tuple[str, ...] = ()

    # Auxiliary relevance data; never part of match_score_percent
    bonus_skills: tuple[str, ...] = ()
    relevance_bonus: float = 0.0

    @property
    def matched_skills(self) -> list[str]:
        return [m.skill for m in self.skill_matches if m.found_in_candidate]

    def to_dict(self) -> dict:
        return {
            "requirement_set_id": self.requirement_set_id,
            "candidate_set_id": self.candidate_set_id,
            "match_score_percent": self.match_score_percent,
            "skill_matches": [m.to_dict() for m in self.skill_matches],
            "skill_gaps": list(self.skill_gaps),
            "bonus_skills": list(self.bonus_skills),
        }


@dataclass(frozen=True)
class AnalyzedDocument:
    """A document after text and skill extraction."""
    document_id: str
    filename: str
    extracted: ExtractedText
    skills: tuple[str, ...] = ()
    advisory: ExtractionAdvisory = ExtractionAdvisory.OK

    @property
    def text(self) -> str:
        return self.extracted.text

    def to_dict(self) -> dict:
        return {
            "document_id": self.document_id,
            "filename": self.filename,
            "recovery_quality": self.extracted.recovery_quality.value,
            "strategy": self.extracted.strategy,
            "skills": list(self.skills),
            "advisory": self.advisory.value,
        }


@dataclass
class RecoveryOutcome:
    """Result of one PDF recovery strategy."""
    strategy: Optional[str]
    text: str = ""
    min_chars: int = 100

    @property
    def recovered(self) -> bool:
        return len(self.text) >= self.min_chars
