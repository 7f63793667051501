"""
Document Analyzer - Runs uploaded documents through extraction, skill
extraction and matching.

A requirement document (job description) is scored against any number of
candidate documents (CVs). Scoring runs on a thread pool; every pairwise score
is independent, and reports come back in the order the candidates were given.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional
import logging
import uuid

from jd_analyzer.extraction.text_extractor import DocumentTextExtractor
from jd_analyzer.utils.config import Config
from .exceptions import JDAnalyzerError
from .matcher import MatchingEngine
from .models import (
    AnalyzedDocument,
    DocumentFormat,
    ExtractionAdvisory,
    MatchReport,
    RawDocument,
)
from .skill_extractor import SkillExtractor


class DocumentAnalyzer:
    """Extracts skills from documents and scores candidates against requirements."""

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize the analyzer.

        Args:
            config: Settings for thresholds and worker count (defaults if omitted)
        """
        self.config = config or Config()
        self.text_extractor = DocumentTextExtractor(
            min_recovered_chars=self.config.get_min_recovered_chars()
        )
        self.skill_extractor = SkillExtractor()
        self.engine = MatchingEngine()
        self.logger = logging.getLogger(self.__class__.__name__)

    def analyze_document(
        self,
        data: bytes,
        filename: str,
        document_id: Optional[str] = None,
    ) -> AnalyzedDocument:
        """
        Extract text and skills from one uploaded document.

        Raises:
            UnsupportedFormat: If the filename extension is not supported
            DecodeError: If a DOCX or TXT document is corrupt
        """
        document = RawDocument.from_upload(data, filename)
        extracted = self.text_extractor.extract_document(document)
        skills = self.skill_extractor.extract_skills(extracted.text) if not extracted.is_empty else []
        advisory = self._advisory(document.declared_format, skills)

        if advisory is not ExtractionAdvisory.OK:
            self.logger.warning(
                f"{filename}: PDF extraction {advisory.value} ({len(skills)} skills found)"
            )
        else:
            self.logger.info(f"{filename}: {len(skills)} skills extracted")

        return AnalyzedDocument(
            document_id=document_id or str(uuid.uuid4()),
            filename=filename,
            extracted=extracted,
            skills=tuple(skills),
            advisory=advisory,
        )

    def analyze_documents(
        self,
        uploads: Iterable[tuple[bytes, str]],
    ) -> tuple[list[AnalyzedDocument], dict[str, JDAnalyzerError]]:
        """
        Analyze several uploads; a failing document does not stop the others.

        Returns:
            The analyzed documents in input order, and the errors keyed by filename
        """
        documents = []
        failures = {}

        for data, filename in uploads:
            try:
                documents.append(self.analyze_document(data, filename))
            except JDAnalyzerError as e:
                self.logger.error(f"Skipping {filename}: {e}")
                failures[filename] = e

        return documents, failures

    def match(
        self,
        requirement: AnalyzedDocument,
        candidates: list[AnalyzedDocument],
    ) -> list[MatchReport]:
        """
        Score every candidate against the requirement document.

        Returns:
            One report per candidate, in the candidates' order
        """
        if not candidates:
            raise ValueError("No candidate documents to match")

        workers = max(1, min(self.config.get_max_workers(), len(candidates)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(
                    self.engine.score,
                    requirement.skills,
                    candidate.skills,
                    requirement.document_id,
                    candidate.document_id,
                )
                for candidate in candidates
            ]
            reports = [future.result() for future in futures]

        self.logger.info(f"Scored {len(reports)} candidates against {requirement.filename}")
        return reports

    def rank(
        self,
        requirement: AnalyzedDocument,
        candidates: list[AnalyzedDocument],
        top: Optional[int] = None,
    ) -> list[MatchReport]:
        """Score candidates and return them best first, optionally only the top N."""
        reports = self.match(requirement, candidates)
        if top is None:
            return self.engine.rank_candidates(reports)
        return self.engine.top_candidates(reports, top)

    def _advisory(self, fmt: DocumentFormat, skills: list[str]) -> ExtractionAdvisory:
        if fmt is not DocumentFormat.PAGE_DESCRIPTION:
            return ExtractionAdvisory.OK
        if not skills:
            return ExtractionAdvisory.FAILED
        if len(skills) < self.config.get_partial_skill_threshold():
            return ExtractionAdvisory.PARTIAL
        return ExtractionAdvisory.OK
