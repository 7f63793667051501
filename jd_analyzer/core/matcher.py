"""
Matching Engine - Scores a candidate's skill set against a requirement set.

The published score is the share of required skills the candidate has:

    match_score_percent = round(100 * direct_matches / required_skills)

Candidate skills outside the requirement set but in a topical domain the
requirements also touch earn a relevance bonus of 0.5 each. The bonus is
recorded on the report for ranking refinements and does not change the
published percentage.
"""

from types import MappingProxyType
from typing import Iterable, Optional
import logging
import math

from .models import MatchReport, SkillMatch


class MatchingEngine:
    """Scores skill sets and ranks the resulting reports."""

    BONUS_PER_SKILL = 0.5

    # Keywords per topical domain, matched as substrings of lowercase skills
    DOMAINS = MappingProxyType({
        "programming": ("javascript", "typescript", "python", "java", "c++", "c#", "go", "rust",
                        "php", "ruby"),
        "web": ("html", "css", "react", "vue", "angular", "node.js", "express", "django", "flask"),
        "database": ("sql", "mysql", "postgresql", "mongodb", "redis", "oracle"),
        "cloud": ("aws", "azure", "google cloud", "gcp", "docker", "kubernetes"),
        "devops": ("git", "ci/cd", "jenkins", "gitlab", "github", "testing"),
        "design": ("ui", "ux", "figma", "sketch", "photoshop", "adobe"),
        "management": ("project", "agile", "scrum", "leadership", "communication"),
        "data": ("data", "analytics", "machine learning", "ai", "statistics"),
    })

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def score(
        self,
        requirement_skills: Iterable[str],
        candidate_skills: Iterable[str],
        requirement_set_id: Optional[str] = None,
        candidate_set_id: Optional[str] = None,
    ) -> MatchReport:
        """
        Score a candidate skill set against a requirement skill set.

        Args:
            requirement_skills: Skills required, in display order
            candidate_skills: Skills the candidate has
            requirement_set_id: Opaque identifier of the requirement document
            candidate_set_id: Opaque identifier of the candidate document

        Returns:
            MatchReport with one SkillMatch per required skill
        """
        requirements = list(requirement_skills)
        candidates = list(candidate_skills)
        candidate_lower = {skill.lower() for skill in candidates}

        skill_matches = []
        skill_gaps = []
        for skill in requirements:
            found = skill.lower() in candidate_lower
            skill_matches.append(SkillMatch(skill=skill, found_in_candidate=found))
            if not found:
                skill_gaps.append(skill)

        bonus_skills = self._relevant_extra_skills(requirements, candidates)
        direct_matches = len(requirements) - len(skill_gaps)

        report = MatchReport(
            requirement_set_id=requirement_set_id,
            candidate_set_id=candidate_set_id,
            match_score_percent=self._percentage(direct_matches, len(requirements)),
            skill_matches=tuple(skill_matches),
            skill_gaps=tuple(skill_gaps),
            bonus_skills=tuple(bonus_skills),
            relevance_bonus=len(bonus_skills) * self.BONUS_PER_SKILL,
        )

        self.logger.debug(
            f"Scored {candidate_set_id or 'candidate'}: {direct_matches}/{len(requirements)} "
            f"direct matches, {report.relevance_bonus} bonus"
        )
        return report

    def auxiliary_score(self, report: MatchReport) -> float:
        """Direct matches plus the relevance bonus, for ranking refinements."""
        return len(report.matched_skills) + report.relevance_bonus

    def rank_candidates(self, reports: Iterable[MatchReport]) -> list[MatchReport]:
        """Sort reports by descending score; equal scores keep their input order."""
        return sorted(reports, key=lambda r: r.match_score_percent, reverse=True)

    def top_candidates(self, reports: Iterable[MatchReport], count: int = 5) -> list[MatchReport]:
        """Return the best `count` reports."""
        return self.rank_candidates(reports)[:count]

    def _percentage(self, matches: int, total: int) -> int:
        if total == 0:
            return 0
        # Half-up rounding
        return int(math.floor(100 * matches / total + 0.5))

    def _relevant_extra_skills(self, requirements: list[str], candidates: list[str]) -> list[str]:
        """Candidate skills outside the requirements that share a domain with them."""
        requirement_lower = {skill.lower() for skill in requirements}
        requirement_domains = {
            domain for skill in requirement_lower for domain in self._domains_of(skill)
        }

        return [
            skill for skill in candidates
            if skill.lower() not in requirement_lower
            and self._domains_of(skill.lower()) & requirement_domains
        ]

    def _domains_of(self, skill_lower: str) -> set[str]:
        return {
            domain for domain, keywords in self.DOMAINS.items()
            if any(keyword in skill_lower for keyword in keywords)
        }


_default_engine = MatchingEngine()


def score(
    requirement_skills: Iterable[str],
    candidate_skills: Iterable[str],
    requirement_set_id: Optional[str] = None,
    candidate_set_id: Optional[str] = None,
) -> MatchReport:
    """Score two skill sets using a shared default engine."""
    return _default_engine.score(
        requirement_skills, candidate_skills, requirement_set_id, candidate_set_id
    )


def rank_candidates(reports: Iterable[MatchReport]) -> list[MatchReport]:
    return _default_engine.rank_candidates(reports)


def top_candidates(reports: Iterable[MatchReport], count: int = 5) -> list[MatchReport]:
    return _default_engine.top_candidates(reports, count)
