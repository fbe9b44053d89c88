"""Rule-based, JD-aware certification recommendations."""

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set

from skills import CERT_MAP, LEVEL_FOUNDATIONAL

logger = logging.getLogger(__name__)

MAX_CERTIFICATIONS = 5
FOUNDATIONAL_SKILL_LIMIT = 5

PRIORITY_FOUNDATIONAL = 1
PRIORITY_VALIDATION = 2
PRIORITY_GAP = 3


@dataclass(frozen=True)
class CertificationRecord:
    certification: str
    reason: str
    priority: int

    def to_dict(self) -> Dict[str, str]:
        # priority only orders the list, callers never see it
        return {"certification": self.certification, "reason": self.reason}


def _tokenize(text: str) -> Set[str]:
    return {token for token in re.split(r"\W+", (text or "").lower()) if token}


def _add(recommendations: Dict[str, CertificationRecord], record: CertificationRecord) -> None:
    existing = recommendations.get(record.certification)
    if existing is None or existing.priority < record.priority:
        recommendations[record.certification] = record


def rank_certifications(
    normalized_skills: Optional[Iterable[str]],
    job_description: Optional[str],
) -> List[CertificationRecord]:
    """Run the gap, validation and foundational passes and rank the result."""
    # dict keeps first-seen order for the validation pass
    ordered_skills = list(dict.fromkeys(
        str(skill).strip().lower() for skill in normalized_skills or () if str(skill).strip()
    ))
    resume_skills = set(ordered_skills)
    jd_tokens = _tokenize(job_description or "")
    if not resume_skills and not jd_tokens:
        return []
    recommendations: Dict[str, CertificationRecord] = {}

    # 1. Skill gaps demanded by the job description
    for skill, meta in CERT_MAP.items():
        if skill in jd_tokens and skill not in resume_skills:
            for cert in meta["certs"]:
                _add(recommendations, CertificationRecord(
                    certification=cert,
                    reason=(
                        f"Recommended because '{skill}' is required in the job description "
                        "but missing from your resume."
                    ),
                    priority=PRIORITY_GAP,
                ))

    # 2. Existing skills that a certification would validate
    for skill in ordered_skills:
        meta = CERT_MAP.get(skill)
        if not meta:
            continue
        for cert in meta["certs"]:
            _add(recommendations, CertificationRecord(
                certification=cert,
                reason=f"Recommended to formally validate your existing '{skill}' skill.",
                priority=PRIORITY_VALIDATION,
            ))

    # 3. Foundational coverage for thin profiles
    if len(resume_skills) <= FOUNDATIONAL_SKILL_LIMIT:
        for skill, meta in CERT_MAP.items():
            if meta["level"] != LEVEL_FOUNDATIONAL or skill in resume_skills:
                continue
            for cert in meta["certs"]:
                _add(recommendations, CertificationRecord(
                    certification=cert,
                    reason="Recommended as a foundational certification to strengthen your profile.",
                    priority=PRIORITY_FOUNDATIONAL,
                ))

    ranked = sorted(recommendations.values(), key=lambda record: -record.priority)
    return ranked[:MAX_CERTIFICATIONS]


def recommend_certifications(
    normalized_skills: Optional[Iterable[str]],
    job_description: Optional[str],
) -> List[Dict[str, str]]:
    """Up to five ``{certification, reason}`` pairs, highest priority first."""
    records = rank_certifications(normalized_skills, job_description)
    logger.debug("Recommended %d certifications", len(records))
    return [record.to_dict() for record in records]
