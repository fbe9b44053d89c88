"""Rule-based scoring and final ATS score composition."""

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from keyword_density import KeywordDensity

SKILL_MATCH_MAX = 50.0
EXPERIENCE_MAX = 20.0
EXPERIENCE_POINTS_PER_YEAR = 5.0
FRESHER_SECTION_POINTS = 10.0
SECTION_MIN_LENGTH = 50
ISSUE_COMPONENT_MAX = 10.0
POINTS_PER_ISSUE = 2.0

SEMANTIC_WEIGHT = 0.4
RULE_WEIGHT = 0.6
# Flat calibration offset, applied after the weighted blend and before clamping.
SCORE_CALIBRATION_OFFSET = 20
SCORE_MIN = 0
SCORE_MAX = 100


@dataclass
class RuleScore:
    skill_match: float
    experience: float
    formatting: float
    content_quality: float

    @property
    def total(self) -> float:
        return self.skill_match + self.experience + self.formatting + self.content_quality

    def to_dict(self) -> Dict[str, float]:
        return {
            "skill_match": round(self.skill_match, 2),
            "experience": round(self.experience, 2),
            "formatting": round(self.formatting, 2),
            "content_quality": round(self.content_quality, 2),
            "total": round(self.total, 2),
        }


def skill_match_component(jd_relevant: Sequence[KeywordDensity]) -> float:
    matched = sum(1 for entry in jd_relevant if entry.resume_count > 0)
    ratio = matched / max(1, len(jd_relevant))
    return min(SKILL_MATCH_MAX, ratio * SKILL_MATCH_MAX)


def experience_component(
    experience_years: float,
    has_substantial_projects: bool,
    has_substantial_education: bool,
) -> float:
    if experience_years and experience_years > 0:
        return min(EXPERIENCE_MAX, experience_years * EXPERIENCE_POINTS_PER_YEAR)
    # fresher path: projects and education stand in for work history
    points = 0.0
    if has_substantial_projects:
        points += FRESHER_SECTION_POINTS
    if has_substantial_education:
        points += FRESHER_SECTION_POINTS
    return points


def issue_component(issue_count: int) -> float:
    if issue_count <= 0:
        return ISSUE_COMPONENT_MAX
    return max(0.0, ISSUE_COMPONENT_MAX - POINTS_PER_ISSUE * issue_count)


def is_substantial_section(text: Optional[str]) -> bool:
    return len(text or "") > SECTION_MIN_LENGTH


def score_rules(
    jd_relevant: Sequence[KeywordDensity],
    experience_years: float,
    formatting_issues: Sequence[str],
    content_issues: Sequence[str],
    has_substantial_projects: bool,
    has_substantial_education: bool,
) -> RuleScore:
    """Combine the four bounded components. The sum is clamped later, by ``compose_score``."""
    return RuleScore(
        skill_match=skill_match_component(jd_relevant),
        experience=experience_component(
            experience_years, has_substantial_projects, has_substantial_education
        ),
        formatting=issue_component(len(formatting_issues)),
        content_quality=issue_component(len(content_issues)),
    )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compose_score(rule_score: float, semantic_score: float) -> int:
    """Blend semantic and rule scores into the final ATS score in [0, 100]."""
    try:
        blended = float(semantic_score) * SEMANTIC_WEIGHT + float(rule_score) * RULE_WEIGHT
    except (TypeError, ValueError):
        blended = 0.0
    if math.isnan(blended):
        blended = 0.0
    if math.isinf(blended):
        return SCORE_MAX if blended > 0 else SCORE_MIN
    score = _round_half_up(blended) + SCORE_CALIBRATION_OFFSET
    return max(SCORE_MIN, min(SCORE_MAX, score))


def clean_text_list(items: Optional[Iterable[object]]) -> List[str]:
    """Non-empty trimmed strings only, in order."""
    output: List[str] = []
    for item in items or ():
        if isinstance(item, str):
            stripped = item.strip()
            if stripped:
                output.append(stripped)
    return output


def unique_trimmed(items: Iterable[object], limit: Optional[int] = None) -> List[str]:
    seen = set()
    result: List[str] = []
    for item in clean_text_list(items):
        if item.lower() in seen:
            continue
        seen.add(item.lower())
        result.append(item)
        if limit is not None and len(result) >= limit:
            break
    return result


def merge_suggestions(ai_items: Optional[Sequence[str]], rule_items: Sequence[str]) -> List[str]:
    """AI-provided items win when present and non-empty; rule items otherwise."""
    preferred = clean_text_list(ai_items)
    if preferred:
        return preferred
    return clean_text_list(rule_items)
