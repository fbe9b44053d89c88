"""Skill taxonomy matching: exact lookup first, bounded fuzzy search second."""

import logging
import re
from typing import Dict, Iterable, List, Optional

from rapidfuzz import fuzz, process

from skills import CANONICAL_SKILLS, NON_CORE_SKILL_TERMS

logger = logging.getLogger(__name__)

# rapidfuzz scores are 0-100; higher is stricter.
FUZZY_SCORE_CUTOFF = 80
MIN_TOKEN_LENGTH = 2

SKILL_TOKEN_RE = re.compile(r"\b[A-Za-z0-9.#+]+")

_CANONICAL_BY_LOWER: Dict[str, str] = {}
for _skill in CANONICAL_SKILLS:
    _CANONICAL_BY_LOWER.setdefault(_skill.lower(), _skill)
_CANONICAL_LOWER = tuple(_CANONICAL_BY_LOWER)


def _capitalize_first(token: str) -> str:
    return token[:1].upper() + token[1:]


def match_canonical(token: str) -> Optional[str]:
    """Return the canonical skill for ``token`` or ``None`` when nothing clears the cutoff."""
    lowered = token.lower()
    direct = _CANONICAL_BY_LOWER.get(lowered)
    if direct:
        return direct

    best = process.extractOne(
        lowered,
        _CANONICAL_LOWER,
        scorer=fuzz.ratio,
        score_cutoff=FUZZY_SCORE_CUTOFF,
    )
    if best is None:
        return None
    choice, score, _ = best
    logger.debug("Fuzzy skill match %r -> %r (score=%.1f)", token, choice, score)
    return _CANONICAL_BY_LOWER[choice]


def normalize_skills(tokens: Optional[Iterable[object]]) -> List[str]:
    """Map raw skill tokens onto the canonical taxonomy.

    Each usable token (a string of at least two characters once trimmed)
    resolves to exactly one entry: the case-insensitive canonical match, else
    the best fuzzy match above ``FUZZY_SCORE_CUTOFF``, else the token itself
    with its first letter capitalised. The result keeps first-seen order and
    never holds two entries that differ only by case.
    """
    if not tokens:
        return []

    normalized: List[str] = []
    seen = set()
    for raw in tokens:
        if not isinstance(raw, str):
            continue
        token = raw.strip()
        if len(token) < MIN_TOKEN_LENGTH:
            continue

        resolved = match_canonical(token) or _capitalize_first(token)
        key = resolved.lower()
        if key in seen:
            continue
        seen.add(key)
        normalized.append(resolved)
    return normalized


def extract_skill_tokens(text: str) -> List[str]:
    """Candidate skill tokens from a skills section (or any free text)."""
    if not text:
        return []
    tokens = []
    for match in SKILL_TOKEN_RE.finditer(text):
        token = match.group(0).rstrip(".")
        if token:
            tokens.append(token)
    return tokens


def is_core_skill(skill: object) -> bool:
    return str(skill or "").strip().lower() not in NON_CORE_SKILL_TERMS


def filter_core_skills(skills: Iterable[str]) -> List[str]:
    return [skill for skill in skills if is_core_skill(skill)]
