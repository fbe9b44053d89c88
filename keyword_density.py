"""Job-description keyword emphasis versus resume coverage."""

import logging
from collections import Counter
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, List, Tuple

import spacy
from spacy.matcher import PhraseMatcher
from spacy.util import filter_spans

from skill_matcher import is_core_skill
from skills import CASE_SENSITIVE_TERMS, build_phrase_table

logger = logging.getLogger(__name__)

MAX_KEYWORD_SUGGESTIONS = 5


@dataclass
class KeywordDensity:
    keyword: str
    jd_count: int
    resume_count: int
    density: float

    def to_dict(self) -> Dict[str, object]:
        return {
            "keyword": self.keyword,
            "jd_count": self.jd_count,
            "resume_count": self.resume_count,
            "density": self.density,
        }


@dataclass
class CoverageSignal:
    matched_keywords: List[str] = field(default_factory=list)
    missing_keywords: List[str] = field(default_factory=list)
    jd_skill_density: List[KeywordDensity] = field(default_factory=list)
    keyword_suggestions: List[str] = field(default_factory=list)

    def relevant_density(self) -> List[KeywordDensity]:
        """Density entries that count towards the skill-match ratio."""
        return [entry for entry in self.jd_skill_density if is_core_skill(entry.keyword)]


@lru_cache(maxsize=1)
def _load_spacy_model():
    """Tokenizer-only English pipeline, loaded once per process."""
    return spacy.blank("en")


@lru_cache(maxsize=1)
def _ensure_skill_matchers() -> Tuple[PhraseMatcher, PhraseMatcher]:
    nlp = _load_spacy_model()
    lower_matcher = PhraseMatcher(nlp.vocab, attr="LOWER")
    exact_matcher = PhraseMatcher(nlp.vocab, attr="ORTH")
    for official_name, spellings in build_phrase_table().items():
        lower_patterns = [nlp.make_doc(s) for s in spellings if s not in CASE_SENSITIVE_TERMS]
        exact_patterns = [nlp.make_doc(s) for s in spellings if s in CASE_SENSITIVE_TERMS]
        if lower_patterns:
            lower_matcher.add(official_name, lower_patterns)
        if exact_patterns:
            exact_matcher.add(official_name, exact_patterns)
    return lower_matcher, exact_matcher


def count_skill_mentions(text: str) -> Tuple[Counter, int]:
    """Count canonical skill mentions in ``text``.

    Overlapping matches keep the longest span, so "AWS Lambda" is not also
    counted as "AWS". Returns the counter and the number of word tokens.
    """
    if not text or not text.strip():
        return Counter(), 0

    nlp = _load_spacy_model()
    lower_matcher, exact_matcher = _ensure_skill_matchers()
    doc = nlp(text)
    spans = list(lower_matcher(doc, as_spans=True)) + list(exact_matcher(doc, as_spans=True))
    counts = Counter(span.label_ for span in filter_spans(spans))
    word_tokens = sum(1 for token in doc if not (token.is_punct or token.is_space))
    return counts, word_tokens


def _keyword_suggestion(entry: KeywordDensity) -> str:
    times = "time" if entry.jd_count == 1 else "times"
    return (
        f"Add '{entry.keyword}' to your resume if you have hands-on experience with it "
        f"(mentioned {entry.jd_count} {times} in the job description)."
    )


def analyze_keyword_density(resume_text: str = "", jd_text: str = "") -> CoverageSignal:
    """Compare job-description keyword emphasis against resume coverage."""
    signal = CoverageSignal()
    jd_counts, jd_tokens = count_skill_mentions(jd_text or "")
    if not jd_counts:
        return signal

    resume_counts, _ = count_skill_mentions(resume_text or "")
    ranked = sorted(jd_counts.items(), key=lambda item: (-item[1], item[0].lower()))
    for keyword, jd_count in ranked:
        signal.jd_skill_density.append(
            KeywordDensity(
                keyword=keyword,
                jd_count=jd_count,
                resume_count=resume_counts.get(keyword, 0),
                density=round(jd_count / max(1, jd_tokens), 4),
            )
        )

    for entry in signal.jd_skill_density:
        if entry.resume_count > 0:
            signal.matched_keywords.append(entry.keyword)
        elif is_core_skill(entry.keyword):
            signal.missing_keywords.append(entry.keyword)

    missing_entries = [e for e in signal.jd_skill_density if e.keyword in signal.missing_keywords]
    signal.keyword_suggestions = [
        _keyword_suggestion(entry) for entry in missing_entries[:MAX_KEYWORD_SUGGESTIONS]
    ]
    logger.debug(
        "Keyword coverage: %d JD keywords, %d matched, %d missing",
        len(signal.jd_skill_density),
        len(signal.matched_keywords),
        len(signal.missing_keywords),
    )
    return signal
