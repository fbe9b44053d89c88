"""Conservative, rule-based resume checks that feed the rule score.

Each check returns plain issue/suggestion lists. Issues cost points in the
rule score, suggestions are advisory only.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from sections import EMAIL_RE, ExperienceBlock, ResumeSections, find_phones

REQUIRED_SECTIONS = ("experience", "education", "skills")

ACTION_VERBS = {
    "achieved", "architected", "automated", "built", "created", "delivered", "designed",
    "developed", "drove", "engineered", "improved", "implemented", "increased", "launched",
    "led", "managed", "mentored", "migrated", "optimized", "reduced", "refactored",
    "resolved", "scaled", "shipped", "spearheaded", "streamlined",
}
WEAK_PHRASES = ("responsible for", "duties included", "worked on", "helped with", "tasked with")
QUANTIFIED_RE = re.compile(r"\d+(?:\.\d+)?\s*(?:%|percent|x\b|k\b|m\b|\+)|[$€£]\s?\d", re.IGNORECASE)
FIRST_PERSON_RE = re.compile(r"\b(?:i|me|my)\b", re.IGNORECASE)
BULLET_RE = re.compile(r"^[-•*●➢➤]")

MIN_ACTION_VERBS = 3
MIN_BLOCK_DESCRIPTION = 40
FIRST_PERSON_LIMIT = 5


@dataclass
class FormattingAnalysis:
    formatting_issues: List[str] = field(default_factory=list)
    formatting_suggestions: List[str] = field(default_factory=list)


@dataclass
class ContentAnalysis:
    content_issues: List[str] = field(default_factory=list)
    content_suggestions: List[str] = field(default_factory=list)


@dataclass
class SeniorityAnalysis:
    seniority_alignment: str = "Unknown"
    detected_level: str = "Fresher"
    required_level: str = "Unspecified"
    seniority_suggestions: List[str] = field(default_factory=list)


def check_formatting(resume_text: Optional[str], sections: Optional[ResumeSections]) -> FormattingAnalysis:
    analysis = FormattingAnalysis()
    text = resume_text or ""
    sections = sections or ResumeSections()
    lines = [line.strip() for line in text.splitlines() if line.strip()]

    missing = [name for name in REQUIRED_SECTIONS if not getattr(sections, name, "").strip()]
    if missing:
        analysis.formatting_issues.append(
            "Missing standard section headers: " + ", ".join(name.capitalize() for name in missing)
        )
        analysis.formatting_suggestions.append(
            "Use clear, standard section headers such as: Experience, Education, Skills."
        )

    word_count = len(text.split())
    if word_count < 200:
        analysis.formatting_suggestions.append(
            "Resume appears very brief. Consider adding more detail to better explain your experience."
        )
    elif word_count > 1500:
        analysis.formatting_suggestions.append(
            "Resume appears long. Consider shortening it for better recruiter readability."
        )

    bullet_like = sum(1 for line in lines if BULLET_RE.match(line) or len(line) < 120)
    if len(lines) > 20 and bullet_like / len(lines) < 0.25:
        analysis.formatting_suggestions.append(
            "Large blocks of text detected. Breaking content into bullet points may improve readability."
        )

    if not EMAIL_RE.search(text):
        analysis.formatting_issues.append("No email address detected.")
        analysis.formatting_suggestions.append("Include a clearly visible email address.")
    if not find_phones(text):
        analysis.formatting_issues.append("No phone number detected.")
        analysis.formatting_suggestions.append("Include a phone number with country code if applicable.")

    if "|" in text:
        analysis.formatting_suggestions.append(
            "Avoid complex table-like layouts. ATS systems parse plain text more reliably."
        )
    if "\t" in text:
        analysis.formatting_suggestions.append(
            "Avoid excessive tab usage; use simple spacing for better ATS parsing."
        )
    return analysis


def analyze_content_quality(
    resume_text: Optional[str],
    blocks: Optional[Sequence[ExperienceBlock]] = None,
) -> ContentAnalysis:
    analysis = ContentAnalysis()
    text = resume_text or ""
    if not text.strip():
        analysis.content_issues.append("Resume has no readable content.")
        analysis.content_suggestions.append("Provide a text-based resume so its content can be evaluated.")
        return analysis

    lowered = text.lower()
    words = re.findall(r"[a-z]+", lowered)
    verbs_used = {word for word in words if word in ACTION_VERBS}
    if len(verbs_used) < MIN_ACTION_VERBS:
        analysis.content_issues.append("Few strong action verbs detected.")
        analysis.content_suggestions.append(
            "Start bullet points with action verbs such as 'Built', 'Led' or 'Optimized'."
        )

    if not QUANTIFIED_RE.search(text):
        analysis.content_issues.append("No quantified achievements found.")
        analysis.content_suggestions.append(
            "Quantify impact with numbers, percentages or amounts (e.g. 'reduced latency by 40%')."
        )

    weak = [phrase for phrase in WEAK_PHRASES if phrase in lowered]
    if weak:
        analysis.content_issues.append("Passive phrasing detected: " + ", ".join(f"'{p}'" for p in weak))
        analysis.content_suggestions.append(
            "Replace passive phrases with what you delivered and the outcome it produced."
        )

    if len(FIRST_PERSON_RE.findall(text)) > FIRST_PERSON_LIMIT:
        analysis.content_suggestions.append("Avoid first-person pronouns; write bullet points in implied first person.")

    thin_blocks = [block for block in blocks or () if len(block.description.strip()) < MIN_BLOCK_DESCRIPTION]
    if thin_blocks:
        analysis.content_issues.append(
            f"{len(thin_blocks)} experience entr{'y has' if len(thin_blocks) == 1 else 'ies have'} little or no description."
        )
        analysis.content_suggestions.append(
            "Add two to four bullet points per role describing responsibilities and results."
        )
    return analysis


# --- Seniority ------------------------------------------------------------------

LEVELS = ("Fresher", "Junior", "Mid", "Senior", "Lead")
JD_LEVEL_HINTS = (
    ("Lead", re.compile(r"\b(?:lead|principal|staff|architect|head of)\b", re.IGNORECASE)),
    ("Senior", re.compile(r"\b(?:senior|sr\.?)\b", re.IGNORECASE)),
    ("Junior", re.compile(r"\b(?:junior|jr\.?|entry[- ]level|graduate)\b", re.IGNORECASE)),
    ("Fresher", re.compile(r"\b(?:intern|internship|fresher|trainee)\b", re.IGNORECASE)),
)
JD_YEARS_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(?:\+|plus)?\s*(?:years?|yrs?)", re.IGNORECASE)


def level_for_years(years: float) -> str:
    if years < 1:
        return "Fresher"
    if years < 2:
        return "Junior"
    if years < 5:
        return "Mid"
    return "Senior"


def required_level(jd_text: str) -> Optional[str]:
    for level, pattern in JD_LEVEL_HINTS:
        if pattern.search(jd_text):
            return level
    years = [float(value) for value in JD_YEARS_RE.findall(jd_text)]
    if years:
        return level_for_years(max(years))
    return None


def check_seniority(total_years: float, jd_text: Optional[str]) -> SeniorityAnalysis:
    detected = level_for_years(max(0.0, total_years or 0.0))
    analysis = SeniorityAnalysis(detected_level=detected)
    required = required_level(jd_text or "")
    if required is None:
        analysis.seniority_alignment = "Unspecified"
        return analysis

    analysis.required_level = required
    gap = LEVELS.index(required) - LEVELS.index(detected)
    if -1 <= gap <= 0:
        analysis.seniority_alignment = "Aligned"
    elif gap > 0:
        analysis.seniority_alignment = "Under-qualified"
        analysis.seniority_suggestions.append(
            f"The role targets {required} level; highlight leadership, ownership and scope "
            "to close the experience gap."
        )
    else:
        analysis.seniority_alignment = "Over-qualified"
        analysis.seniority_suggestions.append(
            f"The role targets {required} level; tailor the resume to the responsibilities of this role "
            "rather than your most senior achievements."
        )
    return analysis
