"""Default upstream collaborators: section segmentation, contact entities, experience timeline.

The scoring core only depends on the dataclasses defined here. Callers that
already have segmented or extracted data can build these objects directly.
"""

import re
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Dict, List, Optional, Tuple

# --- Section segmentation ------------------------------------------------------

SECTION_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "experience": (
        "professional experience",
        "work experience",
        "employment history",
        "work history",
        "career history",
        "relevant experience",
        "experience",
    ),
    "education": (
        "education",
        "academic background",
        "academic qualifications",
        "education history",
    ),
    "skills": (
        "technical skills",
        "core skills",
        "skills",
        "competencies",
        "proficiencies",
    ),
    "projects": (
        "personal projects",
        "academic projects",
        "selected projects",
        "project highlights",
        "projects",
    ),
}


@dataclass
class ResumeSections:
    experience: str = ""
    education: str = ""
    skills: str = ""
    projects: str = ""

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def split_resume_into_sections(resume_text: Optional[str]) -> ResumeSections:
    """Split resume text into the four sections the scorer looks at.

    A heading is a line that starts with one of the known keywords and is
    short enough to be a title. Text up to the next heading belongs to it.
    """
    sections = ResumeSections()
    if not resume_text:
        return sections

    lines = resume_text.splitlines()
    current: Optional[str] = None
    collected: Dict[str, List[str]] = {name: [] for name in SECTION_KEYWORDS}

    for line in lines:
        heading, inline = _match_heading(line)
        if heading is not None:
            current = heading
            if inline:
                collected[current].append(inline)
            continue
        if current is not None:
            collected[current].append(line)

    for name, chunk in collected.items():
        setattr(sections, name, "\n".join(chunk).strip())
    return sections


def _match_heading(line: str) -> Tuple[Optional[str], str]:
    """Return ``(section_name, inline_content)`` for heading lines.

    "Skills: Python, AWS" is a heading with inline content; "Experience with
    Python" is body text.
    """
    stripped = line.strip().strip("#*=").strip()
    if not stripped:
        return None, ""
    for clean_name, keywords in SECTION_KEYWORDS.items():
        for keyword in keywords:
            match = re.match(
                rf"^{re.escape(keyword)}\b\s*(?P<colon>:)?\s*(?P<rest>.*)$", stripped, re.IGNORECASE
            )
            if not match:
                continue
            rest = match.group("rest").strip()
            if match.group("colon"):
                return clean_name, rest
            if not rest and len(stripped) <= 40:
                return clean_name, ""
    return None, ""


# --- Contact entities ------------------------------------------------------------

EMAIL_RE = re.compile(r"\b[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}\b")
PHONE_RE = re.compile(r"(?<!\w)(?:\+?\d{1,3}[\s-]?)?(?:\(?\d{2,4}\)?[\s-]?)?\d{3,4}[\s-]?\d{3,4}\b")
# compact year ranges ("2019-2021") have the same shape as a local number
YEAR_RANGE_RE = re.compile(r"^(?:19|20)\d{2}(?:\s*[-\u2013]\s*|\s+)(?:19|20)\d{2}$")
MIN_PHONE_DIGITS = 7


@dataclass
class ResumeEntities:
    emails: List[str] = field(default_factory=list)
    phones: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[str]]:
        return asdict(self)


def _unique(values: List[str]) -> List[str]:
    seen = set()
    output = []
    for value in values:
        cleaned = value.strip()
        if cleaned and cleaned not in seen:
            seen.add(cleaned)
            output.append(cleaned)
    return output


def find_phones(text: Optional[str]) -> List[str]:
    return [
        phone for phone in _unique(PHONE_RE.findall(text or ""))
        if len(re.sub(r"\D", "", phone)) >= MIN_PHONE_DIGITS and not YEAR_RANGE_RE.match(phone)
    ]


def extract_entities(resume_text: Optional[str]) -> ResumeEntities:
    if not resume_text:
        return ResumeEntities()
    emails = _unique(EMAIL_RE.findall(resume_text))
    return ResumeEntities(emails=emails, phones=find_phones(resume_text))


# --- Experience timeline -------------------------------------------------------

MONTH_LOOKUP: Dict[str, int] = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

MONTH_PATTERN = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?|Jul(?:y)?|"
    r"Aug(?:ust)?|Sep(?:t|tember)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)"
)
SEPARATOR_PATTERN = r"\s*(?:[-\u2010-\u2015\u2212]+|to|till|until)\s*"
PRESENT_PATTERN = r"(?:Present|Current|Now|Today|Till\s*Date)"

DATE_RANGE_RE = re.compile(
    rf"(?:(?P<start_month>{MONTH_PATTERN})\.?\s+)?(?P<start_year>(?:19|20)\d{{2}}){SEPARATOR_PATTERN}"
    rf"(?:(?:(?P<end_month>{MONTH_PATTERN})\.?\s+)?(?P<end_year>(?:19|20)\d{{2}})|(?P<end_marker>{PRESENT_PATTERN}))",
    re.IGNORECASE,
)


@dataclass
class ExperienceBlock:
    title: str
    start: str
    end: str
    duration_months: int
    description: str = ""

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass
class ExperienceData:
    total_experience_years: float = 0.0
    blocks: List[ExperienceBlock] = field(default_factory=list)


def _month_index(year: int, month: int) -> int:
    return year * 12 + (month - 1)


def _month_value(token: Optional[str], default: int) -> int:
    if not token:
        return default
    return MONTH_LOOKUP.get(token[:3].lower(), default)


def _total_months(intervals: List[Tuple[int, int]]) -> int:
    """Union of inclusive month intervals, so overlapping roles count once."""
    total = 0
    current_start: Optional[int] = None
    current_end: Optional[int] = None
    for start, end in sorted(intervals):
        if current_start is None:
            current_start, current_end = start, end
        elif start <= current_end + 1:
            current_end = max(current_end, end)
        else:
            total += current_end - current_start + 1
            current_start, current_end = start, end
    if current_start is not None:
        total += current_end - current_start + 1
    return total


def extract_experience(section_text: Optional[str], today: Optional[date] = None) -> ExperienceData:
    """Find date ranges and turn them into experience blocks and total years."""
    if not section_text:
        return ExperienceData()

    today = today or date.today()
    lines = section_text.splitlines()
    blocks: List[ExperienceBlock] = []
    intervals: List[Tuple[int, int]] = []
    range_lines = []

    for idx, line in enumerate(lines):
        match = DATE_RANGE_RE.search(line)
        if match:
            range_lines.append((idx, match))

    for position, (idx, match) in enumerate(range_lines):
        start_year = int(match.group("start_year"))
        start_month = _month_value(match.group("start_month"), 1)
        if match.group("end_marker"):
            end_year, end_month = today.year, today.month
            end_label = "Present"
        else:
            end_year = int(match.group("end_year"))
            end_month = _month_value(match.group("end_month"), 12)
            end_label = f"{end_year:04d}-{end_month:02d}"

        start_index = _month_index(start_year, start_month)
        end_index = _month_index(end_year, end_month)
        if end_index < start_index:
            continue

        title = _line_without_range(lines[idx], match) or (lines[idx - 1].strip() if idx > 0 else "")
        next_idx = range_lines[position + 1][0] if position + 1 < len(range_lines) else len(lines)
        description = "\n".join(l.strip() for l in lines[idx + 1:next_idx] if l.strip())

        intervals.append((start_index, end_index))
        blocks.append(
            ExperienceBlock(
                title=title,
                start=f"{start_year:04d}-{start_month:02d}",
                end=end_label,
                duration_months=end_index - start_index + 1,
                description=description,
            )
        )

    years = round(_total_months(intervals) / 12.0, 1)
    return ExperienceData(total_experience_years=years, blocks=blocks)


def _line_without_range(line: str, match: re.Match) -> str:
    remainder = (line[: match.start()] + line[match.end():]).strip()
    return remainder.strip(" |,-–—()")
