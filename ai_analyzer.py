import copy
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import openai

from settings import Settings, build_client, load_settings

logger = logging.getLogger(__name__)

FALLBACK_MODELS = (
    "google/gemini-2.5-flash",
    "google/gemini-2.5-flash-lite",
    "google/gemini-2.0-flash-001",
    "google/gemini-2.0-flash-lite-001",
    "openai/gpt-4o-mini",
)

ADVANCE = "advance"
ABORT = "abort"

MODEL_UNAVAILABLE_RE = re.compile(
    r"\berror code: 404\b|\bis not found\b|\bnot supported\b|\bnot a valid model\b|\bno endpoints found\b",
    re.IGNORECASE,
)

RESUME_PROMPT_CHARS = 5000
JD_PROMPT_CHARS = 2500
CAREER_JD_PROMPT_CHARS = 2000

MAX_MISSING_SKILLS = 10
MAX_IMPROVEMENTS = 10
MAX_KEYWORD_SUGGESTIONS = 8


class ModelChainError(RuntimeError):
    """Every candidate model failed, or the chain was aborted."""

    def __init__(self, message: str, last_error: Optional[BaseException] = None):
        super().__init__(message)
        self.last_error = last_error


@dataclass
class RuleSignals:
    missing_keywords: List[str] = field(default_factory=list)
    formatting_issues: List[str] = field(default_factory=list)
    content_issues: List[str] = field(default_factory=list)
    seniority_suggestions: List[str] = field(default_factory=list)


@dataclass
class AugmentedSuggestions:
    missing_skills: List[str] = field(default_factory=list)
    areas_for_improvement: List[str] = field(default_factory=list)
    keyword_suggestions: List[str] = field(default_factory=list)


IMPROVEMENT_PROMPT_TEMPLATE = """You are an ATS resume reviewer.

Analyze the resume against the job description and return only strict JSON.

RESUME (truncated):
{resume_text}

JOB DESCRIPTION (truncated):
{jd_text}

RULE-BASED SIGNALS:
- Missing keywords detected: {missing_keywords}
- Formatting issues: {formatting_issues}
- Content issues: {content_issues}
- Seniority suggestions: {seniority_suggestions}

Return JSON with this schema:
{{
  "missingSkills": ["skill1", "skill2", "skill3", "skill4", "skill5"],
  "areasForImprovement": ["improvement1", "improvement2", "improvement3", "improvement4", "improvement5"],
  "keywordSuggestions": ["tip1", "tip2", "tip3", "tip4", "tip5"]
}}

Rules:
- missingSkills must be explicit skills demanded by the job description but absent from the resume.
- areasForImprovement must be actionable and specific.
- Keep each item concise.
- No markdown. JSON only.
"""

CAREER_PATH_PROMPT_TEMPLATE = """You are an expert career counselor. Analyze this resume and predict a realistic career path.

RESUME:
{resume_text}

JOB DESCRIPTION:
{jd_text}

RULES:
- Detect if fresher (student, intern, 0-1 years)
- For freshers: Only entry-level roles (Intern, Junior)
- For mid (2-4 years): Regular to Senior roles
- For senior (5+ years): Lead/Principal roles

Return ONLY valid JSON with this schema:
{{
  "bestFitRoles": ["role1", "role2", "role3"],
  "futureRoles": ["role1", "role2"],
  "missingCertifications": ["cert1"],
  "skillsRoadmap": [{{"skill": "skill", "priority": "High", "timeline": "2 months"}}]
}}
"""

SYSTEM_MESSAGE = "You are a meticulous resume analyst. Respond only with valid JSON matching the requested schema."

STATIC_CAREER_PATH: Dict[str, Any] = {
    "best_fit_roles": ["Software Engineer", "Full Stack Developer"],
    "future_roles": ["Senior Engineer", "Tech Lead"],
    "missing_certifications": ["AWS Certified Solutions Architect"],
    "skills_roadmap": [
        {"skill": "System Design", "priority": "High", "timeline": "3 months"},
        {"skill": "Cloud Architecture", "priority": "Medium", "timeline": "6 months"},
    ],
}


# --- Model chain -----------------------------------------------------------------

def normalize_model_name(model_name: str) -> str:
    name = str(model_name).strip()
    return name[len("models/"):] if name.startswith("models/") else name


def candidate_models(preferred: Optional[str] = None) -> List[str]:
    """Preferred model first, then the fixed fallbacks, without duplicates."""
    candidates: List[str] = []
    for model in ([preferred] if preferred else []) + list(FALLBACK_MODELS):
        name = normalize_model_name(model)
        if name and name not in candidates:
            candidates.append(name)
    return candidates


def classify_error(error: BaseException) -> str:
    """``ADVANCE`` to the next candidate when the model is unavailable, else ``ABORT``."""
    if isinstance(error, openai.NotFoundError):
        return ADVANCE
    if isinstance(error, openai.APIStatusError):
        return ADVANCE if error.status_code == 404 else ABORT
    # unparseable model output, never a model availability problem
    if isinstance(error, ValueError):
        return ABORT
    if MODEL_UNAVAILABLE_RE.search(str(error)):
        return ADVANCE
    return ABORT


def extract_json_object(raw: Optional[str]) -> Dict[str, Any]:
    """Best-effort extraction of a JSON object from LLM output."""
    text = str(raw or "").replace("```json", "").replace("```JSON", "").replace("```", "").strip()
    if not text:
        raise ValueError("Empty response from LLM.")

    try:
        parsed = json.loads(text)
    except ValueError:
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end <= start:
            raise ValueError("LLM response did not contain a valid JSON object.")
        parsed = json.loads(text[start : end + 1])

    if not isinstance(parsed, dict):
        raise ValueError("LLM response JSON is not an object.")
    return parsed


def _response_text(response: Any) -> str:
    try:
        return response.choices[0].message.content or ""
    except (AttributeError, IndexError, TypeError):
        return ""


def generate_json(
    client: Any,
    prompt: str,
    feature_name: str,
    models: Sequence[str],
) -> Dict[str, Any]:
    """Try each candidate model in order until one returns a parseable JSON object.

    Unavailable models advance the chain; any other failure aborts it. Raises
    ``ModelChainError`` when no candidate succeeds.
    """
    last_error: Optional[BaseException] = None
    messages = [
        {"role": "system", "content": SYSTEM_MESSAGE},
        {"role": "user", "content": prompt},
    ]

    for model_name in models:
        try:
            response = client.chat.completions.create(model=model_name, messages=messages)
            raw = _response_text(response)
            logger.debug("%s raw response (%s): %s", feature_name, model_name, raw)
            parsed = extract_json_object(raw)
        except Exception as exc:
            last_error = exc
            if classify_error(exc) == ADVANCE:
                logger.warning("Model unavailable: %s. Trying next candidate.", model_name)
                continue
            logger.warning("%s request failed on %s: %s", feature_name, model_name, exc)
            raise ModelChainError(f"{feature_name} aborted on {model_name}", exc) from exc

        logger.info("%s model used: %s", feature_name, model_name)
        return parsed

    raise ModelChainError(f"{feature_name} failed: no candidate model available", last_error)


# --- Payload cleaning -------------------------------------------------------------

def _ensure_list_of_strings(payload: Any, limit: Optional[int] = None) -> List[str]:
    if isinstance(payload, str):
        payload = [payload]
    if not isinstance(payload, list):
        return []
    output: List[str] = []
    for item in payload:
        if isinstance(item, str):
            stripped = item.strip()
            if stripped:
                output.append(stripped)
    return output[:limit] if limit is not None else output


def _normalise_roadmap(payload: Any, limit: int) -> List[Dict[str, str]]:
    if not isinstance(payload, list):
        return []
    cleaned: List[Dict[str, str]] = []
    for item in payload:
        if not isinstance(item, dict):
            continue
        skill = str(item.get("skill", "") or "").strip()
        if not skill:
            continue
        cleaned.append(
            {
                "skill": skill,
                "priority": str(item.get("priority", "") or "Medium").strip(),
                "timeline": str(item.get("timeline", "") or "").strip(),
            }
        )
    return cleaned[:limit]


def _summarise(items: Sequence[str], limit: int, separator: str) -> str:
    return separator.join(list(items)[:limit]) or "None"


def _resolve_client(client: Any, settings: Settings) -> Any:
    if not settings.enable_ai:
        return None
    if client is not None:
        return client
    return build_client(settings)


# --- Features ------------------------------------------------------------------------

def suggest_improvements_with_ai(
    resume_text: str,
    jd_text: str,
    signals: Optional[RuleSignals] = None,
    client: Any = None,
    settings: Optional[Settings] = None,
) -> Optional[AugmentedSuggestions]:
    """Ask the LLM for missing skills and improvements grounded in the rule signals.

    Returns ``None`` when AI is not configured or every model fails; the caller
    then keeps the rule-based suggestions.
    """
    settings = settings or load_settings()
    llm_client = _resolve_client(client, settings)
    if llm_client is None:
        return None

    signals = signals or RuleSignals()
    prompt = IMPROVEMENT_PROMPT_TEMPLATE.format(
        resume_text=(resume_text or "")[:RESUME_PROMPT_CHARS],
        jd_text=(jd_text or "")[:JD_PROMPT_CHARS],
        missing_keywords=_summarise(signals.missing_keywords, 15, ", "),
        formatting_issues=_summarise(signals.formatting_issues, 10, " | "),
        content_issues=_summarise(signals.content_issues, 10, " | "),
        seniority_suggestions=_summarise(signals.seniority_suggestions, 10, " | "),
    )

    try:
        parsed = generate_json(llm_client, prompt, "Resume improvement", candidate_models(settings.llm_model))
    except ModelChainError as exc:
        logger.warning("AI improvement suggestions failed, using rule-based: %s", exc.last_error or exc)
        return None

    return AugmentedSuggestions(
        missing_skills=_ensure_list_of_strings(parsed.get("missingSkills"), MAX_MISSING_SKILLS),
        areas_for_improvement=_ensure_list_of_strings(parsed.get("areasForImprovement"), MAX_IMPROVEMENTS),
        keyword_suggestions=_ensure_list_of_strings(parsed.get("keywordSuggestions"), MAX_KEYWORD_SUGGESTIONS),
    )


def predict_career_path(resume_text: str = "", jd_text: str = "") -> Dict[str, Any]:
    """Static rule-based career path used whenever no model answers."""
    return copy.deepcopy(STATIC_CAREER_PATH)


def predict_career_path_with_ai(
    resume_text: str,
    jd_text: str,
    client: Any = None,
    settings: Optional[Settings] = None,
) -> Dict[str, Any]:
    settings = settings or load_settings()
    llm_client = _resolve_client(client, settings)
    if llm_client is None:
        return predict_career_path(resume_text, jd_text)

    prompt = CAREER_PATH_PROMPT_TEMPLATE.format(
        resume_text=(resume_text or "")[:RESUME_PROMPT_CHARS],
        jd_text=(jd_text or "")[:CAREER_JD_PROMPT_CHARS],
    )
    try:
        parsed = generate_json(llm_client, prompt, "Career path", candidate_models(settings.llm_model))
    except ModelChainError as exc:
        logger.warning("AI career path failed -> switching to rule-based: %s", exc.last_error or exc)
        return predict_career_path(resume_text, jd_text)

    return {
        "best_fit_roles": _ensure_list_of_strings(parsed.get("bestFitRoles"), 4),
        "future_roles": _ensure_list_of_strings(parsed.get("futureRoles"), 3),
        "missing_certifications": _ensure_list_of_strings(parsed.get("missingCertifications"), 4),
        "skills_roadmap": _normalise_roadmap(parsed.get("skillsRoadmap"), 5),
    }
