"""Resume vs job-description analysis pipeline producing the final ATS report."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from ai_analyzer import AugmentedSuggestions, RuleSignals, suggest_improvements_with_ai
from ats_checks import analyze_content_quality, check_formatting, check_seniority
from certifications import recommend_certifications
from embeddings import score_semantic
from keyword_density import analyze_keyword_density
from scoring import (
    compose_score,
    is_substantial_section,
    merge_suggestions,
    score_rules,
    unique_trimmed,
)
from sections import (
    ExperienceData,
    ResumeEntities,
    ResumeSections,
    extract_entities,
    extract_experience,
    split_resume_into_sections,
)
from settings import Settings, build_client, load_settings
from skill_matcher import extract_skill_tokens, filter_core_skills, normalize_skills

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 5
DEFAULT_IMPROVEMENT = (
    "Tailor your resume keywords and project impact statements to the exact job description."
)


def _compose_summary(total_years: float, core_skill_count: int, alignment: str) -> str:
    return (
        f"Analyzed resume with {total_years:g} years of experience. "
        f"Found {core_skill_count} core skills. Seniority alignment: {alignment}."
    )


def _overall_notes(detected_level: str, required_level: str) -> str:
    if required_level == "Unspecified":
        return f"Your resume reads as {detected_level} level; the job description does not state a seniority."
    return f"Your resume is a {detected_level} level match for this {required_level} role."


def _safe_semantic_score(future) -> float:
    if future is None:
        return 0.0
    try:
        return float(future.result())
    except Exception as exc:
        logger.warning("Semantic scoring failed: %s", exc)
        return 0.0


def analyze_resume(
    resume_text: Optional[str],
    jd_text: Optional[str],
    sections: Optional[ResumeSections] = None,
    entities: Optional[ResumeEntities] = None,
    experience: Optional[ExperienceData] = None,
    client: Any = None,
    settings: Optional[Settings] = None,
) -> Dict[str, Any]:
    """Analyze one resume against one job description.

    Upstream segmentation and extraction results may be passed in; anything
    omitted is derived from ``resume_text``. External providers are optional:
    without credentials the report is computed from rule-based signals only.
    The function always returns a complete report.
    """
    resume_text = resume_text or ""
    jd_text = jd_text or ""
    settings = settings or load_settings()
    if client is None and (settings.enable_semantic or settings.enable_ai):
        client = build_client(settings)

    sections = sections or split_resume_into_sections(resume_text)
    entities = entities or extract_entities(resume_text)
    experience = experience or extract_experience(sections.experience or resume_text)
    total_experience = experience.total_experience_years

    normalized_skills = normalize_skills(extract_skill_tokens(sections.skills or resume_text))
    core_skills = filter_core_skills(normalized_skills)

    with ThreadPoolExecutor(max_workers=1) as executor:
        semantic_future = None
        if client is not None and settings.enable_semantic:
            semantic_future = executor.submit(score_semantic, resume_text, jd_text, client, settings)

        formatting = check_formatting(resume_text, sections)
        coverage = analyze_keyword_density(resume_text, jd_text)
        seniority = check_seniority(total_experience, jd_text)
        content = analyze_content_quality(resume_text, experience.blocks)
        certifications = recommend_certifications(core_skills, jd_text)

        jd_relevant = coverage.relevant_density()
        rule_score = score_rules(
            jd_relevant,
            total_experience,
            formatting.formatting_issues,
            content.content_issues,
            is_substantial_section(sections.projects),
            is_substantial_section(sections.education),
        )

        ai_suggestions: Optional[AugmentedSuggestions] = None
        if client is not None and settings.enable_ai:
            ai_suggestions = suggest_improvements_with_ai(
                resume_text,
                jd_text,
                RuleSignals(
                    missing_keywords=coverage.missing_keywords,
                    formatting_issues=formatting.formatting_issues,
                    content_issues=content.content_issues,
                    seniority_suggestions=seniority.seniority_suggestions,
                ),
                client=client,
                settings=settings,
            )

        semantic_score = _safe_semantic_score(semantic_future)

    ats_score = compose_score(rule_score.total, semantic_score)

    jd_lower = jd_text.lower()
    matched_tech_skills = [skill for skill in core_skills if skill.lower() in jd_lower]

    rule_areas: List[str] = (
        formatting.formatting_issues + content.content_issues + seniority.seniority_suggestions
    )
    missing_skills = unique_trimmed(filter_core_skills(merge_suggestions(
        ai_suggestions.missing_skills if ai_suggestions else None,
        coverage.missing_keywords,
    )))
    areas_for_improvement = merge_suggestions(
        ai_suggestions.areas_for_improvement if ai_suggestions else None,
        rule_areas,
    ) or [DEFAULT_IMPROVEMENT]
    keyword_suggestions = merge_suggestions(
        ai_suggestions.keyword_suggestions if ai_suggestions else None,
        coverage.keyword_suggestions,
    )

    strengths = [f"Matches skill: {skill}" for skill in matched_tech_skills[:3]]
    if not formatting.formatting_issues:
        strengths.append("Good formatting")
    if not content.content_issues:
        strengths.append("Strong action verbs used")

    weaknesses = (
        formatting.formatting_issues[:3]
        + content.content_issues[:3]
        + [f"Missing keyword: {keyword}" for keyword in coverage.missing_keywords[:3]]
    )

    suggestions = unique_trimmed(
        areas_for_improvement[:2]
        + formatting.formatting_suggestions
        + content.content_suggestions
        + keyword_suggestions,
        limit=MAX_SUGGESTIONS,
    )

    logger.info(
        "ATS analysis complete: score=%d rule=%.1f semantic=%.1f ai=%s",
        ats_score,
        rule_score.total,
        semantic_score,
        ai_suggestions is not None,
    )

    return {
        "ats_score": ats_score,
        "summary": _compose_summary(total_experience, len(core_skills), seniority.seniority_alignment),
        "strengths": unique_trimmed(strengths),
        "weaknesses": unique_trimmed(weaknesses),
        "missing_skills": missing_skills,
        "areas_for_improvement": unique_trimmed(areas_for_improvement),
        "recommended_certifications": certifications,
        "formatting_suggestions": unique_trimmed(formatting.formatting_suggestions),
        "content_suggestions": unique_trimmed(content.content_suggestions),
        "keyword_suggestions": unique_trimmed(keyword_suggestions),
        "seniority_alignment": seniority.seniority_alignment,
        "overall_notes": _overall_notes(seniority.detected_level, seniority.required_level),
        "suggestions": suggestions,
        "details": {
            "normalized_skills": core_skills,
            "matched_tech_skills": matched_tech_skills,
            "entities": entities.to_dict(),
            "experience_blocks": [block.to_dict() for block in experience.blocks],
            "total_experience": total_experience,
            "jd_skill_density": [entry.to_dict() for entry in jd_relevant],
            "sections": sections.to_dict(),
            "score_components": {
                "rule": rule_score.to_dict(),
                "semantic": round(semantic_score, 2),
                "ai_augmented": ai_suggestions is not None,
            },
        },
    }
