import json

from analyzer import DEFAULT_IMPROVEMENT, analyze_resume

REPORT_KEYS = {
    "ats_score",
    "summary",
    "strengths",
    "weaknesses",
    "missing_skills",
    "areas_for_improvement",
    "recommended_certifications",
    "formatting_suggestions",
    "content_suggestions",
    "keyword_suggestions",
    "seniority_alignment",
    "overall_notes",
    "suggestions",
    "details",
}


def test_rule_only_report_for_matching_resume(sample_resume, sample_jd, rule_only_settings):
    report = analyze_resume(sample_resume, sample_jd, settings=rule_only_settings)

    assert set(report) == REPORT_KEYS
    assert report["ats_score"] == 68
    assert report["missing_skills"] == ["Apache Kafka"]
    assert report["seniority_alignment"] == "Under-qualified"
    assert report["strengths"][:3] == [
        "Matches skill: Docker",
        "Matches skill: Kubernetes",
        "Matches skill: AWS",
    ]
    assert "Good formatting" in report["strengths"]
    assert "Strong action verbs used" in report["strengths"]
    assert report["weaknesses"] == ["Missing keyword: Apache Kafka"]
    assert report["overall_notes"] == "Your resume is a Mid level match for this Senior role."
    assert report["summary"] == (
        "Analyzed resume with 4 years of experience. Found 5 core skills. "
        "Seniority alignment: Under-qualified."
    )

    details = report["details"]
    assert details["total_experience"] == 4.0
    assert details["normalized_skills"] == ["Docker", "Kubernetes", "AWS", "PostgreSQL", "Terraform"]
    assert details["matched_tech_skills"] == ["Docker", "Kubernetes", "AWS", "Terraform"]
    assert details["entities"]["emails"] == ["jane@example.com"]
    assert details["score_components"]["rule"]["total"] == 80.0
    assert details["score_components"]["semantic"] == 0.0
    assert details["score_components"]["ai_augmented"] is False
    assert all(entry["keyword"] != "Python" for entry in details["jd_skill_density"])


def test_certifications_follow_job_description_gaps(sample_resume, sample_jd, rule_only_settings):
    report = analyze_resume(sample_resume, sample_jd, settings=rule_only_settings)
    assert [item["certification"] for item in report["recommended_certifications"]] == [
        "Meta Back-End Developer Professional Certificate",
        "OpenJS Node.js Services Developer (JSNSD)",
        "PCEP – Certified Entry-Level Python Programmer",
        "AWS Certified Solutions Architect – Associate",
        "AWS Certified Developer – Associate",
    ]


def test_empty_resume_still_produces_full_report(rule_only_settings):
    report = analyze_resume("", "Python, AWS, Docker required", settings=rule_only_settings)

    assert set(report) == REPORT_KEYS
    assert report["ats_score"] == 27
    assert report["missing_skills"] == ["AWS", "Docker"]
    assert report["seniority_alignment"] == "Unspecified"
    assert report["strengths"] == []
    assert len(report["recommended_certifications"]) == 5
    assert report["recommended_certifications"][0]["certification"] == (
        "AWS Certified Solutions Architect – Associate"
    )
    assert len(report["suggestions"]) <= 5
    assert report["details"]["score_components"]["rule"]["total"] == 12.0


def test_none_inputs_are_treated_as_empty(rule_only_settings):
    report = analyze_resume(None, None, settings=rule_only_settings)
    assert report["missing_skills"] == []
    assert report["recommended_certifications"] == []
    assert 0 <= report["ats_score"] <= 100


def test_report_is_deterministic_without_providers(sample_resume, sample_jd, rule_only_settings):
    first = analyze_resume(sample_resume, sample_jd, settings=rule_only_settings)
    second = analyze_resume(sample_resume, sample_jd, settings=rule_only_settings)
    assert first == second


def test_report_lists_are_unique_and_trimmed(sample_resume, sample_jd, rule_only_settings):
    report = analyze_resume(sample_resume, sample_jd, settings=rule_only_settings)
    for key in ("strengths", "weaknesses", "missing_skills", "areas_for_improvement", "suggestions"):
        items = report[key]
        assert all(item == item.strip() and item for item in items)
        assert len({item.lower() for item in items}) == len(items)


def test_semantic_score_is_blended(sample_resume, sample_jd, fake_client, semantic_settings):
    client = fake_client(embedding_handler=lambda **kwargs: [0.5, 0.5, 0.5])
    report = analyze_resume(sample_resume, sample_jd, client=client, settings=semantic_settings)
    assert report["ats_score"] == 100
    assert report["details"]["score_components"]["semantic"] == 100.0
    assert len(client.embedding_calls) == 2


def test_semantic_failure_falls_back_to_rule_score(sample_resume, sample_jd, fake_client, semantic_settings):
    report = analyze_resume(sample_resume, sample_jd, client=fake_client(), settings=semantic_settings)
    assert report["ats_score"] == 68


def test_ai_suggestions_override_rule_lists(sample_resume, sample_jd, fake_client, ai_settings):
    payload = {
        "missingSkills": ["Python", "Apache Kafka", "GraphQL"],
        "areasForImprovement": ["Show ownership of the Kafka rollout"],
        "keywordSuggestions": ["Mention event streaming"],
    }
    client = fake_client(chat_handler=lambda **kwargs: json.dumps(payload))
    report = analyze_resume(sample_resume, sample_jd, client=client, settings=ai_settings)

    assert report["missing_skills"] == ["Apache Kafka", "GraphQL"]
    assert report["areas_for_improvement"] == ["Show ownership of the Kafka rollout"]
    assert report["keyword_suggestions"] == ["Mention event streaming"]
    assert report["suggestions"][0] == "Show ownership of the Kafka rollout"
    assert report["details"]["score_components"]["ai_augmented"] is True
    # AI output never changes the score
    assert report["ats_score"] == 68


def test_ai_failure_keeps_rule_based_suggestions(sample_resume, sample_jd, fake_client, ai_settings):
    client = fake_client()
    report = analyze_resume(sample_resume, sample_jd, client=client, settings=ai_settings)

    assert report["missing_skills"] == ["Apache Kafka"]
    assert report["areas_for_improvement"] == [
        "The role targets Senior level; highlight leadership, ownership and scope "
        "to close the experience gap."
    ]
    assert report["details"]["score_components"]["ai_augmented"] is False
    assert report["ats_score"] == 68


def test_default_improvement_when_nothing_to_flag(rule_only_settings, sample_resume):
    report = analyze_resume(sample_resume, "", settings=rule_only_settings)
    assert report["areas_for_improvement"] == [DEFAULT_IMPROVEMENT]
    assert report["seniority_alignment"] == "Unspecified"
