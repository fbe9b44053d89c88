import math

import pytest

from keyword_density import KeywordDensity
from scoring import (
    _round_half_up,
    compose_score,
    experience_component,
    issue_component,
    merge_suggestions,
    score_rules,
    skill_match_component,
    unique_trimmed,
)


def _density(keyword, resume_count):
    return KeywordDensity(keyword=keyword, jd_count=1, resume_count=resume_count, density=0.1)


def test_skill_match_ratio():
    entries = [_density("Docker", 1), _density("AWS", 2), _density("Terraform", 0), _density("Redis", 0)]
    assert skill_match_component(entries) == 25.0
    assert skill_match_component([]) == 0.0


def test_experience_component():
    assert experience_component(2.5, False, False) == 12.5
    assert experience_component(12, False, False) == 20.0
    assert experience_component(0, True, True) == 20.0
    assert experience_component(0, True, False) == 10.0
    assert experience_component(0, False, False) == 0.0


@pytest.mark.parametrize("issues, expected", [(0, 10.0), (1, 8.0), (3, 4.0), (5, 0.0), (9, 0.0)])
def test_issue_component(issues, expected):
    assert issue_component(issues) == expected


def test_rule_score_total():
    score = score_rules([_density("Docker", 1)], 1.0, ["a"], [], False, False)
    assert score.to_dict() == {
        "skill_match": 50.0,
        "experience": 5.0,
        "formatting": 8.0,
        "content_quality": 10.0,
        "total": 73.0,
    }


def test_compose_score_applies_weights_and_offset():
    assert compose_score(12, 0) == 27
    assert compose_score(80, 0) == 68
    assert compose_score(0, 0) == 20


def test_compose_score_clamps():
    assert compose_score(80, 100) == 100
    assert compose_score(-1000, 0) == 0
    assert compose_score(100, 100) == 100


def test_compose_score_handles_non_finite_inputs():
    assert compose_score(math.nan, 0) == 20
    assert compose_score(math.inf, 0) == 100
    assert compose_score(-math.inf, 0) == 0


def test_round_half_up():
    assert _round_half_up(2.5) == 3
    assert _round_half_up(2.4) == 2
    assert _round_half_up(0.5) == 1


def test_unique_trimmed():
    assert unique_trimmed([" a ", "A", "", None, "b"]) == ["a", "b"]
    assert unique_trimmed(["a", "b", "c"], limit=2) == ["a", "b"]


def test_merge_prefers_ai_items_when_present():
    assert merge_suggestions(["ai"], ["rule"]) == ["ai"]
    assert merge_suggestions(["  ", ""], ["rule"]) == ["rule"]
    assert merge_suggestions(None, ["rule"]) == ["rule"]
