from __future__ import annotations

import random

import pendulum
import pytest

from skillbridge.core import HeuristicConfig, HeuristicScorer
from skillbridge.schemas import ProfileInput, classify_eligibility

FIXED_NOW = pendulum.datetime(2025, 3, 1, 12, 0, 0)


def build_scorer(seed: int = 7) -> HeuristicScorer:
    return HeuristicScorer(rng=random.Random(seed), now_provider=lambda: FIXED_NOW)


def build_profile(**kwargs) -> ProfileInput:
    defaults = {"full_name": "Test Student", "skills": ""}
    defaults.update(kwargs)
    return ProfileInput(**defaults)


def test_full_stack_skills_without_experience_is_eligible():
    scorer = build_scorer()
    profile = build_profile(full_name="Ann", skills="react, node.js, sql")

    result = scorer.score(profile)

    assert result.readiness_score == 90
    assert result.eligibility == "Eligible"
    assert result.source == "heuristic"
    assert result.evaluated_at == FIXED_NOW
    assert result.strengths == [
        "Strong frontend development skills",
        "Backend development knowledge",
        "Database management knowledge",
    ]
    assert len(result.weaknesses) == 2
    assert result.weaknesses[0] == "Needs more hands-on experience"
    assert result.weaknesses[1] in HeuristicConfig().weakness_fillers
    assert result.suggestions == [
        "Build DevOps skills with Docker and cloud platforms",
        "Build more real-world projects to strengthen portfolio",
        "Contribute to open-source projects",
    ]


def test_empty_skills_with_zero_experience_needs_improvement():
    scorer = build_scorer()
    profile = build_profile(full_name="Bo", skills="", experience="0")

    result = scorer.score(profile)

    assert result.readiness_score == 50
    assert result.eligibility == "Needs Improvement"
    assert result.weaknesses == [
        "Limited frontend experience",
        "No backend programming experience",
        "Database experience needed",
    ]
    assert len(result.strengths) == 3
    assert len(set(result.strengths)) == 3
    assert set(result.strengths) <= set(HeuristicConfig().strength_fillers)
    assert result.suggestions == [
        "Learn backend development with Node.js or Python",
        "Master database design and SQL/NoSQL technologies",
        "Build DevOps skills with Docker and cloud platforms",
        "Build more real-world projects to strengthen portfolio",
    ]


def test_score_is_clamped_and_lists_truncated():
    scorer = build_scorer()
    profile = build_profile(
        skills="React, Python, PostgreSQL, Docker",
        experience="5 years",
        education="Master of Science in Computer Science",
        bio="I build web applications end to end and enjoy mentoring other students in clubs.",
    )

    result = scorer.score(profile)

    assert result.readiness_score == 100
    assert result.eligibility == "Eligible"
    assert len(result.strengths) == 4
    assert result.strengths[:4] == [
        "Strong frontend development skills",
        "Backend development knowledge",
        "Database management knowledge",
        "DevOps and deployment experience",
    ]
    assert len(result.weaknesses) == 2
    assert result.suggestions == ["Contribute to open-source projects"]


def test_bachelor_branch_wins_over_master():
    scorer = build_scorer()
    draft = scorer.assess(build_profile(skills="", experience="0", education="Bachelor then Master"))

    assert "Bachelor degree qualification" in draft.strengths
    assert "Advanced degree qualification" not in draft.strengths
    assert draft.readiness_score == 60


@pytest.mark.parametrize(
    ("experience", "expected_delta", "strength", "suggests_projects"),
    [
        ("3", 15, "Solid professional experience", False),
        ("2 years", 8, "Growing professional experience", False),
        ("1", 8, "Growing professional experience", True),
        ("0", 0, None, True),
        ("about a year", 0, None, True),
    ],
)
def test_experience_tiers(experience, expected_delta, strength, suggests_projects):
    scorer = build_scorer()
    draft = scorer.assess(build_profile(skills="react", experience=experience))

    assert draft.readiness_score == 65 + expected_delta
    if strength:
        assert strength in draft.strengths
    else:
        assert "Needs more hands-on experience" in draft.weaknesses
    assert (
        "Build more real-world projects to strengthen portfolio" in draft.suggestions
    ) is suggests_projects


def test_short_bio_earns_no_bonus():
    scorer = build_scorer()
    short = scorer.assess(build_profile(skills="vue", bio="x" * 50))
    long = scorer.assess(build_profile(skills="vue", bio="x" * 51))

    assert long.readiness_score - short.readiness_score == 5


def test_devops_absence_adds_no_weakness():
    scorer = build_scorer()
    draft = scorer.assess(build_profile(skills="angular, django, mongodb", experience="4"))

    assert not any("DevOps" in weakness for weakness in draft.weaknesses)


def test_seeded_rng_makes_padding_reproducible():
    profile = build_profile(skills="", experience="0")

    first = build_scorer(seed=11).score(profile)
    second = build_scorer(seed=11).score(profile)

    assert first.strengths == second.strengths


def test_deterministic_contributions_do_not_depend_on_rng():
    profile = build_profile(skills="css", experience="1", bio="short")

    first = build_scorer(seed=1).assess(profile)
    second = build_scorer(seed=2).assess(profile)

    assert first.readiness_score == second.readiness_score
    assert first.strengths[:2] == second.strengths[:2]
    assert first.weaknesses == second.weaknesses
    assert first.suggestions == second.suggestions


@pytest.mark.parametrize(
    "fields",
    [
        {"skills": ""},
        {"skills": "html", "experience": "-3"},
        {"skills": "java, mysql, aws", "experience": "10", "education": "bachelor"},
        {"skills": "kubernetes", "bio": "b" * 200},
        {"skills": "rust, haskell", "education": "PhD"},
    ],
)
def test_bounds_hold_for_varied_profiles(fields):
    result = build_scorer().score(build_profile(**fields))

    assert 0 <= result.readiness_score <= 100
    assert 3 <= len(result.strengths) <= 4
    assert 2 <= len(result.weaknesses) <= 3
    assert 1 <= len(result.suggestions) <= 4
    assert result.eligibility == classify_eligibility(result.readiness_score)
