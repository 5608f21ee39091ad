"""Rule-based readiness scoring that needs no network access."""

from __future__ import annotations

import random
import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Sequence

import pendulum

from ..schemas import Evaluation, EvaluationDraft, ProfileInput, classify_eligibility, clamp_score

BASE_SCORE = 50

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class SkillFamily:
    """Keyword family contributing points when any skill token matches."""

    name: str
    keywords: tuple[str, ...]
    points: int
    strength: str
    weakness: str | None = None
    suggestion: str | None = None

    def matches(self, tokens: Iterable[str]) -> bool:
        return any(keyword in token for token in tokens for keyword in self.keywords)


SKILL_FAMILIES: tuple[SkillFamily, ...] = (
    SkillFamily(
        name="frontend",
        keywords=("javascript", "react", "vue", "angular", "html", "css"),
        points=15,
        strength="Strong frontend development skills",
        weakness="Limited frontend experience",
    ),
    SkillFamily(
        name="backend",
        keywords=("node.js", "python", "java", "golang", "django", "express"),
        points=15,
        strength="Backend development knowledge",
        weakness="No backend programming experience",
        suggestion="Learn backend development with Node.js or Python",
    ),
    SkillFamily(
        name="database",
        keywords=("sql", "firebase", "mongodb", "postgresql", "mysql"),
        points=10,
        strength="Database management knowledge",
        weakness="Database experience needed",
        suggestion="Master database design and SQL/NoSQL technologies",
    ),
    SkillFamily(
        name="devops",
        keywords=("docker", "kubernetes", "aws", "gcp", "azure", "git"),
        points=10,
        strength="DevOps and deployment experience",
        suggestion="Build DevOps skills with Docker and cloud platforms",
    ),
)


@dataclass
class HeuristicConfig:
    """Padding pools and list limits for rule-based scoring."""

    min_strengths: int = 3
    min_weaknesses: int = 2
    max_strengths: int = 4
    max_weaknesses: int = 3
    max_suggestions: int = 4
    strength_fillers: tuple[str, ...] = (
        "Problem-solving ability",
        "Learning aptitude",
        "Team collaboration potential",
        "Attention to detail",
    )
    weakness_fillers: tuple[str, ...] = (
        "Limited system design experience",
        "Need to strengthen data structures knowledge",
        "More projects needed for portfolio",
    )
    experience_suggestion: str = "Build more real-world projects to strengthen portfolio"
    closing_suggestion: str = "Contribute to open-source projects"
    families: tuple[SkillFamily, ...] = SKILL_FAMILIES


class HeuristicScorer:
    """Score a profile with fixed keyword families and experience tiers."""

    def __init__(
        self,
        *,
        config: HeuristicConfig | None = None,
        rng: random.Random | None = None,
        now_provider: Callable[[], Any] | None = None,
    ) -> None:
        self._config = config or HeuristicConfig()
        self._rng = rng or random.Random()
        self._now_provider = now_provider or pendulum.now

    @property
    def config(self) -> HeuristicConfig:
        return self._config

    def score(self, profile: ProfileInput) -> Evaluation:
        """Return a finalized heuristic evaluation for ``profile``."""
        return self.assess(profile).finalize(source="heuristic", evaluated_at=self._now_provider())

    def assess(self, profile: ProfileInput) -> EvaluationDraft:
        """Compute the unstamped draft; eligibility is derived from the clamped score."""
        cfg = self._config
        strengths: list[str] = []
        weaknesses: list[str] = []
        suggestions: list[str] = []
        score = BASE_SCORE

        tokens = self.tokenize(profile.skills)
        for family in cfg.families:
            if family.matches(tokens):
                score += family.points
                strengths.append(family.strength)
            else:
                if family.weakness:
                    weaknesses.append(family.weakness)
                if family.suggestion:
                    suggestions.append(family.suggestion)

        years = self.parse_years(profile.experience)
        if years >= 3:
            strengths.append("Solid professional experience")
            score += 15
        elif years >= 1:
            strengths.append("Growing professional experience")
            score += 8
        elif years == 0:
            weaknesses.append("Needs more hands-on experience")
        if years < 2:
            suggestions.append(cfg.experience_suggestion)
        suggestions.append(cfg.closing_suggestion)

        education = profile.education.lower()
        if "bachelor" in education:
            strengths.append("Bachelor degree qualification")
            score += 10
        elif "master" in education:
            strengths.append("Advanced degree qualification")
            score += 15

        if len(profile.bio) > 50:
            strengths.append("Clear communication and self-awareness")
            score += 5

        self._pad(strengths, cfg.strength_fillers, cfg.min_strengths)
        self._pad(weaknesses, cfg.weakness_fillers, cfg.min_weaknesses)

        final_score = clamp_score(score)
        return EvaluationDraft(
            strengths=strengths[: cfg.max_strengths],
            weaknesses=weaknesses[: cfg.max_weaknesses],
            suggestions=suggestions[: cfg.max_suggestions],
            readiness_score=final_score,
            eligibility=classify_eligibility(final_score),
        )

    def fill(self, items: list[str], pool: Sequence[str], minimum: int) -> list[str]:
        """Return a copy of ``items`` padded from ``pool``; used by the engine too."""
        padded = list(items)
        self._pad(padded, pool, minimum)
        return padded

    @staticmethod
    def tokenize(skills: str) -> list[str]:
        return [token.strip().lower() for token in skills.split(",") if token.strip()]

    @staticmethod
    def parse_years(experience: str) -> int:
        match = _LEADING_INT.match(experience or "")
        if match is None:
            return 0
        return int(match.group(1))

    def _pad(self, items: list[str], pool: Sequence[str], minimum: int) -> None:
        available = [candidate for candidate in pool if candidate not in items]
        needed = min(max(minimum - len(items), 0), len(available))
        items.extend(self._rng.sample(available, needed))
