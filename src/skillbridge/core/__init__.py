"""Core evaluation engine components."""

from __future__ import annotations

from .engine import EVALUATION_MODES, EngineConfig, EvaluationEngine, EvaluationMode
from .heuristic import HeuristicConfig, HeuristicScorer, SkillFamily
from .prompt import PromptBuilder
from .validator import ResponseValidator

__all__ = [
    "EVALUATION_MODES",
    "EngineConfig",
    "EvaluationEngine",
    "EvaluationMode",
    "HeuristicConfig",
    "HeuristicScorer",
    "PromptBuilder",
    "ResponseValidator",
    "SkillFamily",
]
