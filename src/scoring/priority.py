# src/scoring/priority.py
from __future__ import annotations
from enum import Enum
from typing import Literal, Optional, Tuple

from .score_helpers import clamp_score, finalize_score
from .weights import PriorityStrategy, PriorityWeights


class PriorityLevel(str, Enum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    MINIMAL = "MINIMAL"

    @property
    def label(self) -> str:
        return _LEVEL_DISPLAY[self][0]

    @property
    def color(self) -> str:
        return _LEVEL_DISPLAY[self][1]


_LEVEL_DISPLAY = {
    PriorityLevel.CRITICAL: ("Very high", "red"),
    PriorityLevel.HIGH: ("High", "orange"),
    PriorityLevel.MEDIUM: ("Medium", "yellow"),
    PriorityLevel.LOW: ("Low", "blue"),
    PriorityLevel.MINIMAL: ("Very low", "gray"),
}

# Lower bounds, inclusive, checked top-down.
LEVEL_CUTS: Tuple[Tuple[float, PriorityLevel], ...] = (
    (80.0, PriorityLevel.CRITICAL),
    (60.0, PriorityLevel.HIGH),
    (40.0, PriorityLevel.MEDIUM),
    (20.0, PriorityLevel.LOW),
)


def priority_score(
    risk: float,
    safety: Optional[float] = None,
    weights: Optional[PriorityWeights] = None,
    strategy: PriorityStrategy = PriorityStrategy.BLENDED,
) -> float:
    """
    Blend risk with the safety shortfall:
      BLENDED:   risk*w.risk + (100 - safety)*w.safety
      RISK_ONLY: risk
    Without a safety score both strategies fall back to risk alone.
    """
    weights = weights or PriorityWeights()
    r = clamp_score(risk)
    if safety is None or PriorityStrategy(strategy) is PriorityStrategy.RISK_ONLY:
        return finalize_score(r)

    safety_inverse = 100.0 - clamp_score(safety)
    return finalize_score(r * weights.risk + safety_inverse * weights.safety)


def priority_level(score: float) -> PriorityLevel:
    s = clamp_score(score)
    for cut, level in LEVEL_CUTS:
        if s >= cut:
            return level
    return PriorityLevel.MINIMAL


ScoreKind = Literal["risk", "safety"]

# Gauge wording for the map panels. Safety reads the other way: high is good.
_GAUGE = {
    "risk": (("Very high", "red"), ("High", "red"), ("Medium", "orange"),
             ("Low", "gray"), ("Very low", "gray")),
    "safety": (("Very good", "blue"), ("Good", "blue"), ("Medium", "gray"),
               ("Low", "orange"), ("Very low", "red")),
}


def score_level(score: float, kind: ScoreKind = "risk") -> Tuple[str, str]:
    """(label, tone) for a risk or safety gauge, using the priority cut points."""
    if kind not in _GAUGE:
        raise ValueError(f"Unknown score kind: {kind!r}")
    s = clamp_score(score)
    bands = _GAUGE[kind]
    for i, (cut, _) in enumerate(LEVEL_CUTS):
        if s >= cut:
            return bands[i]
    return bands[-1]
