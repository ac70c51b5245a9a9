# src/scoring/weights.py
from __future__ import annotations
import json
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Dict, Union

from pydantic import BaseModel, Field

FloatGE0 = Annotated[float, Field(ge=0)]
Float01 = Annotated[float, Field(ge=0, le=1)]

# Exponential compression constant; larger K saturates toward 100 more slowly.
DEFAULT_K = 80.0
MIN_K = 1e-6


class PriorityStrategy(str, Enum):
    BLENDED = "blended"      # risk*w.risk + (100 - safety)*w.safety
    RISK_ONLY = "risk_only"  # priority == risk, facility data ignored


class RiskWeights(BaseModel):
    """Points per casualty category in one accident record."""
    fatality: FloatGE0 = 10.0
    serious: FloatGE0 = 5.0
    minor: FloatGE0 = 2.0
    accident: FloatGE0 = 1.0
    reported: FloatGE0 = 0.5

    model_config = {"frozen": True}


class DistanceBandWeights(BaseModel):
    # <=50m, <=100m, <=300m, <=500m, >500m
    w50: Float01 = 1.0
    w100: Float01 = 0.7
    w300: Float01 = 0.4
    w500: Float01 = 0.1
    w_inf: Float01 = 0.0

    model_config = {"frozen": True}


class SafetyWeights(BaseModel):
    """Points per crosswalk facility; the score is normalized by their sum."""
    signal: FloatGE0 = 30.0
    button: FloatGE0 = 10.0
    sound: FloatGE0 = 15.0
    highland: FloatGE0 = 20.0
    bump: FloatGE0 = 8.0
    braille: FloatGE0 = 12.0
    spotlight: FloatGE0 = 15.0

    model_config = {"frozen": True}

    @property
    def max_points(self) -> float:
        return float(self.signal + self.button + self.sound + self.highland
                     + self.bump + self.braille + self.spotlight)


class PriorityWeights(BaseModel):
    # expected to sum to 1.0, not enforced
    risk: FloatGE0 = 0.8
    safety: FloatGE0 = 0.2

    model_config = {"frozen": True}


class ScoringConfig(BaseModel):
    risk: RiskWeights = RiskWeights()
    bands: DistanceBandWeights = DistanceBandWeights()
    safety: SafetyWeights = SafetyWeights()
    priority: PriorityWeights = PriorityWeights()
    k: float = DEFAULT_K
    strategy: PriorityStrategy = PriorityStrategy.BLENDED

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "risk": {"fatality": 10, "serious": 5, "minor": 2, "accident": 1, "reported": 0.5},
                "bands": {"w50": 1.0, "w100": 0.7, "w300": 0.4, "w500": 0.1, "w_inf": 0.0},
                "safety": {"signal": 30, "button": 10, "sound": 15, "highland": 20,
                           "bump": 8, "braille": 12, "spotlight": 15},
                "priority": {"risk": 0.8, "safety": 0.2},
                "k": 80,
                "strategy": "blended",
            }
        },
    }


DEFAULT_CONFIG = ScoringConfig()


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> ScoringConfig:
    """
    Build a ScoringConfig from a JSON file. Omitted sections keep their defaults;
    keyword overrides (e.g. strategy="risk_only") win over the file.
    """
    data: Dict[str, Any] = {}
    if path:
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Weight config not found: {p}")
        data = json.loads(p.read_text())
    data.update({k: v for k, v in overrides.items() if v is not None})
    return ScoringConfig.model_validate(data)
