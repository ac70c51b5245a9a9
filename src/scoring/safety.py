# src/scoring/safety.py
from __future__ import annotations
from typing import Optional

from .schemas import CrosswalkFacility
from .score_helpers import finalize_score
from .weights import SafetyWeights


def safety_points(facility: CrosswalkFacility, weights: SafetyWeights) -> float:
    # independent, additive; no interaction between facilities
    return float(
        (weights.signal if facility.has_signal else 0.0)
        + (weights.button if facility.has_ped_button else 0.0)
        + (weights.sound if facility.has_ped_sound else 0.0)
        + (weights.highland if facility.is_highland else 0.0)
        + (weights.bump if facility.has_bump else 0.0)
        + (weights.braille if facility.has_braille_block else 0.0)
        + (weights.spotlight if facility.has_spotlight else 0.0)
    )


def safety_score(facility: CrosswalkFacility, weights: Optional[SafetyWeights] = None) -> float:
    """Share of achievable facility points, 0..100. A zero weight table scores 0."""
    weights = weights or SafetyWeights()
    max_points = weights.max_points
    if max_points <= 0:
        return 0.0
    return finalize_score(100.0 * safety_points(facility, weights) / max_points)
