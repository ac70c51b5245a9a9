# src/scoring/score_helpers.py
from __future__ import annotations
import math
from typing import Iterable, Tuple

from .weights import MIN_K

SCORE_MIN = 0.0
SCORE_MAX = 100.0


def clamp_score(x: float, lo: float = SCORE_MIN, hi: float = SCORE_MAX) -> float:
    """Clamp to [lo, hi]; NaN maps to lo."""
    x = float(x)
    if math.isnan(x):
        return float(lo)
    return float(max(lo, min(hi, x)))


def finalize_score(x: float) -> float:
    """Clamp to [0,100], then round half up to 2 decimals."""
    return float(math.floor(clamp_score(x) * 100 + 0.5) / 100)


def weighted_average(pairs: Iterable[Tuple[float, float]]) -> Tuple[float, float]:
    """
    pairs = [(value, weight), ...]; pairs with weight <= 0 are skipped.
    Returns (average, weight_sum); average is 0 when nothing carries weight.
    """
    num = 0.0
    den = 0.0
    for v, w in pairs:
        if not w > 0:
            continue
        num += float(v) * float(w)
        den += float(w)
    return (float(num / den) if den > 0 else 0.0), den


def exp_compress(x: float, k: float) -> float:
    # 100 * (1 - e^(-x/k)); k <= 0 is treated as a tiny positive constant
    return 100.0 * (1.0 - math.exp(-float(x) / max(float(k), MIN_K)))
