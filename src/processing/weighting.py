from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from src.scoring.schemas import AccidentRecord
    from src.scoring.weights import DistanceBandWeights, RiskWeights


# ------------- Distance band edges (meters, upper edge inclusive) -------------
BAND_50_M = 50.0
BAND_100_M = 100.0
BAND_300_M = 300.0
BAND_500_M = 500.0


def severity_raw(record: "AccidentRecord", weights: "RiskWeights") -> float:
    """Unbounded casualty score of one record; compression happens in the aggregator."""
    return float(
        record.fatality_count * weights.fatality
        + record.serious_injury_count * weights.serious
        + record.minor_injury_count * weights.minor
        + record.accident_count * weights.accident
        + record.reported_injury_count * weights.reported
    )


def band_weight(distance_m, bands: "DistanceBandWeights"):
    """Step weight for a distance. Scalars return float, arrays return ndarray."""
    scalar = np.ndim(distance_m) == 0
    d = np.atleast_1d(np.asarray(distance_m, dtype=float))
    with np.errstate(invalid="ignore"):
        w = np.select(
            [d <= BAND_50_M, d <= BAND_100_M, d <= BAND_300_M, d <= BAND_500_M],
            [bands.w50, bands.w100, bands.w300, bands.w500],
            default=bands.w_inf,
        )
    return float(w[0]) if scalar else w
