# src/scoring/risk.py
from __future__ import annotations
from typing import Optional, Sequence

import numpy as np

from src.processing.geo import distance_meters
from src.processing.weighting import band_weight, severity_raw
from .schemas import AccidentRecord, AccidentSummary
from .score_helpers import exp_compress, finalize_score, weighted_average
from .weights import DEFAULT_K, DistanceBandWeights, RiskWeights


def record_weights(
    target_lat: float,
    target_lon: float,
    records: Sequence[AccidentRecord],
    bands: DistanceBandWeights,
) -> np.ndarray:
    """Band weight of every record relative to the target, in input order."""
    if not records:
        return np.zeros(0, dtype=float)
    d = np.fromiter(
        (distance_meters(target_lat, target_lon, r.lat, r.lon) for r in records),
        dtype=float, count=len(records),
    )
    return band_weight(d, bands)


def aggregate_risk(
    target_lat: float,
    target_lon: float,
    records: Sequence[AccidentRecord],
    risk_weights: Optional[RiskWeights] = None,
    band_weights: Optional[DistanceBandWeights] = None,
    k: float = DEFAULT_K,
) -> float:
    """
    Risk index in [0,100] for a point:
      1) band weight per record from its haversine distance to the target
      2) weighted average of raw severity over records with weight > 0
      3) exponential compression 100*(1 - exp(-avg/K)), clamp, round to 2dp
    No records (or none in range) is risk 0.
    """
    risk_weights = risk_weights or RiskWeights()
    band_weights = band_weights or DistanceBandWeights()

    w = record_weights(target_lat, target_lon, records, band_weights)
    avg, _ = weighted_average(
        (severity_raw(r, risk_weights), wi) for r, wi in zip(records, w)
    )
    return finalize_score(exp_compress(avg, k))


def summarize_accidents(records: Sequence[AccidentRecord]) -> AccidentSummary:
    years = sorted(r.year for r in records if r.year is not None)
    return AccidentSummary(
        unique_hotspots=len({str(r.accident_id) for r in records}),
        accidents=sum(r.accident_count for r in records),
        casualties=sum(r.casualty_count for r in records),
        fatalities=sum(r.fatality_count for r in records),
        year_range=(years[0], years[-1]) if years else None,
    )
