# src/scoring/evaluate.py
from __future__ import annotations
from typing import Optional, Sequence

from .priority import priority_level, priority_score
from .risk import aggregate_risk, record_weights
from .safety import safety_score
from .schemas import AccidentRecord, CrosswalkFacility, LocationScore
from .weights import DEFAULT_CONFIG, PriorityStrategy, ScoringConfig


def evaluate_location(
    lat: float,
    lon: float,
    records: Sequence[AccidentRecord],
    facility: Optional[CrosswalkFacility] = None,
    config: ScoringConfig = DEFAULT_CONFIG,
    strategy: Optional[PriorityStrategy] = None,
) -> LocationScore:
    """Risk, safety and priority for one point; `strategy` overrides the config's."""
    strategy = PriorityStrategy(strategy) if strategy is not None else config.strategy

    risk = aggregate_risk(lat, lon, records, config.risk, config.bands, config.k)
    safety = safety_score(facility, config.safety) if facility is not None else None
    priority = priority_score(risk, safety, config.priority, strategy)
    n_in_range = int((record_weights(lat, lon, records, config.bands) > 0).sum())

    return LocationScore(
        lat=float(lat),
        lon=float(lon),
        risk_score=risk,
        safety_score=safety,
        priority_score=priority,
        priority_level=priority_level(priority).value,
        strategy=strategy,
        n_records=len(records),
        n_in_range=n_in_range,
    )


def evaluate_crosswalk(
    facility: CrosswalkFacility,
    records: Sequence[AccidentRecord],
    config: ScoringConfig = DEFAULT_CONFIG,
    strategy: Optional[PriorityStrategy] = None,
) -> LocationScore:
    if facility.lat is None or facility.lon is None:
        raise ValueError(f"Crosswalk {facility.cw_uid!r} has no coordinates")
    return evaluate_location(facility.lat, facility.lon, records, facility, config, strategy)
