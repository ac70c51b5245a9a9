import pytest

from src.scoring.evaluate import evaluate_crosswalk, evaluate_location
from src.scoring.schemas import CrosswalkFacility
from src.scoring.weights import PriorityStrategy, ScoringConfig

TARGET = (37.5, 127.0)


def test_location_without_facility_degrades_to_risk(make_record):
    recs = [make_record(30.0, fatality_count=1), make_record(900.0, fatality_count=3)]
    out = evaluate_location(*TARGET, recs)
    assert out.risk_score == 11.75
    assert out.safety_score is None
    assert out.priority_score == 11.75
    assert out.priority_level == "MINIMAL"
    assert out.strategy is PriorityStrategy.BLENDED
    assert out.n_records == 2
    assert out.n_in_range == 1


def test_location_with_facility_blends(make_record):
    cw = CrosswalkFacility(has_signal=True, has_ped_button=True)
    out = evaluate_location(*TARGET, [make_record(30.0, fatality_count=1)], cw)
    assert out.safety_score == 36.36
    assert out.priority_score == pytest.approx(round(11.75 * 0.8 + (100 - 36.36) * 0.2, 2))


def test_strategy_override_and_config_strategy(make_record):
    cw = CrosswalkFacility()
    recs = [make_record(20.0, serious_injury_count=2)]
    risk_only = evaluate_location(*TARGET, recs, cw, strategy=PriorityStrategy.RISK_ONLY)
    assert risk_only.priority_score == risk_only.risk_score

    cfg = ScoringConfig(strategy=PriorityStrategy.RISK_ONLY)
    assert evaluate_location(*TARGET, recs, cw, cfg).priority_score == risk_only.risk_score


def test_empty_location():
    out = evaluate_location(*TARGET, [], CrosswalkFacility())
    assert out.risk_score == 0.0
    assert out.safety_score == 0.0
    assert out.priority_score == 20.0  # 0*0.8 + 100*0.2
    assert out.priority_level == "LOW"


def test_crosswalk_uses_its_own_coordinates(make_record):
    cw = CrosswalkFacility(cw_uid="CW-9", lat=TARGET[0], lon=TARGET[1], has_signal=True)
    out = evaluate_crosswalk(cw, [make_record(30.0, fatality_count=1)])
    assert out.lat == TARGET[0] and out.lon == TARGET[1]
    assert out.risk_score == 11.75


def test_crosswalk_without_coordinates_raises():
    with pytest.raises(ValueError):
        evaluate_crosswalk(CrosswalkFacility(cw_uid="CW-0"), [])
