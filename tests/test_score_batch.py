import json
from pathlib import Path

import pandas as pd
import pytest

from src.scoring.score_batch import level_summary, main, score_df
from src.scoring.schemas import AccidentRecord, CrosswalkFacility


def _inputs(tmp_path: Path):
    acc = tmp_path / "acc.csv"
    pd.DataFrame([
        {"accident_id": 1, "accident_lat": 37.5, "accident_lon": 127.0,
         "fatality_count": 1, "serious_injury_count": 0, "minor_injury_count": 0,
         "reported_injury_count": 0, "accident_count": 0},
        {"accident_id": 2, "accident_lat": 37.6, "accident_lon": 127.1,
         "fatality_count": 3, "serious_injury_count": 1, "minor_injury_count": 0,
         "reported_injury_count": 0, "accident_count": 2},
    ]).to_csv(acc, index=False)
    cw = tmp_path / "cw.csv"
    pd.DataFrame([
        {"cw_uid": "near", "address": "A", "crosswalk_lat": 37.5, "crosswalk_lon": 127.0,
         "has_signal": "Y", "has_ped_button": "Y"},
        {"cw_uid": "quiet", "address": "B", "crosswalk_lat": 37.0, "crosswalk_lon": 126.5,
         "has_signal": "Y", "has_ped_button": "N"},
    ]).to_csv(cw, index=False)
    return acc, cw


def test_score_df_sorted_by_priority():
    accidents = [AccidentRecord(accident_id=1, lat=37.5, lon=127.0, fatality_count=5)]
    cws = [
        CrosswalkFacility(cw_uid="far", lat=38.0, lon=127.0, has_signal=True),
        CrosswalkFacility(cw_uid="hot", lat=37.5, lon=127.0),
    ]
    df = score_df(cws, accidents)
    assert df["cw_uid"].tolist() == ["hot", "far"]
    assert (df["priority_score"].between(0, 100)).all()
    assert df.loc[1, "risk_score"] == 0.0


def test_level_summary_lists_every_level():
    df = pd.DataFrame({"priority_level": ["LOW", "LOW", "CRITICAL"]})
    out = level_summary(df)
    assert out["priority_level"].tolist() == ["CRITICAL", "HIGH", "MEDIUM", "LOW", "MINIMAL"]
    assert out["n_crosswalks"].tolist() == [1, 0, 0, 2, 0]


def test_cli_writes_outputs(tmp_path: Path, capsys):
    acc, cw = _inputs(tmp_path)
    out = tmp_path / "out" / "scored.csv"
    lv = tmp_path / "out" / "levels.csv"
    main(["--accidents", str(acc), "--crosswalks", str(cw), "--out", str(out), "--level_out", str(lv)])
    scored = pd.read_csv(out)
    assert len(scored) == 2
    near = scored[scored["cw_uid"] == "near"].iloc[0]
    assert near["risk_score"] == 11.75
    assert near["safety_score"] == 36.36
    assert near["strategy"] == "blended"
    assert pd.read_csv(lv)["n_crosswalks"].sum() == 2
    assert "[score_batch] wrote" in capsys.readouterr().out


def test_cli_risk_only_with_config(tmp_path: Path):
    acc, cw = _inputs(tmp_path)
    cfg = tmp_path / "w.json"
    cfg.write_text(json.dumps({"k": 80, "strategy": "blended"}))
    out = tmp_path / "scored.csv"
    main(["--accidents", str(acc), "--crosswalks", str(cw), "--out", str(out),
          "--config", str(cfg), "--strategy", "risk_only"])
    scored = pd.read_csv(out)
    assert (scored["priority_score"] == scored["risk_score"]).all()


def test_cli_bad_input_exits(tmp_path: Path):
    with pytest.raises(SystemExit):
        main(["--accidents", str(tmp_path / "missing.csv"), "--crosswalks", "x.csv",
              "--out", str(tmp_path / "o.csv")])
