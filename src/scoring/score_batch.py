# src/scoring/score_batch.py
from __future__ import annotations
import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

import pandas as pd

from src.ingest.ingest import load_accidents, load_crosswalks
from .evaluate import evaluate_crosswalk
from .priority import PriorityLevel
from .schemas import AccidentRecord, CrosswalkFacility
from .weights import DEFAULT_CONFIG, PriorityStrategy, ScoringConfig, load_config

logger = logging.getLogger(__name__)

OUT_COLS = [
    "cw_uid", "address", "lat", "lon",
    "risk_score", "safety_score", "priority_score", "priority_level",
    "strategy", "n_records", "n_in_range",
]


def score_df(
    crosswalks: Sequence[CrosswalkFacility],
    accidents: Sequence[AccidentRecord],
    config: ScoringConfig = DEFAULT_CONFIG,
    strategy: Optional[PriorityStrategy] = None,
) -> pd.DataFrame:
    outs = []
    for cw in crosswalks:
        s = evaluate_crosswalk(cw, accidents, config, strategy)
        outs.append({
            "cw_uid": cw.cw_uid,
            "address": cw.address,
            **s.model_dump(mode="json"),
        })
    df = pd.DataFrame(outs, columns=OUT_COLS)
    return df.sort_values("priority_score", ascending=False, kind="stable").reset_index(drop=True)


def level_summary(scored: pd.DataFrame) -> pd.DataFrame:
    order = [lv.value for lv in PriorityLevel]
    counts = scored["priority_level"].value_counts().reindex(order, fill_value=0)
    return pd.DataFrame({"priority_level": order, "n_crosswalks": counts.to_numpy()})


def main(argv: Optional[Sequence[str]] = None):
    logging.basicConfig(level=logging.INFO)
    ap = argparse.ArgumentParser()
    ap.add_argument("--accidents", required=True, help="CSV/NDJSON (glob ok) of accident hotspot rows")
    ap.add_argument("--crosswalks", required=True, help="CSV/NDJSON (glob ok) of crosswalk rows")
    ap.add_argument("--out", required=True, help="CSV to write scored crosswalks")
    ap.add_argument("--config", default="", help="Optional JSON weight config")
    ap.add_argument("--strategy", choices=[s.value for s in PriorityStrategy], default=None)
    ap.add_argument("--level_out", dest="level_out", default="", help="Optional per-level count csv")
    args = ap.parse_args(argv)

    try:
        config = load_config(args.config or None, strategy=args.strategy)
        accidents = load_accidents(args.accidents)
        crosswalks = load_crosswalks(args.crosswalks)
    except (FileNotFoundError, ValueError) as e:
        raise SystemExit(f"[score_batch] {e}")
    logger.info("scoring %d crosswalks against %d accident rows (%s)",
                len(crosswalks), len(accidents), config.strategy.value)

    scored = score_df(crosswalks, accidents, config)
    Path(args.out).parent.mkdir(parents=True, exist_ok=True)
    scored.to_csv(args.out, index=False)
    print(f"[score_batch] wrote {args.out} rows={len(scored)}")

    if args.level_out:
        grp = level_summary(scored)
        Path(args.level_out).parent.mkdir(parents=True, exist_ok=True)
        grp.to_csv(args.level_out, index=False)
        print(f"[score_batch] wrote {args.level_out} rows={len(grp)}")


if __name__ == "__main__":
    main()
