from __future__ import annotations
import argparse
import json
import logging
import math
from glob import glob
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

from src.scoring.schemas import AccidentRecord, CrosswalkFacility

logger = logging.getLogger(__name__)


# Storage column names of the accident hotspot table.
ACCIDENT_REQUIRED_COLS = ["accident_id", "accident_lat", "accident_lon"]
ACCIDENT_COUNT_COLS = {
    "fatality_count": "fatality_count",
    "serious_injury_count": "serious_injury_count",
    "minor_injury_count": "minor_injury_count",
    "reported_injury_count": "reported_injury_count",
    "accident_count": "accident_count",
    "casualty_count": "casualty_count",
}

CROSSWALK_REQUIRED_COLS = ["crosswalk_lat", "crosswalk_lon"]
# model field -> accepted storage column names (snake case first)
CROSSWALK_FLAG_COLS = {
    "has_signal": ("has_signal", "hasSignal"),
    "has_ped_button": ("has_ped_button", "hasPedButton"),
    "has_ped_sound": ("has_ped_sound", "hasPedSound"),
    "is_highland": ("is_highland", "isHighland"),
    "has_bump": ("has_bump", "hasBump"),
    "has_braille_block": ("has_braille_block", "hasBrailleBlock"),
    "has_spotlight": ("has_spotlight", "hasSpotlight"),
}

_TRUE_TOKENS = {"y", "yes", "true", "t", "1"}


# ------------- Cell coercion -------------
def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def coerce_count(value: Any, field: str = "value") -> int:
    """Non-negative int from a storage cell; anything unusable becomes 0 with a warning."""
    if _is_missing(value):
        logger.warning('Field normalization: "%s" is missing, using fallback value 0', field)
        return 0
    try:
        n = float(value)
    except (TypeError, ValueError):
        logger.warning('Field normalization: "%s" has invalid value (wrong type: %r), using 0', field, value)
        return 0
    if not math.isfinite(n):
        logger.warning('Field normalization: "%s" has invalid value (%r), using 0', field, value)
        return 0
    if n < 0:
        logger.warning('Field normalization: "%s" is negative (%r), using 0', field, value)
        return 0
    return int(n)


def coerce_flag(value: Any) -> bool:
    """Tri-state storage flag (NULL / Y / N / 0 / 1 / bool) -> strict bool; NULL is False."""
    if _is_missing(value):
        return False
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, (int, float, np.integer, np.floating)):
        return float(value) != 0.0
    return str(value).strip().lower() in _TRUE_TOKENS


def _coerce_coord(value: Any) -> Optional[float]:
    try:
        x = float(value)
    except (TypeError, ValueError):
        return None
    return x if math.isfinite(x) else None


def _optional_int(value: Any) -> Optional[int]:
    if _is_missing(value):
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


# ------------- Row -> record -------------
def accident_from_row(row: Dict[str, Any]) -> Optional[AccidentRecord]:
    lat = _coerce_coord(row.get("accident_lat"))
    lon = _coerce_coord(row.get("accident_lon"))
    if lat is None or lon is None:
        logger.warning("Dropping accident %r: non-finite coordinates", row.get("accident_id"))
        return None
    accident_id = row.get("accident_id")
    if _is_missing(accident_id):
        logger.warning("Dropping accident row without accident_id")
        return None
    if isinstance(accident_id, float) and accident_id.is_integer():
        accident_id = int(accident_id)
    counts = {field: coerce_count(row.get(col), col) for field, col in ACCIDENT_COUNT_COLS.items()}
    district = row.get("district_code")
    return AccidentRecord(
        accident_id=accident_id,
        lat=lat,
        lon=lon,
        district_code=None if _is_missing(district) else str(district),
        year=_optional_int(row.get("year")),
        **counts,
    )


def crosswalk_from_row(row: Dict[str, Any]) -> Optional[CrosswalkFacility]:
    lat = _coerce_coord(row.get("crosswalk_lat"))
    lon = _coerce_coord(row.get("crosswalk_lon"))
    if lat is None or lon is None:
        logger.warning("Dropping crosswalk %r: non-finite coordinates", row.get("cw_uid"))
        return None
    flags = {}
    for field, cols in CROSSWALK_FLAG_COLS.items():
        # first non-missing value across the accepted spellings
        raw = next((row[c] for c in cols if not _is_missing(row.get(c))), None)
        flags[field] = coerce_flag(raw)
    uid = row.get("cw_uid")
    address = row.get("address")
    return CrosswalkFacility(
        cw_uid=None if _is_missing(uid) else str(uid),
        address=None if _is_missing(address) else str(address),
        lat=lat,
        lon=lon,
        **flags,
    )


# ------------- Files -------------
def _read_table(paths: List[str]) -> pd.DataFrame:
    frames = []
    for p in paths:
        if p.endswith((".ndjson", ".jsonl")):
            rows = []
            with open(p, "r", encoding="utf-8") as f:
                for line in f:
                    if not line.strip():
                        continue
                    rows.append(json.loads(line))
            frames.append(pd.DataFrame(rows))
        else:
            frames.append(pd.read_csv(p))
    if not frames:
        return pd.DataFrame()
    return pd.concat(frames, ignore_index=True)


def _resolve(input_glob: str) -> List[str]:
    paths = sorted(glob(str(input_glob)))
    if not paths:
        raise FileNotFoundError(f"No files matched: {input_glob}")
    return paths


def _require(df: pd.DataFrame, cols: Iterable[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")


def _drop_bad_coords(df: pd.DataFrame, lat_col: str, lon_col: str) -> pd.DataFrame:
    lat = pd.to_numeric(df[lat_col], errors="coerce")
    lon = pd.to_numeric(df[lon_col], errors="coerce")
    ok = np.isfinite(lat.to_numpy(dtype=float)) & np.isfinite(lon.to_numpy(dtype=float))
    if not ok.all():
        logger.warning("Dropping %d rows with non-finite coordinates", int((~ok).sum()))
    return df[ok]


def _dedup(df: pd.DataFrame) -> pd.DataFrame:
    # same accident_id seen twice: last row wins
    return df.drop_duplicates(subset=["accident_id"], keep="last")


def load_accidents(input_glob: str) -> List[AccidentRecord]:
    df = _read_table(_resolve(input_glob))
    _require(df, ACCIDENT_REQUIRED_COLS)
    for col in ACCIDENT_COUNT_COLS.values():
        if col not in df.columns:
            logger.warning('Column "%s" absent, treating as 0 for all rows', col)
            df[col] = 0
    # drop unusable rows before picking the last duplicate
    df = _dedup(_drop_bad_coords(df, "accident_lat", "accident_lon"))
    out = [accident_from_row(r) for r in df.to_dict(orient="records")]
    return [r for r in out if r is not None]


def load_crosswalks(input_glob: str) -> List[CrosswalkFacility]:
    df = _read_table(_resolve(input_glob))
    _require(df, CROSSWALK_REQUIRED_COLS)
    out = [crosswalk_from_row(r) for r in df.to_dict(orient="records")]
    return [c for c in out if c is not None]


def process(input_glob: str, out_path: str = "data/accidents_clean.csv") -> int:
    """Sanitize raw accident rows into a clean CSV the scorer can trust."""
    records = load_accidents(input_glob)
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame([r.model_dump() for r in records])
    if not df.empty:
        df = df.rename(columns={"lat": "accident_lat", "lon": "accident_lon"})
    df.to_csv(out, index=False)
    print(f"[ingest] wrote {len(df)} accident rows to {out}")
    return len(df)


def main():
    logging.basicConfig(level=logging.INFO)
    ap = argparse.ArgumentParser()
    ap.add_argument("--input", type=str, default="data/raw/accidents*.csv")
    ap.add_argument("--out", type=str, default="data/accidents_clean.csv")
    args = ap.parse_args()
    process(args.input, args.out)


if __name__ == "__main__":
    main()
