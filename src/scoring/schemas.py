from __future__ import annotations
from typing import Optional, Tuple, Union

from pydantic import BaseModel, Field

from .weights import PriorityStrategy


# --------- Accident hotspot row (engine input) ---------
class AccidentRecord(BaseModel):
    accident_id: Union[int, str] = Field(..., description="Opaque id; callers de-duplicate")
    lat: float
    lon: float
    fatality_count: int = Field(0, ge=0)
    serious_injury_count: int = Field(0, ge=0)
    minor_injury_count: int = Field(0, ge=0)
    reported_injury_count: int = Field(0, ge=0)
    accident_count: int = Field(0, ge=0)

    # carried through from the hotspot table, not used by severity
    casualty_count: int = Field(0, ge=0)
    district_code: Optional[str] = None
    year: Optional[int] = None

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "accident_id": 10231,
                "lat": 37.5003,
                "lon": 127.0001,
                "fatality_count": 0,
                "serious_injury_count": 1,
                "minor_injury_count": 3,
                "reported_injury_count": 0,
                "accident_count": 4,
                "casualty_count": 4,
                "district_code": "11680",
                "year": 2023,
            }
        },
    }


# --------- Crosswalk facilities (engine input) ---------
class CrosswalkFacility(BaseModel):
    has_signal: bool = False
    has_ped_button: bool = False
    has_ped_sound: bool = False
    is_highland: bool = False       # raised crossing
    has_bump: bool = False          # curb cut
    has_braille_block: bool = False  # tactile paving
    has_spotlight: bool = False

    cw_uid: Optional[str] = None
    address: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None

    model_config = {"frozen": True, "strict": True}


# --------- Outputs ---------
class AccidentSummary(BaseModel):
    unique_hotspots: int
    accidents: int
    casualties: int
    fatalities: int
    year_range: Optional[Tuple[int, int]] = None


class LocationScore(BaseModel):
    lat: float
    lon: float
    risk_score: float = Field(..., ge=0, le=100)
    safety_score: Optional[float] = Field(None, ge=0, le=100)
    priority_score: float = Field(..., ge=0, le=100)
    priority_level: str
    strategy: PriorityStrategy
    n_records: int = Field(..., ge=0)
    n_in_range: int = Field(..., ge=0)

