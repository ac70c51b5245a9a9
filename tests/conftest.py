import math
import pytest

from src.scoring.schemas import AccidentRecord

TARGET = (37.5, 127.0)
M_PER_DEG_LAT = 6_371_000.0 * math.pi / 180.0


def north_of(lat: float, lon: float, meters: float):
    """Point `meters` due north of (lat, lon) on the haversine sphere."""
    return lat + meters / M_PER_DEG_LAT, lon


@pytest.fixture
def make_record():
    counter = {"n": 0}

    def _make(meters: float, target=TARGET, **counts):
        counter["n"] += 1
        lat, lon = north_of(*target, meters)
        return AccidentRecord(accident_id=counter["n"], lat=lat, lon=lon, **counts)

    return _make
