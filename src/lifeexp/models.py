# life expectancy value objects, rounding and the Common aggregate, plus the json shape used on disk

from __future__ import annotations
import json
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional
from .errors import DeserializationError

# synthetic entry holding the unweighted mean of every country
COMMON_KEY = "Common"


@dataclass(frozen=True)
class CountryStatistic:
    # immutable value object for one country (or the Common aggregate)
    all: float
    male: float
    female: float

    def to_dict(self) -> Dict[str, float]:
        return {"all": self.all, "male": self.male, "female": self.female}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CountryStatistic":
        try:
            values = {key: float(data[key]) for key in ("all", "male", "female")}
        except (KeyError, TypeError, ValueError) as exc:
            raise DeserializationError(f"Invalid country statistic {data!r}: {exc}") from exc

        for key, value in values.items():
            if not math.isfinite(value) or value < 0:
                raise DeserializationError(f"Field {key!r} out of range in {data!r}")
        return cls(**values)


# country name -> statistics, the only shape consumers ever see
StatisticsTable = Dict[str, CountryStatistic]


def mean(values: List[float]) -> float:
    # NaN for an empty list, so an empty table gives a NaN aggregate
    return sum(values) / len(values) if values else float("nan")


def shave_round(num: float, place: Optional[int] = None) -> float:
    """Round ``num`` to ``place`` decimals (default 2), halves away from zero.

    The builtin ``round`` uses banker's rounding, so the midpoint is handled
    explicitly. Non-finite input is returned unchanged.
    """
    if not math.isfinite(num):
        return num
    base = 10 ** (2 if place is None else place)
    scaled = abs(num) * base
    whole = math.floor(scaled)
    # scaled - whole is exact for any float
    if scaled - whole >= 0.5:
        whole += 1
    return math.copysign(whole, num) / base


def compute_common(table: StatisticsTable) -> CountryStatistic:
    """Mean of each field over every entry in ``table``, rounded to 2 places.

    ``table`` must not contain the Common entry yet. An empty table yields
    NaN for every field.
    """
    stats = list(table.values())
    return CountryStatistic(
        all=shave_round(mean([s.all for s in stats])),
        male=shave_round(mean([s.male for s in stats])),
        female=shave_round(mean([s.female for s in stats])),
    )


def table_to_json(table: StatisticsTable) -> str:
    # raises ValueError rather than writing NaN or Infinity
    return json.dumps({name: stat.to_dict() for name, stat in table.items()}, allow_nan=False)


def table_from_json(text: str) -> StatisticsTable:
    try:
        data = json.loads(text)
    except ValueError as exc:
        raise DeserializationError(f"Invalid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise DeserializationError(f"Expected a JSON object, got {type(data).__name__}")

    table: StatisticsTable = {}
    for name, entry in data.items():
        if not isinstance(entry, dict):
            raise DeserializationError(f"Entry for {name!r} is not an object")
        table[name] = CountryStatistic.from_dict(entry)
    return table
