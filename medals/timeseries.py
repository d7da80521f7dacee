from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Sequence

import pandas as pd

from medals.countries import rank_countries_by_total
from medals.dates import day_key, parse_day_key
from medals.filters import ViewFilters
from medals.payloads import to_jsonable
from medals.records import RecordsLike, as_frame


@dataclass(frozen=True)
class DailyCounts:
    days: List[pd.Timestamp]
    per_country_daily: Dict[str, Dict[str, int]]


@dataclass(frozen=True)
class DailyCountRow:
    day: pd.Timestamp
    counts: Dict[str, int]


def build_daily_counts(records: RecordsLike, countries: Iterable[str]) -> DailyCounts:
    """Medal counts per UTC day for each requested country.

    ``days`` holds only the days observed for those countries, ascending.
    """
    countries = list(countries)
    per_country: Dict[str, Dict[str, int]] = {c: {} for c in countries}
    df = as_frame(records)
    subset = df[df["country"].isin(countries)]
    if subset.empty:
        return DailyCounts(days=[], per_country_daily=per_country)

    keys = subset["date"].map(day_key)
    counts = subset.assign(day=keys).groupby(["country", "day"], sort=False).size()
    for (country, key), n in counts.items():
        per_country[country][key] = int(n)

    day_keys = sorted(keys.unique())
    return DailyCounts(days=[parse_day_key(k) for k in day_keys], per_country_daily=per_country)


def build_daily_matrix(
    days: Sequence[pd.Timestamp],
    per_country_daily: Dict[str, Dict[str, int]],
    countries: Sequence[str],
) -> List[DailyCountRow]:
    # Rows follow `days`, columns follow `countries`; no calendar gap filling.
    rows: List[DailyCountRow] = []
    for key in (day_key(d) for d in days):
        counts = {c: int(per_country_daily.get(c, {}).get(key, 0)) for c in countries}
        rows.append(DailyCountRow(day=parse_day_key(key), counts=counts))
    return rows


def daily_matrix_frame(rows: Sequence[DailyCountRow], countries: Sequence[str]) -> pd.DataFrame:
    columns = list(countries)
    index = pd.DatetimeIndex([r.day for r in rows], tz="UTC", name="day")
    if not rows:
        return pd.DataFrame(columns=columns, index=index, dtype="int64")
    return pd.DataFrame([r.counts for r in rows], index=index, columns=columns).astype("int64")


def compute_streamgraph_view(filters: ViewFilters, records: RecordsLike) -> Dict[str, Any]:
    df = as_frame(records)
    totals = rank_countries_by_total(df, filters.stream_countries)
    countries = [t.country for t in totals]
    daily = build_daily_counts(df, countries)
    rows = build_daily_matrix(daily.days, daily.per_country_daily, countries)
    return to_jsonable(
        {
            "filters": asdict(filters),
            "countries": countries,
            "totals": totals,
            "days": daily.days,
            "rows": rows,
        }
    )
