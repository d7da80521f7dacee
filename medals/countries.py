from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

import pandas as pd

from medals.filters import ViewFilters
from medals.payloads import to_jsonable
from medals.records import MEDAL_ORDER, RecordsLike, as_frame, normalize_medal_type


@dataclass(frozen=True)
class CountryMedalSummary:
    country: str
    gold: int
    silver: int
    bronze: int
    total: int
    distinct_categories: int
    diversity_ratio: float


@dataclass(frozen=True)
class CountryTotal:
    country: str
    total: int


def check_limit(name: str, value: Optional[int]) -> None:
    if value is not None and value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def _medal_label(raw: object) -> Optional[str]:
    medal = normalize_medal_type(raw)
    return medal.value if medal is not None else None


def _medal_rows(df: pd.DataFrame) -> pd.DataFrame:
    medal = df["medal_type"].map(_medal_label)
    return df.assign(medal=medal).dropna(subset=["medal"])


def summarize_by_country(
    records: RecordsLike,
    top_n: Optional[int],
    rank_by_diversity_desc: bool = True,
) -> List[CountryMedalSummary]:
    """Per-country medal tallies and discipline diversity.

    Countries are ranked by total medals and cut to ``top_n`` (``None`` keeps
    all), then that set is ordered by diversity ratio. Both sorts are stable.
    """
    check_limit("top_n", top_n)
    medals = _medal_rows(as_frame(records))
    if medals.empty:
        return []

    countries = medals["country"].drop_duplicates().tolist()
    medal_cols = [m.value for m in MEDAL_ORDER]
    tally = (
        medals.groupby(["country", "medal"]).size()
        .unstack(fill_value=0)
        .reindex(index=countries, columns=medal_cols, fill_value=0)
    )
    distinct = medals.groupby("country")["category"].nunique().reindex(countries)

    summary = pd.DataFrame(
        {
            "country": countries,
            "gold": tally["Gold"].to_numpy(),
            "silver": tally["Silver"].to_numpy(),
            "bronze": tally["Bronze"].to_numpy(),
            "distinct_categories": distinct.to_numpy(),
        }
    )
    summary["total"] = summary[["gold", "silver", "bronze"]].sum(axis=1)
    has_total = summary["total"] > 0
    summary["diversity_ratio"] = (summary["distinct_categories"] / summary["total"].where(has_total)).where(has_total, 0.0)

    top = summary.sort_values("total", ascending=False, kind="stable")
    if top_n is not None:
        top = top.head(top_n)
    top = top.sort_values("diversity_ratio", ascending=not rank_by_diversity_desc, kind="stable")

    return [
        CountryMedalSummary(
            country=str(r.country),
            gold=int(r.gold),
            silver=int(r.silver),
            bronze=int(r.bronze),
            total=int(r.total),
            distinct_categories=int(r.distinct_categories),
            diversity_ratio=float(r.diversity_ratio),
        )
        for r in top.itertuples(index=False)
    ]


def rank_countries_by_total(records: RecordsLike, n: Optional[int]) -> List[CountryTotal]:
    check_limit("n", n)
    df = as_frame(records)
    if df.empty:
        return []
    totals = df.groupby("country", sort=False).size().sort_values(ascending=False, kind="stable")
    if n is not None:
        totals = totals.head(n)
    return [CountryTotal(country=str(c), total=int(t)) for c, t in totals.items()]


def compute_stacked_bar_view(filters: ViewFilters, records: RecordsLike) -> Dict[str, Any]:
    summaries = summarize_by_country(records, filters.top_n_countries, filters.rank_by_diversity_desc)
    return to_jsonable(
        {
            "filters": asdict(filters),
            "medal_order": [m.value for m in MEDAL_ORDER],
            "sort": "diversity_desc" if filters.rank_by_diversity_desc else "diversity_asc",
            "countries": summaries,
        }
    )
