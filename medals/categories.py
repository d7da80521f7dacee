from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List

from medals.countries import check_limit
from medals.filters import ViewFilters
from medals.payloads import to_jsonable
from medals.records import RecordsLike, as_frame


OTHER_CATEGORY = "Other"


@dataclass(frozen=True)
class CategoryCount:
    category: str
    count: int


def breakdown_by_category(records: RecordsLike, country: str, top_k: int) -> List[CategoryCount]:
    """Top ``top_k`` categories for one country, the rest folded into ``Other``."""
    check_limit("top_k", top_k)
    df = as_frame(records)
    subset = df[df["country"] == country]
    if subset.empty:
        return []

    counts = subset.groupby("category", sort=False).size().sort_values(ascending=False, kind="stable")
    out = [CategoryCount(category=str(c), count=int(n)) for c, n in counts.head(top_k).items()]
    rest = int(counts.iloc[top_k:].sum())
    if rest > 0:
        out.append(CategoryCount(category=OTHER_CATEGORY, count=rest))
    return out


def compute_waffle_view(filters: ViewFilters, records: RecordsLike) -> Dict[str, Any]:
    entries = breakdown_by_category(records, filters.waffle_country, filters.waffle_top_k)
    total = sum(e.count for e in entries)
    return to_jsonable(
        {
            "filters": asdict(filters),
            "country": filters.waffle_country,
            "total": total,
            "entries": [
                {"category": e.category, "count": e.count, "share": (e.count / total) if total else 0.0}
                for e in entries
            ],
        }
    )
