from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ViewFilters:
    top_n_countries: int = 12
    stream_countries: int = 8
    waffle_country: str = "United States"
    waffle_top_k: int = 12
    rank_by_diversity_desc: bool = True


def _as_bounded_int(value: object, default: int, *, low: int, high: int) -> int:
    try:
        out = int(value)  # type: ignore[arg-type]
    except Exception:
        out = default
    return max(low, min(high, out))


def _as_bool(value: object, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() not in {"0", "false", "no", "off", ""}
    return bool(value)


def normalize_filters(raw: Optional[dict]) -> ViewFilters:
    raw = raw or {}
    defaults = ViewFilters()

    waffle_country = str(raw.get("waffle_country") or "").strip() or defaults.waffle_country

    return ViewFilters(
        top_n_countries=_as_bounded_int(raw.get("top_n_countries", defaults.top_n_countries), defaults.top_n_countries, low=1, high=250),
        stream_countries=_as_bounded_int(raw.get("stream_countries", defaults.stream_countries), defaults.stream_countries, low=1, high=50),
        waffle_country=waffle_country,
        waffle_top_k=_as_bounded_int(raw.get("waffle_top_k", defaults.waffle_top_k), defaults.waffle_top_k, low=0, high=100),
        rank_by_diversity_desc=_as_bool(raw.get("rank_by_diversity_desc"), defaults.rank_by_diversity_desc),
    )
