from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Dict, Optional, Union

from medals.categories import compute_waffle_view
from medals.countries import compute_stacked_bar_view
from medals.data import MedalDataStore, get_store
from medals.filters import ViewFilters, normalize_filters
from medals.payloads import to_jsonable
from medals.records import RecordsLike, as_frame, normalize_medal_type
from medals.schemas import ViewFiltersModel, filters_from_model
from medals.timeseries import compute_streamgraph_view


logger = logging.getLogger(__name__)

FiltersLike = Union[ViewFilters, ViewFiltersModel, dict, None]


def resolve_filters(filters: FiltersLike) -> ViewFilters:
    if isinstance(filters, ViewFilters):
        return filters
    if isinstance(filters, ViewFiltersModel):
        return filters_from_model(filters)
    return normalize_filters(filters)


def compute_views(filters: FiltersLike, records: RecordsLike) -> Dict[str, Any]:
    f = resolve_filters(filters)
    df = as_frame(records)
    return {
        "stacked_bar": compute_stacked_bar_view(f, df),
        "streamgraph": compute_streamgraph_view(f, df),
        "waffle": compute_waffle_view(f, df),
    }


async def compute_dashboard(filters: FiltersLike = None, store: Optional[MedalDataStore] = None) -> Dict[str, Any]:
    """Load the records once (shared cache) and build every view payload."""
    store = store or get_store()
    try:
        records = await store.load()
        return compute_views(filters, records)
    except Exception:
        logger.exception("compute_dashboard failed")
        raise


def compute_debug(filters: FiltersLike, records: RecordsLike) -> Dict[str, Any]:
    f = resolve_filters(filters)
    df = as_frame(records)
    raw_rows = df.attrs.get("raw_rows")
    non_medal = int(df["medal_type"].map(normalize_medal_type).isna().sum()) if not df.empty else 0

    payload: Dict[str, Any] = {
        "filters": asdict(f),
        "row_counts": {
            "raw_rows": raw_rows,
            "records": int(len(df)),
            "dropped_rows": (int(raw_rows) - int(len(df))) if raw_rows is not None else None,
            "non_medal_rows": non_medal,
        },
        "countries": int(df["country"].nunique()) if not df.empty else 0,
        "categories": int(df["category"].nunique()) if not df.empty else 0,
        "date_range": None,
        "medal_type_counts": [],
    }
    if not df.empty:
        payload["date_range"] = {"first": df["date"].min(), "last": df["date"].max()}
        type_counts = df["medal_type"].value_counts().rename_axis("medal_type").reset_index(name="count")
        payload["medal_type_counts"] = type_counts.to_dict(orient="records")
    return to_jsonable(payload)

