from __future__ import annotations

from pydantic import BaseModel

from medals.filters import ViewFilters, normalize_filters


class ViewFiltersModel(BaseModel):
    top_n_countries: int = 12
    stream_countries: int = 8
    waffle_country: str = "United States"
    waffle_top_k: int = 12
    rank_by_diversity_desc: bool = True


def filters_from_model(model: ViewFiltersModel) -> ViewFilters:
    return normalize_filters(model.model_dump())
