from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Union

import pandas as pd

from medals.dates import parse_flexible_date


class MedalType(str, Enum):
    GOLD = "Gold"
    SILVER = "Silver"
    BRONZE = "Bronze"


MEDAL_ORDER: List[MedalType] = [MedalType.GOLD, MedalType.SILVER, MedalType.BRONZE]

RECORD_COLUMNS = ["date", "medal_type", "country", "category"]
TEXT_COLUMNS = ["medal_type", "country", "category"]
NA_TOKENS = {"nan", "None", "<NA>", "NaT", ""}


class SourceFormatError(ValueError):
    """The source table cannot be turned into medal records at all."""


@dataclass(frozen=True)
class MedalRecord:
    date: pd.Timestamp
    medal_type: str
    country: str
    category: str

    @property
    def medal(self) -> Optional[MedalType]:
        return normalize_medal_type(self.medal_type)


def normalize_medal_type(raw: object) -> Optional[MedalType]:
    if raw is None:
        return None
    s = str(raw).strip()
    for medal in MEDAL_ORDER:
        if s.startswith(medal.value):
            return medal
    return None


def coerce_str_safe(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    for col in cols:
        if col in df.columns:
            series = df[col].astype("string").str.strip()
            df[col] = series.mask(series.isin(NA_TOKENS))
    return df


def normalize_frame(raw: pd.DataFrame, source_columns: Dict[str, str]) -> pd.DataFrame:
    """Rename, parse and validate raw source rows.

    ``source_columns`` maps source column names onto ``RECORD_COLUMNS``.
    Rows missing any of the record fields after trimming are dropped.
    """
    missing = [src for src in source_columns if src not in raw.columns]
    if missing:
        raise SourceFormatError(f"source is missing required columns: {', '.join(missing)}")

    df = raw[list(source_columns)].rename(columns=source_columns).copy()
    df["date"] = pd.to_datetime(df["date"].map(parse_flexible_date), utc=True)
    df = coerce_str_safe(df, TEXT_COLUMNS)
    df = df.dropna(subset=RECORD_COLUMNS)
    return df[RECORD_COLUMNS].reset_index(drop=True)


def empty_frame() -> pd.DataFrame:
    df = pd.DataFrame({c: pd.Series(dtype="string") for c in TEXT_COLUMNS})
    df.insert(0, "date", pd.Series(dtype="datetime64[ns, UTC]"))
    return df


RecordsLike = Union[pd.DataFrame, Iterable[MedalRecord]]


def as_frame(records: RecordsLike) -> pd.DataFrame:
    """Accept a normalized frame or an iterable of ``MedalRecord``."""
    if isinstance(records, pd.DataFrame):
        return records
    rows = [asdict(r) for r in records]
    if not rows:
        return empty_frame()
    df = pd.DataFrame(rows, columns=RECORD_COLUMNS)
    df["date"] = pd.to_datetime(df["date"], utc=True)
    return df


def iter_records(df: pd.DataFrame) -> Iterator[MedalRecord]:
    for row in df[RECORD_COLUMNS].itertuples(index=False):
        yield MedalRecord(date=row.date, medal_type=row.medal_type, country=row.country, category=row.category)
