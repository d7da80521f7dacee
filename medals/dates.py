from __future__ import annotations

import datetime as dt
import numbers
from typing import Optional

import numpy as np
import pandas as pd


def _is_missing(value: object) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def parse_flexible_date(value: object) -> Optional[pd.Timestamp]:
    """Coerce ``value`` into a UTC timestamp, or ``None`` when that is not possible.

    Numbers are read as epoch milliseconds. Strings without an offset are
    taken as UTC.
    """
    if _is_missing(value) or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        # "0" is read like the number 0
        if not value or value == "0":
            return None
    try:
        if isinstance(value, (pd.Timestamp, dt.datetime, dt.date, np.datetime64)):
            ts = pd.Timestamp(value)
        elif isinstance(value, numbers.Number):
            if value == 0:
                return None
            ts = pd.to_datetime(value, unit="ms", utc=True)
        else:
            ts = pd.to_datetime(value, utc=True)
    except (TypeError, ValueError, OverflowError, pd.errors.OutOfBoundsDatetime):
        return None
    if not isinstance(ts, pd.Timestamp) or pd.isna(ts):
        return None
    return _as_utc(ts)


def _as_utc(ts: pd.Timestamp) -> pd.Timestamp:
    if ts.tzinfo is None:
        return ts.tz_localize("UTC")
    return ts.tz_convert("UTC")


def day_key(value: object) -> str:
    """UTC calendar day of ``value`` as ``YYYY-MM-DD``."""
    ts = _as_utc(pd.Timestamp(value))
    return f"{ts.year:04d}-{ts.month:02d}-{ts.day:02d}"


def parse_day_key(key: str) -> pd.Timestamp:
    parts = str(key).strip().split("-")
    if len(parts) != 3:
        raise ValueError(f"invalid day key: {key!r}")
    year, month, day = (int(p) for p in parts)
    return pd.Timestamp(year=year, month=month, day=day, tz="UTC")
