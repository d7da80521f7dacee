from __future__ import annotations

import math
from typing import Any, Optional

import numpy as np
import pandas as pd
from fastapi.encoders import jsonable_encoder


def _safe_float(value: object) -> Optional[float]:
    try:
        out = float(value)  # type: ignore[arg-type]
    except Exception:
        return None
    if math.isnan(out) or math.isinf(out):
        return None
    return out


PAYLOAD_ENCODERS = {
    type(pd.NA): lambda _: None,
    type(pd.NaT): lambda _: None,
    np.integer: int,
    float: _safe_float,
    np.floating: _safe_float,
    np.bool_: bool,
    np.ndarray: lambda arr: arr.tolist(),
    pd.Timestamp: lambda ts: ts.isoformat(),
}


def to_jsonable(data: Any) -> Any:
    """Encode a view payload with safe handling of pandas/numpy values."""
    return jsonable_encoder(data, custom_encoder=PAYLOAD_ENCODERS)
