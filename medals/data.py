from __future__ import annotations

import asyncio
import logging
import os
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Dict, Optional, Union

import pandas as pd

from medals.records import SourceFormatError, normalize_frame


logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1] / "data"
DEFAULT_SOURCE = DATA_DIR / "medallists.csv"
SOURCE_ENV_VAR = "MEDALLISTS_PATH"

DEFAULT_CATEGORY_COLUMN = "discipline"

EXCEL_SUFFIXES = {".xlsx"}

PathLike = Union[str, Path]


def source_columns(category_column: str = DEFAULT_CATEGORY_COLUMN) -> Dict[str, str]:
    return {
        "medal_date": "date",
        "medal_type": "medal_type",
        "country": "country",
        category_column: "category",
    }


def get_source_path() -> Path:
    override = os.environ.get(SOURCE_ENV_VAR, "").strip()
    return Path(override) if override else DEFAULT_SOURCE


def read_source(path: PathLike, category_column: str = DEFAULT_CATEGORY_COLUMN) -> pd.DataFrame:
    """Read the medallists table and return normalized records.

    The raw row count before normalization is kept in ``attrs["raw_rows"]``.
    """
    suffix = Path(str(path)).suffix.lower()
    if suffix == ".csv" or not suffix:
        raw = pd.read_csv(path)
    elif suffix in EXCEL_SUFFIXES:
        raw = pd.read_excel(path)
    else:
        raise SourceFormatError(f"unsupported source type: {suffix}")
    df = normalize_frame(raw, source_columns(category_column))
    df.attrs["raw_rows"] = int(len(raw))
    return df


Reader = Callable[[PathLike, str], pd.DataFrame]


class MedalDataStore:
    """Load-once holder for the normalized medallist records.

    The first ``load`` starts a single fetch on a worker thread; every caller,
    from any event loop or thread, shares that fetch. The result (or failure)
    stays in the slot until ``clear``.
    """

    def __init__(
        self,
        source: Optional[PathLike] = None,
        *,
        reader: Reader = read_source,
        category_column: str = DEFAULT_CATEGORY_COLUMN,
    ) -> None:
        self.source = source
        self.category_column = category_column
        self._reader = reader
        self._lock = threading.Lock()
        self._future: Optional[Future] = None
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="medal-loader")

    @property
    def source_path(self) -> Path:
        return Path(self.source) if self.source is not None else get_source_path()

    @property
    def is_loaded(self) -> bool:
        with self._lock:
            fut = self._future
        return fut is not None and fut.done() and not fut.cancelled() and fut.exception() is None

    def _fetch(self) -> pd.DataFrame:
        path = self.source_path
        try:
            df = self._reader(path, self.category_column)
        except Exception:
            logger.exception("loading medallists from %s failed", path)
            raise
        logger.info("loaded %d medal records from %s (%s raw rows)", len(df), path, df.attrs.get("raw_rows", "?"))
        return df

    def _ensure_started(self) -> Future:
        with self._lock:
            if self._future is None:
                logger.info("fetching medallists from %s", self.source_path)
                self._future = self._executor.submit(self._fetch)
            return self._future

    async def load(self) -> pd.DataFrame:
        fut = self._ensure_started()
        return await asyncio.shield(asyncio.wrap_future(fut))

    def load_blocking(self) -> pd.DataFrame:
        return self._ensure_started().result()

    def clear(self) -> None:
        with self._lock:
            self._future = None

    def close(self) -> None:
        """Stop the loader thread; a fetch already running is waited for."""
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "MedalDataStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


_default_store: Optional[MedalDataStore] = None
_default_lock = threading.Lock()


def get_store() -> MedalDataStore:
    global _default_store
    with _default_lock:
        if _default_store is None:
            _default_store = MedalDataStore()
        return _default_store


async def load_all_records() -> pd.DataFrame:
    return await get_store().load()


def clear_cache() -> None:
    get_store().clear()
