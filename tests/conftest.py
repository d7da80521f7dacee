import sys
from pathlib import Path

import pandas as pd
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from medals.data import MedalDataStore, source_columns  # noqa: E402
from medals.records import normalize_frame  # noqa: E402


RAW_ROWS = [
    {"medal_date": "2024-07-27", "medal_type": "Gold Medal", "country": "USA", "discipline": "Swimming"},
    {"medal_date": "2024-07-27", "medal_type": "Silver Medal", "country": "USA", "discipline": "Swimming"},
    {"medal_date": "2024-07-28", "medal_type": "Gold Medal", "country": "France", "discipline": "Judo"},
]

RICH_ROWS = [
    {"medal_date": "2024-07-27", "medal_type": "Gold Medal", "country": "United States", "discipline": "Swimming"},
    {"medal_date": "2024-07-27", "medal_type": "Bronze Medal", "country": "United States", "discipline": "Swimming"},
    {"medal_date": "2024-07-28", "medal_type": "Silver Medal", "country": "United States", "discipline": "Athletics"},
    {"medal_date": "2024-07-30", "medal_type": "Gold Medal", "country": "United States", "discipline": "Gymnastics"},
    {"medal_date": "2024-07-30", "medal_type": "Gold Medal", "country": "United States", "discipline": "Athletics"},
    {"medal_date": "2024-07-30", "medal_type": "Gold Medal", "country": "United States", "discipline": "Athletics"},
    {"medal_date": "2024-07-27", "medal_type": "Gold Medal", "country": "China", "discipline": "Diving"},
    {"medal_date": "2024-07-28", "medal_type": "Gold Medal", "country": "China", "discipline": "Diving"},
    {"medal_date": "2024-07-28", "medal_type": "Silver Medal", "country": "China", "discipline": "Shooting"},
    {"medal_date": "2024-07-31", "medal_type": "Bronze Medal", "country": "China", "discipline": "Table Tennis"},
    {"medal_date": "2024-07-28", "medal_type": "Gold Medal", "country": "France", "discipline": "Judo"},
    {"medal_date": "2024-07-29", "medal_type": "Bronze Medal", "country": "France", "discipline": "Rugby Sevens"},
    {"medal_date": "2024-07-29", "medal_type": "Participation", "country": "France", "discipline": "Rugby Sevens"},
    {"medal_date": "2024-07-31", "medal_type": "Silver Medal", "country": "Japan", "discipline": "Judo"},
    {"medal_date": "not a date", "medal_type": "Gold Medal", "country": "Japan", "discipline": "Judo"},
    {"medal_date": "2024-07-31", "medal_type": "Gold Medal", "country": "  ", "discipline": "Judo"},
    {"medal_date": "2024-07-31", "medal_type": "Gold Medal", "country": "Japan", "discipline": None},
]


def frame_from(rows):
    return normalize_frame(pd.DataFrame(rows), source_columns())


@pytest.fixture
def sample_records() -> pd.DataFrame:
    return frame_from(RAW_ROWS)


@pytest.fixture
def rich_records() -> pd.DataFrame:
    return frame_from(RICH_ROWS)


@pytest.fixture
def make_store():
    stores = []

    def factory(*args, **kwargs):
        store = MedalDataStore(*args, **kwargs)
        stores.append(store)
        return store

    yield factory
    for store in stores:
        store.close()
