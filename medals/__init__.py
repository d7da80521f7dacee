"""Core (UI-agnostic) medal dashboard logic.

This package contains:
- data loading (CSV/XLSX -> pandas) behind a load-once store
- row normalization and date helpers
- per-view aggregations (country summary, daily series, category breakdown)
- view payload functions (JSON-serializable payloads)
"""
