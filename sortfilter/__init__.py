"""Sort & filter configuration engine (UI-agnostic).

This package contains:
- filter value parsing (tagged union, canonical form)
- codecs between tabular and draft sort/filter state
- equality / diff against a saved baseline
- Scope + Routine/User tier merging
- filter-definition -> column mapping
- the draft session reducer
- in-memory row evaluation (pandas)
"""

from __future__ import annotations

from sortfilter.codec import (
    DraftFilterEntry,
    DraftSortEntry,
    decode_filters,
    decode_sorting,
    encode_filters,
    encode_sorting,
)
from sortfilter.columns import column_id_for, filter_id_for
from sortfilter.equality import diff_against_baseline, filters_equal, sorting_equal
from sortfilter.merge import merge_filters

__all__ = [
    "DraftFilterEntry",
    "DraftSortEntry",
    "column_id_for",
    "decode_filters",
    "decode_sorting",
    "diff_against_baseline",
    "encode_filters",
    "encode_sorting",
    "filter_id_for",
    "filters_equal",
    "merge_filters",
    "sorting_equal",
]
