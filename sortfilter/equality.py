from __future__ import annotations

import json
from typing import Any, Callable, Hashable, List, Optional, Sequence, Tuple, TypeVar

from sortfilter.codec import DraftFilterEntry, DraftSortEntry, filter_entries, sort_entries
from sortfilter.records import routine_table_filters
from sortfilter.values import canonical_value, sorted_values

T = TypeVar("T")


def normalize_sorting(sorting: Any) -> List[Tuple[str, bool]]:
    return [(s["id"], s["desc"]) for s in sort_entries(sorting)]


def normalize_filters(filters: Any) -> List[Tuple[str, str]]:
    """``(id, canonical value)`` pairs ordered by id."""
    return sorted((f["id"], canonical_value(f.get("value"))) for f in filter_entries(filters))


def sorting_equal(a: Any, b: Any) -> bool:
    """Order matters: swapping primary and secondary sort is a change."""
    return normalize_sorting(a) == normalize_sorting(b)


def filters_equal(a: Any, b: Any) -> bool:
    """Order-independent comparison after canonicalizing both sides."""
    return normalize_filters(a) == normalize_filters(b)


def sort_match_key(entry: DraftSortEntry) -> Tuple[str, str]:
    return (entry.column_id, entry.direction)


def filter_match_key(entry: DraftFilterEntry) -> Tuple[str, str]:
    value_set = json.dumps(sorted_values(set(entry.values)), separators=(",", ":"), default=str)
    return (entry.filter_id, value_set)


def diff_against_baseline(
    draft: Sequence[T],
    baseline: Sequence[T],
    matcher: Callable[[T], Hashable],
) -> List[T]:
    """Draft entries with no equal counterpart in ``baseline``.

    Used to mark rows that are not saved in the current routine.
    """
    saved = {matcher(entry) for entry in baseline}
    return [entry for entry in draft if matcher(entry) not in saved]


def has_unsaved_changes(
    sorting: Any,
    user_filters: Any,
    group_by: Optional[str],
    routine: Optional[Any] = None,
) -> bool:
    """Live table state vs the selected routine.

    Without a routine, any sorting or user filter counts as unsaved.
    """
    if routine is None:
        return bool(sort_entries(sorting)) or bool(filter_entries(user_filters))
    return (
        not sorting_equal(sorting, routine.sorting)
        or not filters_equal(user_filters, routine_table_filters(routine))
        or (group_by or None) != (routine.group_by or None)
    )
