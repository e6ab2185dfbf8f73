"""Scope + Routine/User filter tiers.

Scope filters are read-only and lowest precedence. The routine/user tier wins
whole-entry on an id collision; values are never unioned.
"""

from __future__ import annotations

from typing import Any, Dict, List

from sortfilter.codec import filter_entries
from sortfilter.values import parse_filter_value


def has_values(entry: Dict[str, Any]) -> bool:
    return bool(parse_filter_value(entry.get("value")).values)


def active_filters(filters: Any) -> List[Dict[str, Any]]:
    """Entries with an empty value set are treated as absent."""
    return [f for f in filter_entries(filters) if has_values(f)]


def merge_filters(high_priority: Any, low_priority: Any) -> List[Dict[str, Any]]:
    """Effective filter set: ``high_priority`` verbatim, then unshadowed ``low_priority``.

    Call with routine/user filters as ``high_priority`` and scope filters as
    ``low_priority``. Entry objects are passed through, not copied.
    """
    merged = active_filters(high_priority)
    seen = {f["id"] for f in merged}
    for f in active_filters(low_priority):
        if f["id"] not in seen:
            merged.append(f)
            seen.add(f["id"])
    return merged


def user_tier_filters(effective: Any, scope_filters: Any) -> List[Dict[str, Any]]:
    """Drop scope-owned ids from an edited effective set, keeping Scope read-only."""
    scope_ids = {f["id"] for f in filter_entries(scope_filters)}
    return [f for f in filter_entries(effective) if f["id"] not in scope_ids]
