"""In-memory row evaluation for table views.

AND across filter entries, OR within one entry's value set.
"""

from __future__ import annotations

import logging
import numbers
from typing import Any, Dict, List, Optional

import pandas as pd

from sortfilter.codec import sort_entries
from sortfilter.columns import column_id_for
from sortfilter.merge import active_filters, merge_filters
from sortfilter.values import ScalarValue, parse_filter_value

logger = logging.getLogger(__name__)

COMPARISON_CONDITIONS = frozenset(
    {"greaterThan", "lessThan", "greaterThanOrEqual", "lessThanOrEqual", "before", "after", "between"}
)


def resolve_column(df: pd.DataFrame, entry_id: str) -> Optional[str]:
    if entry_id in df.columns:
        return entry_id
    column_id = column_id_for(entry_id)
    if column_id is not None and column_id in df.columns:
        return column_id
    return None


def _comparable(series: pd.Series, bounds: List[ScalarValue]):
    """Coerce a column and its bounds to one kind, picked by the first bound.

    String bounds compare as UTC dates, anything else as numbers. A bound of the
    other kind comes back missing.
    """
    if isinstance(bounds[0], str):
        left = pd.to_datetime(series, errors="coerce", utc=True)
        return left, [pd.to_datetime(b, errors="coerce", utc=True) if isinstance(b, str) else pd.NaT for b in bounds]
    return pd.to_numeric(series, errors="coerce"), [float("nan") if isinstance(b, str) else b for b in bounds]


def _compare(left: pd.Series, condition: str, bounds: List[Any]) -> pd.Series:
    lower = bounds[0]
    if condition in ("greaterThan", "after"):
        return left > lower
    if condition in ("lessThan", "before"):
        return left < lower
    if condition == "greaterThanOrEqual":
        return left >= lower
    if condition == "lessThanOrEqual":
        return left <= lower
    # between, inclusive; an open upper end acts as >=
    if len(bounds) < 2:
        return left >= lower
    return (left >= lower) & (left <= bounds[1])


def _contains_any(series: pd.Series, values: List[ScalarValue]) -> pd.Series:
    text = series.astype("string").str.lower()
    mask = pd.Series(False, index=series.index)
    for v in values:
        mask |= text.str.contains(str(v).lower(), regex=False, na=False).astype(bool)
    return mask


def condition_mask(series: pd.Series, condition: Optional[str], values: List[ScalarValue]) -> pd.Series:
    if condition in (None, "is", "equals"):
        return series.isin(values)
    if condition in ("isNot", "notEquals"):
        return ~series.isin(values)
    if condition == "contains":
        return _contains_any(series, values)
    if condition == "doesNotContain":
        return ~_contains_any(series, values)
    if condition not in COMPARISON_CONDITIONS:
        logger.debug("Unknown filter condition %r; matching as 'is'", condition)
        return series.isin(values)

    match_all = pd.Series(True, index=series.index)
    if not values:
        return match_all
    try:
        left, bounds = _comparable(series, values[:2] if condition == "between" else values[:1])
        if any(pd.isna(b) for b in bounds):
            logger.debug("Unparseable bound in %r for condition %s", values, condition)
            return match_all
        return _compare(left, condition, bounds).fillna(False)
    except (TypeError, ValueError) as exc:
        logger.debug("Cannot compare for condition %s with %r: %s", condition, values, exc)
        return match_all


def apply_filters(df: pd.DataFrame, filters: Any) -> pd.DataFrame:
    if df.empty:
        return df
    mask = pd.Series(True, index=df.index)
    for entry in active_filters(filters):
        col = resolve_column(df, entry["id"])
        if col is None:
            logger.debug("No column for filter %s; skipped", entry["id"])
            continue
        parsed = parse_filter_value(entry["value"])
        mask &= condition_mask(df[col], parsed.condition, list(parsed.values)).astype(bool)
    return df[mask]


def apply_sorting(df: pd.DataFrame, sorting: Any) -> pd.DataFrame:
    keys: Dict[str, bool] = {}
    for s in sort_entries(sorting):
        col = resolve_column(df, s["id"])
        if col is not None and col not in keys:
            keys[col] = not s["desc"]
    if df.empty or not keys:
        return df
    options = dict(by=list(keys), ascending=list(keys.values()), kind="mergesort", na_position="last")
    try:
        return df.sort_values(**options)
    except TypeError:
        logger.debug("Mixed value types in sort columns %s; ranking numbers before text", list(keys))
    try:
        return df.sort_values(key=_mixed_rank, **options)
    except TypeError as exc:
        logger.debug("Cannot sort by %s: %s", list(keys), exc)
        return df


def _mixed_order(value: Any):
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return (0, float(value), "")
    return (1, 0.0, str(value))


def _mixed_rank(series: pd.Series) -> pd.Series:
    """Rank a column of mixed types: numbers first, then everything else as text."""
    present = sorted(series.dropna().unique(), key=_mixed_order)
    return series.map({v: rank for rank, v in enumerate(present)})


def evaluate_view(
    df: pd.DataFrame,
    sorting: Any = (),
    user_filters: Any = (),
    scope_filters: Any = (),
) -> pd.DataFrame:
    """Scope filters first (lowest precedence), then routine/user overrides, then sort."""
    effective = merge_filters(user_filters, scope_filters)
    return apply_sorting(apply_filters(df, effective), sorting)
