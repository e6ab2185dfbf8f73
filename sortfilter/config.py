from __future__ import annotations

from typing import Dict, FrozenSet, Tuple


SORT_ID_PREFIX = "sort-"
FILTER_ID_PREFIX = "filter-"

ASC = "asc"
DESC = "desc"

DEFAULT_CONDITIONS: Dict[str, str] = {
    "text": "is",
    "select": "is",
    "multi-select": "is",
    "number": "equals",
    "date": "equals",
}

# Conditions that mean "value is one of", i.e. the plain scalar/array forms.
MEMBERSHIP_CONDITIONS: FrozenSet[str] = frozenset(DEFAULT_CONDITIONS.values())

CONDITIONS: Dict[str, Tuple[str, ...]] = {
    "text": ("is", "isNot", "contains", "doesNotContain"),
    "number": (
        "equals",
        "notEquals",
        "greaterThan",
        "lessThan",
        "greaterThanOrEqual",
        "lessThanOrEqual",
    ),
    "date": ("equals", "before", "after", "between"),
}
CONDITIONS["select"] = CONDITIONS["text"]
CONDITIONS["multi-select"] = CONDITIONS["text"]


def default_condition_for(value_type: str) -> str:
    return DEFAULT_CONDITIONS.get(value_type, "is")


def is_default_condition(condition: object) -> bool:
    """True for a missing condition or one of the membership defaults."""
    return condition is None or condition in MEMBERSHIP_CONDITIONS
