"""Filter values as a tagged union.

A tabular filter value arrives in one of three shapes: a bare scalar, a list
of scalars, or a ``{"condition": ..., "values": [...]}`` object. It is parsed
once here; everything downstream matches on the returned type.
"""

from __future__ import annotations

import json
import logging
import math
import numbers
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union

from sortfilter.config import is_default_condition

logger = logging.getLogger(__name__)

ScalarValue = Union[str, int, float]


@dataclass(frozen=True)
class Scalar:
    value: ScalarValue

    @property
    def values(self) -> Tuple[ScalarValue, ...]:
        return (self.value,)

    @property
    def condition(self) -> Optional[str]:
        return None


@dataclass(frozen=True)
class ScalarArray:
    values: Tuple[ScalarValue, ...] = ()

    @property
    def condition(self) -> Optional[str]:
        return None


@dataclass(frozen=True)
class ConditionedValues:
    condition: Optional[str]
    values: Tuple[ScalarValue, ...] = ()


FilterValue = Union[Scalar, ScalarArray, ConditionedValues]

EMPTY = ScalarArray(())


def is_scalar(value: object) -> bool:
    """Strings and real numbers count; bools and NaN do not."""
    if isinstance(value, str):
        return True
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    try:
        return not math.isnan(float(value))
    except (TypeError, ValueError):
        return False


def _plain(value: Any) -> ScalarValue:
    # numpy scalars -> python scalars
    if not isinstance(value, (str, int, float)) and hasattr(value, "item"):
        return value.item()
    return value


def scalars_only(values: Any) -> Tuple[ScalarValue, ...]:
    if not isinstance(values, (list, tuple)):
        return ()
    kept = tuple(_plain(v) for v in values if is_scalar(v))
    if len(kept) != len(values):
        logger.debug("Dropped %d non-scalar filter value(s)", len(values) - len(kept))
    return kept


def parse_filter_value(raw: Any) -> FilterValue:
    """Parse a tabular filter value; unrecognised shapes become an empty array."""
    if isinstance(raw, (list, tuple)):
        return ScalarArray(scalars_only(raw))
    if isinstance(raw, dict):
        if "values" not in raw:
            logger.debug("Filter object without 'values': %r", raw)
            return EMPTY
        condition = raw.get("condition")
        if not isinstance(condition, str):
            condition = None
        return ConditionedValues(condition, scalars_only(raw.get("values")))
    if is_scalar(raw):
        return Scalar(_plain(raw))
    if raw is not None:
        logger.debug("Unrecognised filter value shape: %r", raw)
    return EMPTY


def filter_values(raw: Any) -> List[ScalarValue]:
    return list(parse_filter_value(raw).values)


def filter_condition(raw: Any) -> Optional[str]:
    return parse_filter_value(raw).condition


def _value_sort_key(value: ScalarValue) -> Tuple[int, Any]:
    if isinstance(value, str):
        return (1, value)
    return (0, value)


def sorted_values(values: Any) -> List[ScalarValue]:
    return sorted(values, key=_value_sort_key)


def canonical_value(raw: Any) -> str:
    """Canonical string for a tabular value.

    Condition defaults fold to null and values are ordered, so ``"a"``,
    ``["a"]`` and ``{"condition": "is", "values": ["a"]}`` all agree.
    """
    parsed = parse_filter_value(raw)
    condition = None if is_default_condition(parsed.condition) else parsed.condition
    payload = {"condition": condition, "values": sorted_values(parsed.values)}
    return json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)
