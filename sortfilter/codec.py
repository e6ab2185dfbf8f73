from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from sortfilter.config import ASC, DESC, FILTER_ID_PREFIX, SORT_ID_PREFIX, is_default_condition
from sortfilter.values import ScalarValue, parse_filter_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DraftSortEntry:
    id: str
    column_id: str
    direction: str = ASC


@dataclass(frozen=True)
class DraftFilterEntry:
    id: str
    filter_id: str
    values: List[ScalarValue] = field(default_factory=list)
    condition: Optional[str] = None


def _entries(raw: Any) -> List[Dict[str, Any]]:
    if not isinstance(raw, (list, tuple)):
        return []
    out = []
    for entry in raw:
        if isinstance(entry, dict) and isinstance(entry.get("id"), str):
            out.append(entry)
        else:
            logger.debug("Skipping malformed table entry: %r", entry)
    return out


def _descending(flag: Any) -> bool:
    if isinstance(flag, str):
        return flag.strip().lower() == "true"
    return bool(flag)


def sort_entries(sorting: Any) -> List[Dict[str, Any]]:
    """Tabular sort entries coerced to ``{"id": str, "desc": bool}``."""
    return [{"id": s["id"], "desc": _descending(s.get("desc"))} for s in _entries(sorting)]


def filter_entries(filters: Any) -> List[Dict[str, Any]]:
    return _entries(filters)


def decode_sorting(sorting: Any) -> List[DraftSortEntry]:
    """Table sorting -> draft rows. Ids are positional: ``sort-0``, ``sort-1``..."""
    return [
        DraftSortEntry(
            id=f"{SORT_ID_PREFIX}{index}",
            column_id=s["id"],
            direction=DESC if s["desc"] else ASC,
        )
        for index, s in enumerate(sort_entries(sorting))
    ]


def encode_sorting(draft: Iterable[DraftSortEntry]) -> List[Dict[str, Any]]:
    return [{"id": s.column_id, "desc": s.direction == DESC} for s in draft]


def draft_filter_id(filter_id: str) -> str:
    return f"{FILTER_ID_PREFIX}{filter_id}"


def decode_filters(filters: Any) -> List[DraftFilterEntry]:
    """Table filters -> draft rows.

    Every entry produces a row, even when its value cannot be read; such rows
    carry no values so they stay visible and removable in the editor.
    """
    out: List[DraftFilterEntry] = []
    for f in filter_entries(filters):
        parsed = parse_filter_value(f.get("value"))
        condition = None if is_default_condition(parsed.condition) else parsed.condition
        out.append(
            DraftFilterEntry(
                id=draft_filter_id(f["id"]),
                filter_id=f["id"],
                values=list(parsed.values),
                condition=condition,
            )
        )
    return out


def encode_filter_value(values: List[ScalarValue], condition: Optional[str] = None) -> Any:
    if not is_default_condition(condition):
        return {"condition": condition, "values": list(values)}
    if len(values) == 1:
        return values[0]
    return list(values)


def encode_filters(draft: Iterable[DraftFilterEntry]) -> List[Dict[str, Any]]:
    """Draft rows -> table filters. Rows with no values are left out."""
    return [
        {"id": f.filter_id, "value": encode_filter_value(f.values, f.condition)}
        for f in draft
        if f.values
    ]
