from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Optional

from sortfilter.codec import filter_entries, sort_entries
from sortfilter.columns import column_id_for
from sortfilter.values import ScalarValue, scalars_only


SCOPE_MODES = ("scope-aware", "scope-fixed")


def _extra(cls, raw: Dict[str, Any]) -> Dict[str, Any]:
    """Keys this record does not model (column layout, timestamps, sharing...)."""
    known = {f.name for f in fields(cls)}
    return {k: v for k, v in raw.items() if k not in known}


def _record_dict(record) -> Dict[str, Any]:
    data = asdict(record)
    return {**data.pop("extra"), **data}


@dataclass(frozen=True)
class ScopeFilter:
    id: str
    filter_id: str
    values: List[ScalarValue] = field(default_factory=list)
    condition: Optional[str] = None


@dataclass(frozen=True)
class Scope:
    id: str
    name: str
    description: str = ""
    filters: List[ScopeFilter] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Scope":
        filters = []
        for f in raw.get("filters") or []:
            if not isinstance(f, dict) or not isinstance(f.get("filter_id"), str):
                continue
            condition = f.get("condition")
            filters.append(
                ScopeFilter(
                    id=str(f.get("id") or f["filter_id"]),
                    filter_id=f["filter_id"],
                    values=list(scalars_only(f.get("values"))),
                    condition=condition if isinstance(condition, str) else None,
                )
            )
        return cls(
            id=str(raw["id"]),
            name=str(raw.get("name") or ""),
            description=str(raw.get("description") or ""),
            filters=filters,
            extra=_extra(cls, raw),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _record_dict(self)


@dataclass(frozen=True)
class Routine:
    id: str
    name: str
    description: str = ""
    filters: List[Dict[str, Any]] = field(default_factory=list)
    sorting: List[Dict[str, Any]] = field(default_factory=list)
    group_by: Optional[str] = None
    scope_mode: str = "scope-aware"
    linked_scope_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Routine":
        scope_mode = raw.get("scope_mode")
        return cls(
            id=str(raw["id"]),
            name=str(raw.get("name") or ""),
            description=str(raw.get("description") or ""),
            filters=filter_entries(raw.get("filters")),
            sorting=sort_entries(raw.get("sorting")),
            group_by=raw.get("group_by") or None,
            scope_mode=scope_mode if scope_mode in SCOPE_MODES else "scope-aware",
            linked_scope_id=raw.get("linked_scope_id") or None,
            extra=_extra(cls, raw),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _record_dict(self)


def scope_table_filters(scope: Optional[Scope]) -> List[Dict[str, Any]]:
    """Scope filters in table form; empty entries are left out."""
    if scope is None:
        return []
    out = []
    for f in scope.filters:
        if not f.values:
            continue
        value = {"condition": f.condition, "values": list(f.values)} if f.condition else list(f.values)
        out.append({"id": f.filter_id, "value": value})
    return to_column_ids(out)


def to_column_ids(filters: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Re-key filter-definition ids (hyphenated) to table column ids where mapped."""
    out = []
    for f in filters:
        column_id = column_id_for(f["id"]) if "-" in f["id"] else None
        out.append({**f, "id": column_id} if column_id else f)
    return out


def routine_table_filters(routine: Routine) -> List[Dict[str, Any]]:
    return to_column_ids(routine.filters)
