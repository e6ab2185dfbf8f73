"""Draft state for the sorting & filters editor.

The editor keeps a private draft copy of the committed (applied) table state.
``reduce_session(state, event)`` is the only way the draft changes:

    CLOSED --Open--> OPEN_CLEAN --LocalEdit / CommittedChanged--> OPEN_DIRTY
    OPEN_DIRTY --Apply / Clear (matching empty committed)--> OPEN_CLEAN
    OPEN_* --Close--> CLOSED  (draft discarded, committed untouched)
    OPEN_* --Open--> unchanged

While closed, committed changes are recorded but there is no draft to
reconcile; the next Open re-decodes.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple, TypeVar, Union

from sortfilter.codec import (
    DraftFilterEntry,
    DraftSortEntry,
    decode_filters,
    decode_sorting,
    draft_filter_id,
    encode_filters,
    encode_sorting,
    filter_entries,
    sort_entries,
)
from sortfilter.config import ASC, DESC, SORT_ID_PREFIX
from sortfilter.equality import filters_equal, sorting_equal
from sortfilter.values import ScalarValue

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SessionStatus(str, Enum):
    CLOSED = "closed"
    OPEN_CLEAN = "open-clean"
    OPEN_DIRTY = "open-dirty"


@dataclass(frozen=True)
class SessionState:
    status: SessionStatus = SessionStatus.CLOSED
    committed_sorting: Tuple[Dict[str, Any], ...] = ()
    committed_filters: Tuple[Dict[str, Any], ...] = ()
    draft_sorting: Tuple[DraftSortEntry, ...] = ()
    draft_filters: Tuple[DraftFilterEntry, ...] = ()

    @property
    def is_open(self) -> bool:
        return self.status is not SessionStatus.CLOSED

    @property
    def has_draft_changes(self) -> bool:
        return self.status is SessionStatus.OPEN_DIRTY


@dataclass(frozen=True)
class Open:
    pass


@dataclass(frozen=True)
class CommittedChanged:
    """New committed table state; a field left as None keeps its current value."""

    sorting: Optional[Sequence[Dict[str, Any]]] = None
    filters: Optional[Sequence[Dict[str, Any]]] = None


@dataclass(frozen=True)
class LocalEdit:
    sorting: Optional[Sequence[DraftSortEntry]] = None
    filters: Optional[Sequence[DraftFilterEntry]] = None


@dataclass(frozen=True)
class Apply:
    pass


@dataclass(frozen=True)
class Clear:
    pass


@dataclass(frozen=True)
class Close:
    pass


SessionEvent = Union[Open, CommittedChanged, LocalEdit, Apply, Clear, Close]


def initial_state(sorting: Any = (), filters: Any = ()) -> SessionState:
    return SessionState(
        committed_sorting=tuple(sort_entries(sorting)),
        committed_filters=_own_filters(filters),
    )


def _own_filters(filters: Any) -> Tuple[Dict[str, Any], ...]:
    # committed entries never alias the caller's dicts
    return tuple(copy.deepcopy(filter_entries(filters)))


def _mirror(state: SessionState, status: SessionStatus) -> SessionState:
    return replace(
        state,
        status=status,
        draft_sorting=tuple(decode_sorting(state.committed_sorting)),
        draft_filters=tuple(decode_filters(state.committed_filters)),
    )


def reduce_session(state: SessionState, event: SessionEvent) -> SessionState:
    if isinstance(event, Open):
        if state.is_open:
            logger.debug("Editor already open; keeping the current draft")
            return state
        return _mirror(state, SessionStatus.OPEN_CLEAN)

    if isinstance(event, CommittedChanged):
        sorting = state.committed_sorting if event.sorting is None else tuple(sort_entries(event.sorting))
        filters = state.committed_filters if event.filters is None else _own_filters(event.filters)
        changed = not sorting_equal(sorting, state.committed_sorting) or not filters_equal(
            filters, state.committed_filters
        )
        state = replace(state, committed_sorting=sorting, committed_filters=filters)
        if not state.is_open or not changed:
            return state
        logger.debug("Committed state changed while editing; re-decoding draft")
        return _mirror(state, SessionStatus.OPEN_DIRTY)

    if not state.is_open:
        if not isinstance(event, Close):
            logger.debug("Ignoring %s while the editor is closed", type(event).__name__)
        return state

    if isinstance(event, LocalEdit):
        return replace(
            state,
            status=SessionStatus.OPEN_DIRTY,
            draft_sorting=state.draft_sorting if event.sorting is None else tuple(event.sorting),
            draft_filters=state.draft_filters if event.filters is None else tuple(event.filters),
        )

    if isinstance(event, Apply):
        applied = replace(
            state,
            committed_sorting=tuple(encode_sorting(state.draft_sorting)),
            committed_filters=tuple(encode_filters(state.draft_filters)),
        )
        return _mirror(applied, SessionStatus.OPEN_CLEAN)

    if isinstance(event, Clear):
        empty_committed = not state.committed_sorting and not state.committed_filters
        status = SessionStatus.OPEN_CLEAN if empty_committed else SessionStatus.OPEN_DIRTY
        return replace(state, status=status, draft_sorting=(), draft_filters=())

    if isinstance(event, Close):
        return replace(state, status=SessionStatus.CLOSED, draft_sorting=(), draft_filters=())

    logger.debug("Unknown session event: %r", event)
    return state


# ---------- draft edits (return new lists; feed them through LocalEdit) ----------


def next_sort_id(draft: Sequence[DraftSortEntry]) -> str:
    taken = set()
    for s in draft:
        suffix = s.id[len(SORT_ID_PREFIX):] if s.id.startswith(SORT_ID_PREFIX) else ""
        if suffix.isdigit():
            taken.add(int(suffix))
    return f"{SORT_ID_PREFIX}{max(taken) + 1 if taken else 0}"


def add_sort(draft: Sequence[DraftSortEntry], column_id: str, direction: str = ASC) -> List[DraftSortEntry]:
    return [*draft, DraftSortEntry(next_sort_id(draft), column_id, DESC if direction == DESC else ASC)]


def set_sort_direction(draft: Sequence[DraftSortEntry], entry_id: str, direction: str) -> List[DraftSortEntry]:
    direction = DESC if direction == DESC else ASC
    return [replace(s, direction=direction) if s.id == entry_id else s for s in draft]


def set_sort_column(draft: Sequence[DraftSortEntry], entry_id: str, column_id: str) -> List[DraftSortEntry]:
    return [replace(s, column_id=column_id) if s.id == entry_id else s for s in draft]


def add_filter(
    draft: Sequence[DraftFilterEntry],
    filter_id: str,
    values: Sequence[ScalarValue] = (),
    condition: Optional[str] = None,
) -> List[DraftFilterEntry]:
    return [*draft, DraftFilterEntry(draft_filter_id(filter_id), filter_id, list(values), condition)]


def set_filter_values(
    draft: Sequence[DraftFilterEntry],
    entry_id: str,
    values: Sequence[ScalarValue],
    condition: Optional[str] = None,
) -> List[DraftFilterEntry]:
    return [replace(f, values=list(values), condition=condition) if f.id == entry_id else f for f in draft]


def remove_entry(draft: Sequence[T], entry_id: str) -> List[T]:
    return [e for e in draft if e.id != entry_id]


def move_entry(draft: Sequence[T], entry_id: str, new_index: int) -> List[T]:
    """Reorder; for sorting, position is priority."""
    items = list(draft)
    for index, entry in enumerate(items):
        if entry.id == entry_id:
            moved = items.pop(index)
            items.insert(max(0, min(new_index, len(items))), moved)
            break
    return items
