"""Persistence port for routines and scopes.

The engine never touches storage; callers that need records get a repository
injected. Load failures degrade to an empty list, save failures are returned.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Generic, List, Optional, Protocol, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class SaveResult:
    ok: bool
    error: Optional[str] = None


class RecordRepository(Protocol[T]):
    def load(self) -> List[T]: ...

    def save(self, records: List[T]) -> SaveResult: ...


def find_record(repo: RecordRepository[T], record_id: Optional[str]) -> Optional[T]:
    if not record_id:
        return None
    for record in repo.load():
        if getattr(record, "id", None) == record_id:
            return record
    return None


class InMemoryRepository(Generic[T]):
    def __init__(self, records: Optional[List[T]] = None):
        self._records: List[T] = list(records or [])

    def load(self) -> List[T]:
        return list(self._records)

    def save(self, records: List[T]) -> SaveResult:
        self._records = list(records)
        return SaveResult(ok=True)


class JsonFileRepository(Generic[T]):
    """Records stored as a JSON array in one file."""

    def __init__(
        self,
        path: Path,
        from_dict: Callable[[Dict[str, Any]], T],
        to_dict: Callable[[T], Dict[str, Any]],
    ):
        self.path = Path(path)
        self._from_dict = from_dict
        self._to_dict = to_dict

    def load(self) -> List[T]:
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Could not read records from %s", self.path, exc_info=True)
            return []
        if not isinstance(raw, list):
            logger.warning("Expected a JSON array in %s, got %s", self.path, type(raw).__name__)
            return []
        records: List[T] = []
        for item in raw:
            try:
                records.append(self._from_dict(item))
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping unreadable record in %s: %r", self.path, item)
        return records

    def save(self, records: List[T]) -> SaveResult:
        try:
            payload = json.dumps([self._to_dict(r) for r in records], indent=2)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(payload, encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            logger.exception("Failed to save records to %s", self.path)
            return SaveResult(ok=False, error=str(exc))
        return SaveResult(ok=True)
