"""Exceptions raised by the record stores."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class StoreError(Exception):
    """Base class for record store failures."""


class RecordNotFoundError(StoreError, LookupError):
    """No live record carries the requested id."""

    def __init__(self, record_id: int) -> None:
        super().__init__(f"Record {record_id} not found")
        self.record_id = record_id


class MalformedRecordError(StoreError, ValueError):
    """A line of the backing file could not be parsed.

    Raised by ``load()``; the load is abandoned as a whole.
    """

    def __init__(self, path: Path, line_no: int, reason: str) -> None:
        super().__init__(f"{path}:{line_no}: {reason}")
        self.path = path
        self.line_no = line_no
        self.reason = reason


class PersistenceError(StoreError):
    """The backing file could not be written.

    The in-memory change that triggered the save has already been applied;
    ``record`` is the record it concerned, when there is one.
    """

    def __init__(self, path: Path, cause: OSError, record: Any = None) -> None:
        super().__init__(f"Error saving to {path}: {cause}")
        self.path = path
        self.cause = cause
        self.record = record
