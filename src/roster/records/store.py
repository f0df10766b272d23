"""List-backed record stores persisted to a single delimited text file.

The in-memory list is the working copy; the backing file is rewritten in
full after every mutation. Lookups are linear scans.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from datetime import datetime
from pathlib import Path
from typing import Generic, TypeVar

from roster.records.errors import MalformedRecordError, PersistenceError, RecordNotFoundError
from roster.records.models import Hero, Rank, Student, ThreatLevel, classify

logger = logging.getLogger(__name__)

R = TypeVar("R", Student, Hero)


class RecordStore(Generic[R]):
    """Ordered collection of records with id sequencing and file persistence.

    Subclasses define the line format through ``delimiter``, ``columns``,
    ``header`` and the ``_to_fields`` / ``_from_fields`` pair.
    """

    delimiter: str = "|"
    columns: tuple[str, ...] = ()
    header: bool = False

    def __init__(self, path: Path, backup_versions: int = 0) -> None:
        self.path = Path(path)
        self.backup_versions = backup_versions
        self._records: list[R] = []
        self._next_id = 1

    # ── Line format (subclass hooks) ──────────────────────────

    def _to_fields(self, record: R) -> list[str]:
        raise NotImplementedError

    def _from_fields(self, fields: list[str]) -> R:
        """Build a record from split fields. Raises ValueError on bad values."""
        raise NotImplementedError

    def _check_text(self, *values: str) -> None:
        """Reject free text that would corrupt the line format."""
        for value in values:
            if self.delimiter in value or "\n" in value or "\r" in value:
                raise ValueError(
                    f"Text fields may not contain {self.delimiter!r} or line breaks: {value!r}"
                )

    # ── Persistence ───────────────────────────────────────────

    def load(self) -> int:
        """Replace the in-memory collection with the backing file's contents.

        A missing file loads as an empty collection. Any malformed line (bad
        UTF-8 included) aborts the load with MalformedRecordError and leaves
        the current collection untouched. An unreadable file raises OSError.
        Returns the number of records loaded.
        """
        if not self.path.exists():
            self._records = []
            logger.info("No backing file at %s, starting empty", self.path)
            return 0

        records: list[R] = []
        seen: set[int] = set()
        # Only "\n" ends a record; str.splitlines() also breaks on form feeds and others
        for line_no, raw in enumerate(self.path.read_bytes().split(b"\n"), start=1):
            try:
                line = raw.decode("utf-8").rstrip("\r")
            except UnicodeDecodeError as e:
                raise MalformedRecordError(self.path, line_no, str(e)) from e
            if not line.strip():
                continue
            fields = line.split(self.delimiter)
            if self.header and fields[0] == self.columns[0]:
                continue
            if len(fields) != len(self.columns):
                raise MalformedRecordError(
                    self.path,
                    line_no,
                    f"expected {len(self.columns)} fields, got {len(fields)}",
                )
            try:
                record = self._from_fields(fields)
            except ValueError as e:
                raise MalformedRecordError(self.path, line_no, str(e)) from e
            if record.id in seen:
                raise MalformedRecordError(self.path, line_no, f"duplicate id {record.id}")
            seen.add(record.id)
            records.append(record)

        self._records = records
        if records:
            self._next_id = max(self._next_id, max(seen) + 1)
        logger.info("Loaded %d records from %s", len(records), self.path)
        return len(records)

    def save(self) -> None:
        """Rewrite the backing file from the in-memory collection."""
        self._persist()

    def _persist(self, record: R | None = None) -> None:
        try:
            self._write()
        except OSError as e:
            logger.error("Failed to save %s: %s", self.path, e)
            raise PersistenceError(self.path, e, record) from e

    def _write(self) -> None:
        lines = [self.delimiter.join(self.columns)] if self.header else []
        lines.extend(self.delimiter.join(self._to_fields(r)) for r in self._records)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._backup()
        self.path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")

    def _backup(self) -> None:
        """Copy the current file to .versions/, keeping ``backup_versions`` copies."""
        if self.backup_versions <= 0 or not self.path.exists():
            return
        versions_dir = self.path.parent / ".versions"
        try:
            versions_dir.mkdir(exist_ok=True)
            ts = datetime.now().strftime("%Y%m%dT%H%M%S%f")
            (versions_dir / f"{self.path.stem}-{ts}{self.path.suffix}").write_bytes(
                self.path.read_bytes()
            )
            old = sorted(versions_dir.glob(f"{self.path.stem}-*{self.path.suffix}"))
            for f in old[: -self.backup_versions]:
                f.unlink()
        except OSError as e:
            logger.warning("Backup of %s failed: %s", self.path, e)

    # ── Queries ───────────────────────────────────────────────

    @property
    def count(self) -> int:
        return len(self._records)

    @property
    def next_id(self) -> int:
        """The id the next ``add`` will assign."""
        return self._next_id

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[R]:
        return iter(list(self._records))

    def list_all(self) -> list[R]:
        """All records in insertion order. Empty is a valid result."""
        return list(self._records)

    def find_by_id(self, record_id: int) -> R | None:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def get(self, record_id: int) -> R:
        """Like find_by_id, but raises RecordNotFoundError when absent."""
        record = self.find_by_id(record_id)
        if record is None:
            raise RecordNotFoundError(record_id)
        return record

    # ── Mutations ─────────────────────────────────────────────

    def _insert(self, build: Callable[[int], R]) -> R:
        record = build(self._next_id)
        self._next_id += 1
        self._records.append(record)
        logger.info("Added record %d: %s", record.id, record.name)
        self._persist(record)
        return record

    def _modify(self, record_id: int, apply: Callable[[R], None]) -> bool:
        record = self.find_by_id(record_id)
        if record is None:
            logger.warning("Record %d not found for update", record_id)
            return False
        apply(record)
        logger.info("Updated record %d", record_id)
        self._persist(record)
        return True

    def remove(self, record_id: int) -> bool:
        """Remove a record. Returns False if no record has ``record_id``."""
        record = self.find_by_id(record_id)
        if record is None:
            logger.warning("Record %d not found for removal", record_id)
            return False
        self._records.remove(record)
        logger.info("Removed record %d", record_id)
        self._persist(record)
        return True


class StudentStore(RecordStore[Student]):
    """Students, one ``id|name|age|course`` line each, no header."""

    delimiter = "|"
    columns = ("Id", "FullName", "Age", "Course")

    def _to_fields(self, record: Student) -> list[str]:
        return [str(record.id), record.name, str(record.age), record.course]

    def _from_fields(self, fields: list[str]) -> Student:
        return Student(
            id=int(fields[0]),
            name=fields[1],
            age=int(fields[2]),
            course=fields[3],
        )

    def add(self, name: str, age: int, course: str) -> Student:
        self._check_text(name, course)
        return self._insert(lambda new_id: Student(new_id, name, age, course))

    def update(self, record_id: int, name: str, age: int, course: str) -> bool:
        self._check_text(name, course)

        def apply(student: Student) -> None:
            student.name = name
            student.age = age
            student.course = course

        return self._modify(record_id, apply)


class HeroStore(RecordStore[Hero]):
    """Heroes in CSV with a header line; rank and threat are stored as labels."""

    delimiter = ","
    columns = ("HeroId", "Name", "Age", "Quirk", "Score", "Rank", "ThreatLevel")
    header = True

    def _to_fields(self, record: Hero) -> list[str]:
        return [
            str(record.id),
            record.name,
            str(record.age),
            record.quirk,
            repr(float(record.score)),
            record.rank.label,
            record.threat_level.label,
        ]

    def _from_fields(self, fields: list[str]) -> Hero:
        hero = Hero(
            id=int(fields[0]),
            name=fields[1],
            age=int(fields[2]),
            quirk=fields[3],
            score=float(fields[4]),
        )
        stored = (Rank.from_label(fields[5]), ThreatLevel.from_label(fields[6]))
        if stored != classify(hero.score):
            raise ValueError(
                f"rank/threat {fields[5]}/{fields[6]} do not match score {hero.score:g}"
            )
        return hero

    def add(self, name: str, age: int, quirk: str, score: float) -> Hero:
        self._check_text(name, quirk)
        return self._insert(lambda new_id: Hero(new_id, name, age, quirk, float(score)))

    def update(self, record_id: int, name: str, age: int, quirk: str, score: float) -> bool:
        self._check_text(name, quirk)

        def apply(hero: Hero) -> None:
            hero.name = name
            hero.age = age
            hero.quirk = quirk
            hero.score = float(score)

        return self._modify(record_id, apply)
