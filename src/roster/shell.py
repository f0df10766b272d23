"""Interactive menu shell over a record store."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Callable, TextIO

from roster.records.errors import PersistenceError

if TYPE_CHECKING:
    from roster.records.store import HeroStore, RecordStore, StudentStore

logger = logging.getLogger(__name__)


class MenuShell:
    """Numbered-menu REPL reading from stdin and writing to stdout.

    Subclasses supply the variant's field prompts and the add/update calls.
    """

    title = "Record Management System"
    noun = "Record"
    plural = "records"

    def __init__(
        self,
        store: RecordStore,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self.store = store
        self._in = stdin or sys.stdin
        self._out = stdout or sys.stdout
        self._running = False
        self._actions: dict[str, Callable[[], None]] = {
            "1": self._add,
            "2": self._view_all,
            "3": self._search,
            "4": self._update,
            "5": self._remove,
        }

    # ── I/O helpers ───────────────────────────────────────────

    def _write(self, text: str = "") -> None:
        self._out.write(text + "\n")
        self._out.flush()

    def _read(self, prompt: str) -> str:
        self._out.write(prompt)
        self._out.flush()
        raw = self._in.readline()
        if not raw:
            raise EOFError
        return raw.rstrip("\r\n")

    def _read_int(self, prompt: str, minimum: int | None = None) -> int:
        """Prompt until the user enters a whole number (at least ``minimum``)."""
        while True:
            raw = self._read(prompt).strip()
            try:
                value = int(raw)
            except ValueError:
                self._write("Please enter a whole number.")
                continue
            if minimum is not None and value < minimum:
                self._write(f"Please enter a number of at least {minimum}.")
                continue
            return value

    def _read_float(self, prompt: str) -> float:
        while True:
            raw = self._read(prompt).strip()
            try:
                return float(raw)
            except ValueError:
                self._write("Please enter a number.")

    # ── Main loop ─────────────────────────────────────────────

    def _print_menu(self) -> None:
        self._write(f"===== {self.title} =====")
        self._write(f"1. Add {self.noun}")
        self._write(f"2. View All {self.plural.title()}")
        self._write(f"3. Search {self.noun} by ID")
        self._write(f"4. Update {self.noun}")
        self._write(f"5. Remove {self.noun}")
        self._write("0. Exit")

    def run(self) -> None:
        """Loop until the user picks Exit or input ends."""
        self._running = True
        while self._running:
            self._print_menu()
            try:
                choice = self._read("Select an option: ").strip()
                self._write()
                if choice == "0":
                    self._write("Exiting program...")
                    self._running = False
                    continue
                action = self._actions.get(choice)
                if action is None:
                    logger.debug("Unknown menu option: %r", choice)
                    self._write("Invalid option. Try again.\n")
                    continue
                action()
            except (EOFError, KeyboardInterrupt):
                self._write("\nBye!")
                self._running = False
            except PersistenceError as e:
                self._write(f"{e}\n")
            except ValueError as e:
                self._write(f"Invalid input: {e}\n")

    # ── Actions ───────────────────────────────────────────────

    def _add(self) -> None:
        record = self._create()
        self._write(f"{self.noun} {record.name} added successfully (ID {record.id}).\n")

    def _view_all(self) -> None:
        records = self.store.list_all()
        if not records:
            self._write(f"No {self.plural} found.\n")
            return
        self._write(f"{self.noun} List:")
        for record in records:
            self._write(str(record))
        self._write()

    def _search(self) -> None:
        record_id = self._read_int(f"Enter {self.noun.lower()} ID: ")
        record = self.store.find_by_id(record_id)
        if record is None:
            self._write(f"{self.noun} not found.\n")
        else:
            self._write(f"{record}\n")

    def _update(self) -> None:
        record_id = self._read_int(f"Enter {self.noun.lower()} ID: ")
        if self.store.find_by_id(record_id) is None:
            self._write(f"{self.noun} not found.\n")
            return
        if self._modify(record_id):
            self._write(f"{self.noun} updated successfully.\n")
        else:
            self._write(f"{self.noun} not found.\n")

    def _remove(self) -> None:
        record_id = self._read_int(f"Enter {self.noun.lower()} ID: ")
        if self.store.remove(record_id):
            self._write(f"{self.noun} removed successfully.\n")
        else:
            self._write(f"{self.noun} not found.\n")

    # ── Variant hooks ─────────────────────────────────────────

    def _create(self):
        raise NotImplementedError

    def _modify(self, record_id: int) -> bool:
        raise NotImplementedError


class StudentShell(MenuShell):
    title = "Student Management System"
    noun = "Student"
    plural = "students"

    store: StudentStore

    def _create(self):
        name = self._read("Enter name: ")
        age = self._read_int("Enter age: ", minimum=0)
        course = self._read("Enter course: ")
        return self.store.add(name, age, course)

    def _modify(self, record_id: int) -> bool:
        name = self._read("Enter new name: ")
        age = self._read_int("Enter new age: ", minimum=0)
        course = self._read("Enter new course: ")
        return self.store.update(record_id, name, age, course)


class HeroShell(MenuShell):
    title = "Hero Management System"
    noun = "Hero"
    plural = "heroes"

    store: HeroStore

    def _create(self):
        name = self._read("Enter hero name: ")
        age = self._read_int("Enter age: ", minimum=0)
        quirk = self._read("Enter quirk: ")
        score = self._read_float("Enter power score: ")
        return self.store.add(name, age, quirk, score)

    def _modify(self, record_id: int) -> bool:
        name = self._read("Enter new hero name: ")
        age = self._read_int("Enter new age: ", minimum=0)
        quirk = self._read("Enter new quirk: ")
        score = self._read_float("Enter new power score: ")
        return self.store.update(record_id, name, age, quirk, score)
