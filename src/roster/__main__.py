"""Entry point: python -m roster [students|heroes]

- No args / "students": Student records (pipe-delimited file)
- "heroes":             Hero records with score-derived rank and threat level
"""

from __future__ import annotations

import logging
import sys

from roster.config import RosterConfig, load_config
from roster.records.errors import MalformedRecordError
from roster.records.store import HeroStore, RecordStore, StudentStore
from roster.shell import HeroShell, MenuShell, StudentShell

logger = logging.getLogger(__name__)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _build_shell(cmd: str, config: RosterConfig) -> MenuShell:
    backups = config.storage.backup_versions
    if cmd == "heroes":
        return HeroShell(HeroStore(config.heroes_path, backup_versions=backups))
    return StudentShell(StudentStore(config.students_path, backup_versions=backups))


def _load(store: RecordStore) -> None:
    """Load previously saved records.

    A malformed file starts the shell empty. An unreadable one exits with
    status 1 rather than risk overwriting a file that was never read.
    """
    try:
        store.load()
    except MalformedRecordError as e:
        logger.error("Could not load %s: %s", store.path, e)
        print(f"Error loading from file: {e}")
        print(f"Starting with an empty collection; saving will overwrite {store.path}.\n")
    except OSError as e:
        logger.error("Could not read %s: %s", store.path, e)
        print(f"Error reading {store.path}: {e}", file=sys.stderr)
        sys.exit(1)


def main() -> None:
    cmd = sys.argv[1] if len(sys.argv) > 1 else "students"

    if cmd not in ("students", "heroes"):
        print("Usage: python -m roster [students|heroes]")
        print("  students  Student records (default)")
        print("  heroes    Hero records with rank and threat level")
        sys.exit(1)

    config = load_config()
    _setup_logging(config.log_level)

    shell = _build_shell(cmd, config)
    _load(shell.store)
    shell.run()


if __name__ == "__main__":
    main()
