"""Configuration loading from environment variables and roster.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

_DEFAULT_DATA_DIR = Path.home() / ".roster"
_CONFIG_FILENAME = "roster.toml"


@dataclass
class StorageConfig:
    """Where the backing files live and how many backups to keep."""

    data_dir: Path = _DEFAULT_DATA_DIR
    students_file: str = "students.txt"
    heroes_file: str = "superheroes.txt"
    backup_versions: int = 0


@dataclass
class RosterConfig:
    """Top-level Roster configuration."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    log_level: str = "WARNING"

    @property
    def students_path(self) -> Path:
        return self.storage.data_dir / self.storage.students_file

    @property
    def heroes_path(self) -> Path:
        return self.storage.data_dir / self.storage.heroes_file


def load_config(config_path: Path | None = None) -> RosterConfig:
    """Load configuration from environment variables and optional roster.toml.

    Priority: environment variables > roster.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        # Search current dir and ~/.roster/
        for candidate in [Path.cwd() / _CONFIG_FILENAME, _DEFAULT_DATA_DIR / _CONFIG_FILENAME]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    storage_data = file_data.get("storage", {})

    data_dir = os.getenv("ROSTER_DATA_DIR", storage_data.get("data_dir"))
    config = RosterConfig(
        storage=StorageConfig(
            data_dir=Path(data_dir).expanduser() if data_dir else _DEFAULT_DATA_DIR,
            students_file=os.getenv(
                "ROSTER_STUDENTS_FILE", storage_data.get("students_file", "students.txt")
            ),
            heroes_file=os.getenv(
                "ROSTER_HEROES_FILE", storage_data.get("heroes_file", "superheroes.txt")
            ),
            backup_versions=int(
                os.getenv("ROSTER_BACKUP_VERSIONS", storage_data.get("backup_versions", 0))
            ),
        ),
        log_level=os.getenv("ROSTER_LOG_LEVEL", file_data.get("log_level", "WARNING")),
    )
    return config
