from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]

DEFAULT_DICTIONARIES_DIR = PROJECT_ROOT / "dictionaries"
DEFAULT_FILE_PATTERN = "*.json"
DEFAULT_SUDACHI_DICT = "core"
DEFAULT_LOAD_WORKERS = 8

EXIT_WORDS = frozenset({"exit", "quit", "q"})


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return max(1, int(value))
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


@dataclass(frozen=True)
class Settings:
    dictionaries_dir: Path = DEFAULT_DICTIONARIES_DIR
    file_pattern: str = DEFAULT_FILE_PATTERN
    sudachi_dict: str = DEFAULT_SUDACHI_DICT
    load_workers: int = DEFAULT_LOAD_WORKERS
    show_progress: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        """Read `YOMILOOKUP_*` environment variables, falling back to the defaults."""
        return cls(
            dictionaries_dir=Path(
                os.environ.get("YOMILOOKUP_DICTIONARIES", str(DEFAULT_DICTIONARIES_DIR))
            ).expanduser(),
            file_pattern=os.environ.get("YOMILOOKUP_FILE_PATTERN", DEFAULT_FILE_PATTERN),
            sudachi_dict=os.environ.get("YOMILOOKUP_SUDACHI_DICT", DEFAULT_SUDACHI_DICT),
            load_workers=_env_int("YOMILOOKUP_LOAD_WORKERS", DEFAULT_LOAD_WORKERS),
        )

    def override(self, **changes) -> "Settings":
        """Return a copy with every non-None value in `changes` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
