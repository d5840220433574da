"""String-valued key-value stores for small bits of persisted game data."""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Dict, Optional


def default_storage_path() -> Path:
    root = Path(__file__).resolve().parents[1] / "runtime"
    return root / "storage.json"


class MemoryStore:
    def __init__(self, data: Dict[str, str] | None = None):
        self._data: Dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = str(value)


class JsonFileStore(MemoryStore):
    """
    All keys live in one JSON object on disk; every `set` rewrites the file.
    An unreadable or malformed file starts the store empty.
    """

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path is not None else default_storage_path()
        super().__init__(self._read())

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8-sig") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            print(f"WARNING: ignoring unreadable store {self.path}: {e}", file=sys.stderr)
            return {}
        if not isinstance(raw, dict):
            return {}
        return {str(k): v for k, v in raw.items() if isinstance(v, str)}

    def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2)

    def set(self, key: str, value: str) -> None:
        super().set(key, value)
        self._write()
