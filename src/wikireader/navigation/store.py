"""Session-scoped key/value stores for reader state.

Values are strings; callers own their encoding. The file-backed store keeps
all keys in one JSON object and atomically replaces the file on every write.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile

logger = logging.getLogger(__name__)


class MemorySessionStore:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


def atomic_write_text(path: Path, data: str, *, encoding: str = "utf-8") -> None:
    """Replace the store file in one step so readers never see a half-written object."""

    path.parent.mkdir(parents=True, exist_ok=True)
    with NamedTemporaryFile(
        "w", encoding=encoding, dir=path.parent, prefix=f".{path.name}.", delete=False
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        except OSError:
            tmp.close()
            tmp_path.unlink(missing_ok=True)
            raise
    os.replace(tmp_path, path)


class JsonFileSessionStore:
    """Key/value store persisted as a JSON object in one file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable session store %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring session store %s: not a JSON object", self.path)
            return {}
        return {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        atomic_write_text(
            self.path, json.dumps(data, ensure_ascii=False, sort_keys=True, indent=2)
        )

    def delete(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            atomic_write_text(
                self.path, json.dumps(data, ensure_ascii=False, sort_keys=True, indent=2)
            )


__all__ = [
    "JsonFileSessionStore",
    "MemorySessionStore",
    "atomic_write_text",
]
