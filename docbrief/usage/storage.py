"""Key/value persistence for usage markers.

The pipeline only ever sees "value or absent": FailOpenStore turns every
backend failure into a logged no-op.
"""

import json
from pathlib import Path
from typing import Protocol

from docbrief.logging.logger import Log


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemoryStore:
    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """Stores string values in a single JSON object on disk."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def _read(self) -> dict[str, object]:
        if not self._path.exists():
            return {}
        data = json.loads(self._path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{self._path} does not contain a JSON object")
        return data

    def _write(self, data: dict[str, object]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data), encoding="utf-8")


class FailOpenStore:
    """Wraps a KeyValueStore so storage failures never reach the caller."""

    def __init__(self, backend: KeyValueStore) -> None:
        self._backend = backend

    def get(self, key: str) -> str | None:
        try:
            return self._backend.get(key)
        except Exception as exc:
            Log.warning(f"Usage store read failed, treating '{key}' as absent: {exc}")
            return None

    def set(self, key: str, value: str) -> None:
        try:
            self._backend.set(key, value)
        except Exception as exc:
            Log.warning(f"Usage store write failed for '{key}': {exc}")

    def remove(self, key: str) -> None:
        try:
            self._backend.remove(key)
        except Exception as exc:
            Log.warning(f"Usage store remove failed for '{key}': {exc}")
