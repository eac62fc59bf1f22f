"""Key-value stores holding JSON-encoded collections.

The service keeps two keys, ``events`` and ``notifications``, each holding a
JSON array of records serialized with their camelCase field names.
"""

from __future__ import annotations

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from eventhub.core.logging import get_logger
from eventhub.domain.errors import CorruptStoreError

logger = get_logger(__name__)

EVENTS_KEY = "events"
NOTIFICATIONS_KEY = "notifications"

ModelT = TypeVar("ModelT", bound=BaseModel)


class KeyValueStore(ABC):
    """Interface for the persistence medium. Stores must be swappable."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the raw value stored under *key*, or None if absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Replace the value stored under *key*."""
        ...


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store, used by tests and the ``memory`` backend."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFileKeyValueStore(KeyValueStore):
    """One ``<key>.json`` file per key under a data directory."""

    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        # Write to a sibling temp file first so readers never see a partial value.
        fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(value)
            os.replace(tmp_name, self._path(key))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


def dump_collection(items: list[BaseModel]) -> str:
    """Serialize records to the JSON array format kept in the store."""
    return json.dumps([item.model_dump(mode="json", by_alias=True) for item in items])


def load_collection(
    store: KeyValueStore, key: str, model: type[ModelT]
) -> list[ModelT]:
    """Read and validate the collection stored under *key*.

    A missing key is an empty collection. Anything that is not a JSON array of
    valid records raises ``CorruptStoreError`` instead of being discarded.
    """
    raw = store.get(key)
    if raw is None:
        return []
    try:
        return TypeAdapter(list[model]).validate_json(raw)
    except ValidationError as exc:
        logger.error("store_corrupt", key=key, errors=exc.error_count())
        raise CorruptStoreError(key, str(exc)) from exc
