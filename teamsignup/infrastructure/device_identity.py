"""Device Identity - stable per-device identifier for self-service removal.

Invariants:
    - First call generates a UUID4 and persists it under DEVICE_ID_KEY
    - Later calls return the persisted value unchanged
    - Storage failure (OSError) never propagates: a fresh, non-persistent
      id is returned per call instead
    - No network side effects
"""

import json
import logging
import uuid
from pathlib import Path

from teamsignup.core.repository_protocols import DeviceIdStorage

logger = logging.getLogger(__name__)

DEVICE_ID_KEY = "team-not-found-device-id"


class JsonFileStorage:
    """DeviceIdStorage backed by a small JSON object on disk."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise OSError(f"Corrupt device storage {self.path}: {e}") from e
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")


class MemoryStorage:
    """DeviceIdStorage for a single process (tests, throwaway clients)."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


def get_or_create_device_id(storage: DeviceIdStorage) -> str:
    """Return the persisted device id, creating it on first use."""
    try:
        device_id = storage.get(DEVICE_ID_KEY)
        if not device_id:
            device_id = str(uuid.uuid4())
            storage.set(DEVICE_ID_KEY, device_id)
        return device_id
    except OSError as e:
        logger.warning(
            "Could not access device storage, using session-only id: %s", e,
        )
        return str(uuid.uuid4())
