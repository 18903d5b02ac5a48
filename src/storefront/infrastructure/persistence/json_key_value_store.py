"""JSON-file-backed implementation of KeyValueStore.

All slots live in a single JSON object mapping key to string value.
A slot file that cannot be read or is not a JSON object is treated as
empty; the next write replaces it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from storefront.domain.repository.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)


class JsonFileKeyValueStore(KeyValueStore):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- KeyValueStore interface ----------------------------------------------

    def get(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        slots = self._load()
        slots[key] = value
        self._persist(slots)

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> dict[str, str]:
        try:
            slots = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError, RecursionError) as exc:
            logger.warning("Unreadable slot file %s, treating as empty: %s", self._file_path, exc)
            return {}
        if not isinstance(slots, dict):
            logger.warning("Slot file %s is not a JSON object, treating as empty", self._file_path)
            return {}
        return slots

    def _persist(self, slots: dict[str, str]) -> None:
        # Write beside the target and swap it in, so a reader never sees half a file.
        tmp_path = self._file_path.with_name(self._file_path.name + ".tmp")
        tmp_path.write_text(json.dumps(slots, indent=2, sort_keys=True) + "\n", encoding="utf-8")
        tmp_path.replace(self._file_path)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("{}", encoding="utf-8")
