"""
Account Service — JSON collection over one key-value entry

Reads and writes always go through the full array: there are no partial or
indexed updates, and no version check. Two writers that interleave
read-modify-write cycles lose one of the updates (last writer wins).
"""
import json
import logging
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from nexus_accounts.core.errors import StorageError
from nexus_accounts.db.kv import KeyValueStore

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class JsonCollection(Generic[RecordT]):
    def __init__(self, kv: KeyValueStore, key: str, model: type[RecordT]):
        self._kv = kv
        self.key = key
        self._model = model

    def load(self) -> list[RecordT]:
        """
        Return every record. Read failures never propagate:
          - store unreachable → empty list, nothing written
          - corrupted JSON    → key reset to an empty array
          - invalid record    → that record is skipped
        """
        try:
            raw = self._kv.get(self.key)
        except StorageError as exc:
            logger.warning("Reading '%s' failed, treating as empty: %s", self.key, exc)
            return []
        if raw is None:
            return []

        try:
            items = json.loads(raw)
            if not isinstance(items, list):
                raise ValueError(f"expected a JSON array, got {type(items).__name__}")
        except ValueError as exc:
            logger.warning("Corrupted '%s' collection discarded: %s", self.key, exc)
            self._reinitialize()
            return []

        records: list[RecordT] = []
        for item in items:
            try:
                records.append(self._model.model_validate(item))
            except PydanticValidationError as exc:
                logger.warning("Skipping invalid record in '%s': %s", self.key, exc.errors()[:1])
        return records

    def save(self, records: list[RecordT]) -> None:
        """Serialize the whole collection. Raises StorageError on failure."""
        payload = json.dumps([r.to_storage() for r in records])
        self._kv.set(self.key, payload)

    def _reinitialize(self) -> None:
        try:
            self._kv.set(self.key, "[]")
        except StorageError as exc:
            logger.warning("Could not reset '%s': %s", self.key, exc)
