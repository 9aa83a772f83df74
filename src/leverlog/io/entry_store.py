# src/leverlog/io/entry_store.py
# Local object store for WorkoutEntry records, persisted as one JSON document.
import json
import logging
import os
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from pydantic import ValidationError

from ..config import CHAIN_SIZE
from ..data_models import StoreDocument, WorkoutEntry
from .json_writer import write_json_atomic

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """The entry store file could not be read, parsed or written."""

class EntryNotFound(StoreError, KeyError):
    """No entry with the requested id."""


class EntryStore:
    """
    Entries are loaded once and kept in memory; every mutation rewrites the file.
    A missing file is an empty store.
    """

    def __init__(self, path: str):
        self.path = path
        self._entries: Dict[str, WorkoutEntry] = {}
        self.reload()

    def reload(self) -> None:
        if not os.path.exists(self.path):
            logger.info("[EntryStore] No store at %s, starting empty", self.path)
            self._entries = {}
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                doc = StoreDocument.model_validate(json.load(f))
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"cannot read {self.path}: {e}") from e
        except ValidationError as e:
            raise StoreError(f"invalid entry store {self.path}: {e.error_count()} error(s)") from e
        self._entries = {e.id: e for e in doc.entries}
        logger.info("[EntryStore] Loaded %d entries from %s", len(self._entries), self.path)

    def _flush(self) -> None:
        doc = StoreDocument(entries=list(self._entries.values()))
        try:
            write_json_atomic(self.path, doc.model_dump(mode="json"))
        except OSError as e:
            raise StoreError(f"cannot write {self.path}: {e}") from e

    # ---------- queries ----------

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> List[WorkoutEntry]:
        """All entries, newest first."""
        return sorted(self._entries.values(), key=lambda e: e.date, reverse=True)

    def get(self, entry_id: str) -> WorkoutEntry:
        try:
            return self._entries[entry_id]
        except KeyError:
            raise EntryNotFound(entry_id) from None

    def most_recent_pose(self) -> Optional[List[float]]:
        """Angles of the newest entry, or None when there is none or it has no 4-angle pose."""
        entries = self.entries()
        if not entries or len(entries[0].joint_angles) != CHAIN_SIZE:
            return None
        return list(entries[0].joint_angles)

    # ---------- mutations ----------

    def insert(self, time_under_tension: float, joint_angles: Sequence[float],
               date: Optional[datetime] = None) -> WorkoutEntry:
        try:
            entry = WorkoutEntry(
                date=date or datetime.now(),
                time_under_tension=time_under_tension,
                joint_angles=[float(a) for a in joint_angles],
            )
        except ValidationError as e:
            raise StoreError(f"invalid entry: {e.error_count()} error(s)") from e
        self._entries[entry.id] = entry
        self._flush()
        logger.info("[EntryStore] Saved entry %s (%.1fs)", entry.id, entry.time_under_tension)
        return entry

    def update(self, entry_id: str, time_under_tension: Optional[float] = None,
               joint_angles: Optional[Sequence[float]] = None) -> WorkoutEntry:
        current = self.get(entry_id)
        changes = {}
        if time_under_tension is not None:
            changes["time_under_tension"] = time_under_tension
        if joint_angles is not None:
            changes["joint_angles"] = [float(a) for a in joint_angles]
        try:
            # model_copy(update=...) skips validation, so round-trip through the validator
            updated = WorkoutEntry.model_validate({**current.model_dump(), **changes})
        except ValidationError as e:
            raise StoreError(f"invalid entry update: {e.error_count()} error(s)") from e
        self._entries[entry_id] = updated
        self._flush()
        logger.info("[EntryStore] Updated entry %s", entry_id)
        return updated

    def delete(self, entry_id: str) -> None:
        if entry_id not in self._entries:
            raise EntryNotFound(entry_id)
        del self._entries[entry_id]
        self._flush()
        logger.info("[EntryStore] Deleted entry %s", entry_id)
