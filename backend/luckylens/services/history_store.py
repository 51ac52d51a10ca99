"""
Local history store for saved number sets and user settings
JSON files on disk, one per collection
"""
import json
import threading
from pathlib import Path
from typing import List, Optional
import logging
from luckylens.core.config import settings
from luckylens.models.generation import NumberSet
from luckylens.models.history import SavedSet, UserSettings, UserSettingsUpdate

logger = logging.getLogger(__name__)


class HistoryStore:
    """Persists saved sets and settings under the storage directory"""

    def __init__(self, storage_dir: Optional[str] = None):
        self._storage_dir = Path(storage_dir or settings.STORAGE_DIR)
        self._storage_dir.mkdir(parents=True, exist_ok=True)
        self._sets_file = self._storage_dir / "saved_sets.json"
        self._settings_file = self._storage_dir / "settings.json"
        self._lock = threading.Lock()

    # Saved sets

    def _read_sets(self) -> List[SavedSet]:
        if not self._sets_file.exists():
            return []
        with open(self._sets_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return [SavedSet.model_validate(item) for item in data]

    def _write_sets(self, sets: List[SavedSet]) -> None:
        self._write_json(self._sets_file, [s.model_dump(mode="json") for s in sets])

    def save_sets(self, new_sets: List[SavedSet]) -> List[SavedSet]:
        """
        Append sets to the history, assigning ids
        Returns: the stored sets with their ids
        """
        with self._lock:
            stored = self._read_sets()
            next_id = max((s.id for s in stored if s.id is not None), default=0) + 1
            added = []
            for item in new_sets:
                record = item.model_copy(update={"id": next_id})
                next_id += 1
                stored.append(record)
                added.append(record)
            self._write_sets(stored)

        logger.info(f"Saved {len(added)} set(s) to history")
        return added

    def get_last_saved_set(self, game_id: str) -> Optional[NumberSet]:
        """Most recently saved set for a game, as a NumberSet"""
        candidates = [s for s in self._read_sets() if s.game_id == game_id and s.saved]
        if not candidates:
            return None
        latest = max(candidates, key=lambda s: (s.timestamp, s.id or 0))
        return latest.to_number_set()

    def get_all_sets(
        self,
        game_id: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[SavedSet]:
        """Saved sets, newest first, optionally for one game"""
        sets = self._read_sets()
        if game_id:
            sets = [s for s in sets if s.game_id == game_id]
        sets.sort(key=lambda s: (s.timestamp, s.id or 0), reverse=True)
        sets = sets[offset:]
        if limit is not None:
            sets = sets[:limit]
        return sets

    def get_set_count(self, game_id: Optional[str] = None) -> int:
        return len(self.get_all_sets(game_id))

    def delete_set(self, set_id: int) -> bool:
        with self._lock:
            stored = self._read_sets()
            remaining = [s for s in stored if s.id != set_id]
            if len(remaining) == len(stored):
                return False
            self._write_sets(remaining)
        logger.info(f"Deleted saved set {set_id}")
        return True

    def clear_all_sets(self) -> int:
        with self._lock:
            count = len(self._read_sets())
            self._write_sets([])
        logger.info(f"Cleared {count} saved set(s)")
        return count

    def clear_sets_by_game(self, game_id: str) -> int:
        with self._lock:
            stored = self._read_sets()
            remaining = [s for s in stored if s.game_id != game_id]
            self._write_sets(remaining)
        removed = len(stored) - len(remaining)
        logger.info(f"Cleared {removed} saved set(s) for {game_id}")
        return removed

    # Settings

    def _read_settings(self) -> UserSettings:
        if self._settings_file.exists():
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                return UserSettings.model_validate(json.load(f))

        defaults = UserSettings()
        self._write_settings(defaults)
        return defaults

    def get_settings(self) -> UserSettings:
        """Current settings; defaults are written on first access"""
        with self._lock:
            return self._read_settings()

    def update_settings(self, update: UserSettingsUpdate) -> UserSettings:
        changes = update.model_dump(exclude_none=True)
        with self._lock:
            current = self._read_settings()
            updated = UserSettings.model_validate({**current.model_dump(), **changes})
            self._write_settings(updated)
        logger.info(f"Updated settings: {sorted(changes)}")
        return updated

    def _write_settings(self, user_settings: UserSettings) -> None:
        self._write_json(self._settings_file, user_settings.model_dump(mode="json"))

    @staticmethod
    def _write_json(path: Path, data) -> None:
        """Write to a sibling tmp file, then atomically replace the target"""
        tmp_file = path.with_suffix(".tmp")
        with open(tmp_file, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        tmp_file.replace(path)


history_store = HistoryStore()
