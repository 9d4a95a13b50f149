import json
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..models.maintenance import MaintenanceConfig
from ..models.sessions import MaintenanceReport, SessionEntry, SessionStore
from .maintenance import cap_entry_count, prune_stale_entries, resolve_maintenance_config
from .ordering import entry_age_ms
from .rotation import rotate_session_file

logger = logging.getLogger(__name__)


class SessionStoreError(Exception):
    """Raised when the session store file cannot be read."""


class SessionStoreService:
    """Reads and writes the sessions.json store and runs maintenance on save."""

    def __init__(self, sessions_path: str):
        self.path = Path(sessions_path).expanduser()

    async def load(self) -> SessionStore:
        """Load the store. A missing file is an empty store."""
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SessionStoreError(f"Failed to read sessions file {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise SessionStoreError(f"Sessions file {self.path} must contain a JSON object")

        store: SessionStore = {}
        for key, value in data.items():
            try:
                store[key] = SessionEntry.model_validate(value)
            except ValidationError as e:
                raise SessionStoreError(f"Invalid session entry {key!r}: {e}") from e
        return store

    async def save(self, store: SessionStore, maintenance: bool = True) -> MaintenanceReport:
        """Persist ``store``, running the maintenance pipeline first unless disabled."""
        if maintenance:
            report = await self.run_maintenance(store)
        else:
            report = MaintenanceReport(mode="off", remaining=len(store))

        self._write(store)
        return report

    async def run_maintenance(
        self,
        store: SessionStore,
        config: Optional[MaintenanceConfig] = None,
    ) -> MaintenanceReport:
        """Apply prune, cap and rotation according to ``config.mode``.

        ``enforce`` mutates ``store`` and may rotate the file on disk. ``warn``
        only logs what enforcement would remove.
        """
        if config is None:
            config = resolve_maintenance_config()

        if config.mode == "warn":
            now_ms = int(time.time() * 1000)
            pruned = 0
            for entry in store.values():
                age = entry_age_ms(entry, now_ms)
                if age is not None and age > config.prune_after_ms:
                    pruned += 1
            evicted = max(0, len(store) - pruned - config.max_entries)
            if pruned or evicted:
                logger.warning(
                    "Session maintenance (warn mode): %d stale and %d excess session(s) "
                    "would be removed from %s",
                    pruned, evicted, self.path,
                )
            return MaintenanceReport(
                mode=config.mode, pruned=pruned, evicted=evicted, remaining=len(store),
            )

        pruned = prune_stale_entries(store, config.prune_after_ms)
        evicted = cap_entry_count(store, config.max_entries)
        rotated = await rotate_session_file(self.path, config.rotate_bytes)
        return MaintenanceReport(
            mode=config.mode,
            pruned=pruned,
            evicted=evicted,
            rotated=rotated,
            remaining=len(store),
        )

    def _write(self, store: SessionStore) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {key: entry.to_json() for key, entry in store.items()}

        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
                f.write("\n")
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise
