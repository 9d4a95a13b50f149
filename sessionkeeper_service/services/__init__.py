from .maintenance import cap_entry_count, prune_stale_entries, resolve_maintenance_config
from .rotation import list_backups, rotate_session_file
from .session_store import SessionStoreError, SessionStoreService

__all__ = [
    "cap_entry_count",
    "prune_stale_entries",
    "resolve_maintenance_config",
    "list_backups",
    "rotate_session_file",
    "SessionStoreError",
    "SessionStoreService",
]
