import logging
import time
from typing import Optional

from ..config import load_config
from ..models.maintenance import MaintenanceConfig, merge_maintenance_config
from ..models.sessions import SessionStore
from .ordering import entry_age_ms, eviction_order

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _maintenance_section(config: dict) -> dict:
    session = config.get("session") or {}
    if not isinstance(session, dict):
        logger.warning("Ignoring config 'session' section: expected an object, got %s", type(session).__name__)
        return {}
    section = session.get("maintenance") or {}
    if not isinstance(section, dict):
        logger.warning(
            "Ignoring config 'session.maintenance' section: expected an object, got %s",
            type(section).__name__,
        )
        return {}
    return section


def resolve_maintenance_config(overrides: Optional[dict] = None) -> MaintenanceConfig:
    """Resolve maintenance settings.

    With no explicit ``overrides`` the ``session.maintenance`` section of the
    config file is used. Missing sections resolve to the built-in defaults.
    """
    if overrides is None:
        overrides = _maintenance_section(load_config())
    return merge_maintenance_config(overrides)


def prune_stale_entries(
    store: SessionStore,
    max_age_ms: Optional[int] = None,
    now_ms: Optional[int] = None,
) -> int:
    """Delete entries whose age exceeds ``max_age_ms``. Returns the number removed.

    Entries without ``updated_at`` are kept. Every entry is measured against
    the same ``now_ms`` snapshot.
    """
    if max_age_ms is None:
        max_age_ms = resolve_maintenance_config().prune_after_ms
    if now_ms is None:
        now_ms = _now_ms()

    stale = []
    for key, entry in store.items():
        age = entry_age_ms(entry, now_ms)
        if age is not None and age > max_age_ms:
            stale.append(key)

    for key in stale:
        del store[key]

    if stale:
        logger.info("Pruned %d stale session(s) older than %dms", len(stale), max_age_ms)
    return len(stale)


def cap_entry_count(store: SessionStore, max_entries: Optional[int] = None) -> int:
    """Evict lowest-priority entries until at most ``max_entries`` remain.

    Returns the number evicted.
    """
    if max_entries is None:
        max_entries = resolve_maintenance_config().max_entries

    excess = len(store) - max_entries
    if excess <= 0:
        return 0

    for key in eviction_order(store)[:excess]:
        del store[key]

    logger.info("Evicted %d session(s) to cap store at %d entries", excess, max_entries)
    return excess
