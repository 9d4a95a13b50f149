from typing import Optional

from ..models.sessions import SessionEntry, SessionStore


def entry_age_ms(entry: SessionEntry, now_ms: int) -> Optional[int]:
    """Age of an entry relative to ``now_ms``, or None if it was never timestamped."""
    if entry.updated_at is None:
        return None
    return now_ms - entry.updated_at


def _eviction_key(item: tuple[int, tuple[str, SessionEntry]]) -> tuple:
    position, (_, entry) = item
    if entry.updated_at is None:
        return (0, 0, position)
    return (1, entry.updated_at, position)


def eviction_order(store: SessionStore) -> list[str]:
    """Keys of ``store`` from lowest to highest eviction priority.

    Untimestamped entries come first, then the rest by ascending ``updated_at``.
    Ties keep insertion order.
    """
    ranked = sorted(enumerate(store.items()), key=_eviction_key)
    return [key for _, (key, _) in ranked]
