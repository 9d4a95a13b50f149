import logging
import time
from pathlib import Path
from typing import Optional

from .maintenance import resolve_maintenance_config

logger = logging.getLogger(__name__)

MAX_BACKUPS = 3


def _now_ms() -> int:
    return int(time.time() * 1000)


def _backup_prefix(path: Path) -> str:
    return f"{path.name}.bak."


def _backup_stamp(path: Path, backup: Path) -> Optional[int]:
    suffix = backup.name[len(_backup_prefix(path)):]
    return int(suffix) if suffix.isdecimal() else None


def list_backups(file_path) -> list[Path]:
    """Backups of ``file_path`` in its directory, oldest first."""
    path = Path(file_path)
    if not path.parent.is_dir():
        return []

    prefix = _backup_prefix(path)
    stamped = []
    for candidate in path.parent.iterdir():
        if not candidate.name.startswith(prefix):
            continue
        stamp = _backup_stamp(path, candidate)
        if stamp is not None:
            stamped.append((stamp, candidate))
    stamped.sort(key=lambda item: item[0])
    return [backup for _, backup in stamped]


def _next_backup_path(path: Path) -> Path:
    # Stamps stay strictly increasing even when the clock stalls or repeats.
    stamp = _now_ms()
    existing = list_backups(path)
    if existing:
        stamp = max(stamp, _backup_stamp(path, existing[-1]) + 1)
    return path.with_name(f"{_backup_prefix(path)}{stamp}")


def _prune_backups(path: Path) -> int:
    removed = 0
    for old in list_backups(path)[:-MAX_BACKUPS]:
        try:
            old.unlink()
            removed += 1
        except OSError as e:
            logger.warning("Failed to remove old session backup %s: %s", old, e)
    return removed


async def rotate_session_file(file_path, max_bytes: Optional[int] = None) -> bool:
    """Move ``file_path`` aside as a timestamped backup once it exceeds ``max_bytes``.

    Returns True when the file was renamed. A missing file counts as empty.
    Only the newest ``MAX_BACKUPS`` backups are kept afterwards.
    """
    path = Path(file_path)
    if max_bytes is None:
        max_bytes = resolve_maintenance_config().rotate_bytes

    try:
        size = path.stat().st_size
    except FileNotFoundError:
        return False
    if size <= max_bytes:
        return False

    backup = _next_backup_path(path)
    path.rename(backup)
    logger.info("Rotated session file %s (%d bytes) to %s", path, size, backup.name)

    removed = _prune_backups(path)
    if removed:
        logger.info("Removed %d old session backup(s) for %s", removed, path.name)
    return True
