from .maintenance import MaintenanceConfig, MaintenanceOverrides, merge_maintenance_config
from .sessions import (
    SessionEntry,
    SessionStore,
    PruneRequest,
    CapRequest,
    RotateRequest,
    MaintenanceReport,
)

__all__ = [
    "MaintenanceConfig",
    "MaintenanceOverrides",
    "merge_maintenance_config",
    "SessionEntry",
    "SessionStore",
    "PruneRequest",
    "CapRequest",
    "RotateRequest",
    "MaintenanceReport",
]
