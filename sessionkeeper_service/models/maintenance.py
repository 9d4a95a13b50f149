from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ..parsing import parse_byte_size, parse_duration_ms

DAY_MS = 24 * 60 * 60 * 1000

DEFAULT_PRUNE_AFTER_MS = 30 * DAY_MS
DEFAULT_MAX_ENTRIES = 500
DEFAULT_ROTATE_BYTES = 10 * 1024 * 1024


class MaintenanceConfig(BaseModel):
    """Resolved maintenance settings. Field defaults are the built-in values."""

    mode: Literal["warn", "enforce"] = "warn"
    prune_after_ms: int = DEFAULT_PRUNE_AFTER_MS
    max_entries: int = DEFAULT_MAX_ENTRIES
    rotate_bytes: int = DEFAULT_ROTATE_BYTES


class MaintenanceOverrides(BaseModel):
    """Partial ``session.maintenance`` section of the config file."""

    model_config = ConfigDict(extra="ignore")

    mode: Optional[Literal["warn", "enforce"]] = None
    prune_after_ms: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("pruneAfter", "maxAgeMs", "prune_after_ms"),
    )
    max_entries: Optional[int] = Field(
        default=None,
        ge=0,
        validation_alias=AliasChoices("maxEntries", "max_entries"),
    )
    rotate_bytes: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("rotateBytes", "maxBytes", "rotate_bytes"),
    )

    @field_validator("prune_after_ms", mode="before")
    @classmethod
    def parse_prune_after(cls, v):
        return None if v is None else parse_duration_ms(v)

    @field_validator("rotate_bytes", mode="before")
    @classmethod
    def parse_rotate_bytes(cls, v):
        return None if v is None else parse_byte_size(v)


def merge_maintenance_config(overrides: Optional[dict] = None) -> MaintenanceConfig:
    """Merge the built-in defaults with a partial override mapping."""
    partial = MaintenanceOverrides.model_validate(overrides or {})
    return MaintenanceConfig().model_copy(update=partial.model_dump(exclude_none=True))
