from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class SessionEntry(BaseModel):
    """One record of the session store.

    Only ``sessionId`` and ``updatedAt`` matter to maintenance; every other
    field is kept as-is and written back unchanged.
    """

    model_config = ConfigDict(extra="allow")

    session_id: str = Field(alias="sessionId")
    updated_at: Optional[int] = Field(default=None, alias="updatedAt")

    def to_json(self) -> dict:
        data = self.model_dump(by_alias=True)
        if "updated_at" not in self.model_fields_set:
            data.pop("updatedAt", None)
        return data


SessionStore = dict[str, SessionEntry]


class PruneRequest(BaseModel):
    max_age_ms: Optional[int] = Field(default=None, gt=0)


class CapRequest(BaseModel):
    max_entries: Optional[int] = Field(default=None, ge=0)


class RotateRequest(BaseModel):
    max_bytes: Optional[int] = Field(default=None, ge=0)


class MaintenanceReport(BaseModel):
    mode: str
    pruned: int = 0
    evicted: int = 0
    rotated: bool = False
    remaining: int = 0
