"""Client schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ClientCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)


class ClientRead(BaseModel):
    id: int
    name: str
    created_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


__all__ = ["ClientCreate", "ClientRead"]
