"""Customer domain entity."""

from datetime import datetime

from pydantic import BaseModel, Field


class Customer(BaseModel):
    """A customer of the owning user."""

    id: int | None = None
    owner_id: int
    name: str
    phone: str
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
