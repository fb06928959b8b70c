"""Product domain entity."""

from datetime import datetime

from pydantic import BaseModel, Field


class Product(BaseModel):
    """A sellable product owned by one user; name is unique per owner."""

    id: int | None = None
    owner_id: int
    name: str
    rate: float
    unit: str | None = None
    stock: int = Field(default=0, ge=0)
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
