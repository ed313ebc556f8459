"""Request/response schemas for product endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductCreate(BaseModel):
    """Fields required to create a product."""

    name: str = Field(..., min_length=1, max_length=255, examples=["Widget"])
    description: str | None = Field(default=None, examples=["A useful widget"])
    price: float = Field(..., ge=0, examples=[19.99])
    stock: int = Field(..., ge=0, examples=[10])


class ProductUpdate(BaseModel):
    """
    Partial update. Only the fields declared here can change, and only those the
    client actually sent are applied (unknown keys are rejected).
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    stock: int | None = Field(default=None, ge=0)

    @field_validator("name", "price", "stock")
    @classmethod
    def reject_explicit_null(cls, v: object) -> object:
        if v is None:
            raise ValueError("may be omitted but not set to null")
        return v


class ProductRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    price: float
    stock: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
