"""
Pydantic schemas for saved searches.
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional
from datetime import datetime
from app.models.property import PropertyType


class SavedSearchFilters(BaseModel):
    """Stored search criteria. All fields are optional."""

    city: Optional[str] = None
    state: Optional[str] = None
    min_price: Optional[float] = Field(None, ge=0)
    max_price: Optional[float] = Field(None, ge=0)
    bedrooms: Optional[int] = Field(None, ge=0)
    property_type: Optional[PropertyType] = None

    @model_validator(mode="after")
    def validate_price_range(self):
        if self.min_price is not None and self.max_price is not None:
            if self.min_price > self.max_price:
                raise ValueError("Minimum price cannot be greater than maximum price")
        return self


class SavedSearchCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, examples=["3BR in Lagos under 50M"])
    filters: SavedSearchFilters = Field(default_factory=SavedSearchFilters)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()


class SavedSearchUpdate(BaseModel):
    """Partial update; ``filters`` is replaced as a whole when present."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    filters: Optional[SavedSearchFilters] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if v is None:
            return v
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()

    @model_validator(mode="after")
    def reject_nulls(self):
        for field in self.model_fields_set:
            if getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class SavedSearchResponse(BaseModel):
    id: str
    user_id: str
    name: str
    filters: SavedSearchFilters
    created_at: datetime
