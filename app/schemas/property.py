"""
Pydantic schemas for property requests and responses.
Handles property CRUD payloads, search filters, and validation.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Any, Dict, Optional
from datetime import datetime
from app.models.property import PropertyType


class Coordinates(BaseModel):
    """Geographic point of a listing."""

    lat: Optional[float] = Field(None, ge=-90, le=90, description="Latitude")
    lng: Optional[float] = Field(None, ge=-180, le=180, description="Longitude")


class LocationSchema(BaseModel):
    """Nested listing location. City and state are required."""

    city: str = Field(..., min_length=1, max_length=120, examples=["Lagos"])
    state: str = Field(..., min_length=1, max_length=120, examples=["Lagos"])
    neighborhood: Optional[str] = Field(None, max_length=120, examples=["Ikeja"])
    coordinates: Optional[Coordinates] = None

    @field_validator("city", "state")
    @classmethod
    def strip_required(cls, v):
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @field_validator("neighborhood")
    @classmethod
    def strip_neighborhood(cls, v):
        if v is not None:
            v = v.strip()
        return v or None

    def to_columns(self) -> Dict[str, Any]:
        """Flatten into the property table's location columns."""
        coordinates = self.coordinates or Coordinates()
        return {
            "city": self.city,
            "state": self.state,
            "neighborhood": self.neighborhood,
            "latitude": coordinates.lat,
            "longitude": coordinates.lng,
        }


class PropertyBase(BaseModel):
    """Base property schema with common fields."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Listing title",
        examples=["Spacious 3BR Duplex in Ikeja"]
    )

    description: str = Field(
        ...,
        min_length=1,
        description="Listing description"
    )

    location: LocationSchema

    price: float = Field(..., ge=0, description="Price in local currency", examples=[45000000])

    bedrooms: int = Field(..., ge=0, description="Number of bedrooms", examples=[3])

    bathrooms: float = Field(..., ge=0, description="Number of bathrooms", examples=[2])

    image_url: Optional[str] = Field(None, max_length=1024, description="Public image URL")

    property_type: PropertyType = Field(PropertyType.HOUSE, description="Listing type")

    for_sale: bool = True

    for_rent: bool = False

    @field_validator("title", "description")
    @classmethod
    def validate_text(cls, v):
        """Reject whitespace-only text and strip the rest."""
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()


class PropertyCreate(PropertyBase):
    """Schema for creating a new property."""

    date_listed: Optional[datetime] = Field(
        None,
        description="Listing date; defaults to the creation time"
    )

    def to_columns(self) -> Dict[str, Any]:
        data = self.model_dump(exclude={"location", "date_listed"})
        data.update(self.location.to_columns())
        if self.date_listed is not None:
            data["date_listed"] = self.date_listed
        return data


class PropertyUpdate(BaseModel):
    """
    Partial update. Only fields present in the request body are written;
    omitted fields, including booleans, keep their stored value.
    """

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    location: Optional[LocationSchema] = None
    price: Optional[float] = Field(None, ge=0)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[float] = Field(None, ge=0)
    image_url: Optional[str] = Field(None, max_length=1024)
    property_type: Optional[PropertyType] = None
    for_sale: Optional[bool] = None
    for_rent: Optional[bool] = None
    date_listed: Optional[datetime] = None

    @field_validator("title", "description")
    @classmethod
    def validate_text(cls, v):
        """Same rule as on create; nulls are left to the model check below."""
        if v is None:
            return v
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @model_validator(mode="after")
    def reject_null_required_fields(self):
        """A required column cannot be cleared with an explicit null."""
        nullable = {"image_url"}
        for field in self.model_fields_set - nullable:
            if getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def to_columns(self) -> Dict[str, Any]:
        """Column changes for the fields that were actually sent."""
        data = self.model_dump(exclude_unset=True, exclude={"location"})
        if "location" in self.model_fields_set:
            data.update(self.location.to_columns())
        return data


class LocationResponse(BaseModel):
    city: str
    state: str
    neighborhood: Optional[str] = None
    coordinates: Optional[Coordinates] = None


class PropertyResponse(BaseModel):
    """Schema for property response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    location: LocationResponse
    price: float
    bedrooms: int
    bathrooms: float
    image_url: Optional[str] = None
    date_listed: datetime
    property_type: PropertyType
    for_sale: bool
    for_rent: bool
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class PropertySearchFilters(BaseModel):
    """Optional search criteria for the public property listing."""

    city: Optional[str] = Field(None, description="Exact city", examples=["Lagos"])
    state: Optional[str] = Field(None, description="Exact state")
    neighborhood: Optional[str] = Field(None, description="Exact neighborhood")
    min_price: Optional[float] = Field(None, ge=0, description="Inclusive lower price bound")
    max_price: Optional[float] = Field(None, ge=0, description="Inclusive upper price bound")
    bedrooms: Optional[int] = Field(None, ge=0, description="Exact bedroom count")
    property_type: Optional[PropertyType] = Field(None, description="Listing type")

    @field_validator("city", "state", "neighborhood")
    @classmethod
    def blank_to_none(cls, v):
        """An empty string is treated exactly like an absent value."""
        if v is not None:
            v = v.strip()
        return v or None

    @model_validator(mode="after")
    def validate_price_range(self):
        if self.min_price is not None and self.max_price is not None:
            if self.min_price > self.max_price:
                raise ValueError("Minimum price cannot be greater than maximum price")
        return self
