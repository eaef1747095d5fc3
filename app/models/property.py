"""
Property model for sale and rental listings.
Handles listing data with location, pricing, and ownership.
"""

from sqlalchemy import String, Text, Integer, Float, Boolean, DateTime, Uuid, Enum as SQLEnum, Index, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base
from datetime import datetime, timezone
import enum
import uuid
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.user import User


class PropertyType(str, enum.Enum):
    """Fixed set of listing types."""
    APARTMENT = "Apartment"
    DUPLEX = "Duplex"
    VILLA = "Villa"
    HOUSE = "House"
    CONDO = "Condo"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Property(Base):
    """
    Property listing.
    The nested location of a listing is stored as flat columns and
    re-assembled by ``to_dict``.
    """

    __tablename__ = "properties"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_properties_price_non_negative"),
        CheckConstraint("bedrooms >= 0", name="ck_properties_bedrooms_non_negative"),
        CheckConstraint("bathrooms >= 0", name="ck_properties_bathrooms_non_negative"),
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Listing title"
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Listing description"
    )

    # Location
    city: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    state: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    neighborhood: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    latitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    longitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    # Pricing and layout
    price: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        index=True,
        comment="Listing price in local currency"
    )

    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    bathrooms: Mapped[float] = mapped_column(Float, nullable=False)

    image_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)

    date_listed: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        index=True,
        comment="When the listing was published"
    )

    property_type: Mapped[PropertyType] = mapped_column(
        SQLEnum(PropertyType, name="property_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=PropertyType.HOUSE,
        index=True
    )

    for_sale: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    for_rent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="User who created the listing"
    )

    owner: Mapped[Optional["User"]] = relationship(
        "User",
        back_populates="properties",
        lazy="raise"
    )

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, title={self.title[:30]}, price={self.price})>"

    @property
    def location(self) -> dict:
        """Nested location as exposed by the API."""
        coordinates = None
        if self.latitude is not None or self.longitude is not None:
            coordinates = {"lat": self.latitude, "lng": self.longitude}
        return {
            "city": self.city,
            "state": self.state,
            "neighborhood": self.neighborhood,
            "coordinates": coordinates,
        }

    def to_dict(self) -> dict:
        """
        Convert property to dictionary.

        Returns:
            Dictionary representation of property
        """
        return {
            "id": str(self.id),
            "title": self.title,
            "description": self.description,
            "location": self.location,
            "price": self.price,
            "bedrooms": self.bedrooms,
            "bathrooms": self.bathrooms,
            "image_url": self.image_url,
            "date_listed": self.date_listed,
            "property_type": self.property_type.value,
            "for_sale": self.for_sale,
            "for_rent": self.for_rent,
            "created_by": str(self.created_by) if self.created_by else None,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


# Composite index for the location + price search pattern
location_price_index = Index(
    "idx_properties_city_state_price",
    Property.city,
    Property.state,
    Property.price
)
