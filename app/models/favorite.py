"""
Favorite model linking a user to a saved property.
"""

from sqlalchemy import Uuid, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base
import uuid
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.property import Property


class Favorite(Base):
    """
    A (user, property) pair.
    Uniqueness is checked by the service before insert and enforced by
    the unique constraint when two inserts race.
    """

    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint("user_id", "property_id", name="uq_favorites_user_property"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    listing: Mapped[Optional["Property"]] = relationship("Property", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Favorite(id={self.id}, user_id={self.user_id}, property_id={self.property_id})>"

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "property_id": str(self.property_id),
            "property": self.listing.to_dict() if self.listing else None,
            "created_at": self.created_at,
        }
