"""
Saved search model storing a named set of property filters per user.
"""

from sqlalchemy import String, Uuid, ForeignKey, JSON
from sqlalchemy.orm import Mapped, mapped_column
from app.database import Base
import uuid
from typing import Any, Dict


class SavedSearch(Base):
    """Named property filters owned by a user."""

    __tablename__ = "saved_searches"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # {city, state, min_price, max_price, bedrooms, property_type}
    filters: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    def __repr__(self) -> str:
        return f"<SavedSearch(id={self.id}, name={self.name})>"

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "name": self.name,
            "filters": self.filters or {},
            "created_at": self.created_at,
        }
