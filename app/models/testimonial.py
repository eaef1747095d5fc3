"""
Testimonial model for user-submitted reviews awaiting moderation.
"""

from sqlalchemy import String, Text, Integer, Boolean, Uuid, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base
import uuid
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.user import User

MIN_RATING = 1
MAX_RATING = 5


class Testimonial(Base):
    """User review with a 1-5 rating. Hidden until approved by an admin."""

    __tablename__ = "testimonials"
    __table_args__ = (
        CheckConstraint(
            f"rating >= {MIN_RATING} AND rating <= {MAX_RATING}",
            name="ck_testimonials_rating_range"
        ),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[str] = mapped_column(String(255), nullable=False)

    message: Mapped[str] = mapped_column(Text, nullable=False)

    rating: Mapped[int] = mapped_column(Integer, nullable=False)

    is_approved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)

    user: Mapped[Optional["User"]] = relationship("User", lazy="selectin")

    def __repr__(self) -> str:
        return f"<Testimonial(id={self.id}, rating={self.rating}, approved={self.is_approved})>"

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "user_name": self.user.name if self.user else None,
            "name": self.name,
            "email": self.email,
            "message": self.message,
            "rating": self.rating,
            "is_approved": self.is_approved,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
