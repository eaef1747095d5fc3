"""
User model with authentication and role management.
"""

from sqlalchemy import String, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base
from passlib.context import CryptContext
from email_validator import validate_email, EmailNotValidError
import enum
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.property import Property

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class UserRole(str, enum.Enum):
    """User role enumeration for role-based access control."""
    USER = "user"
    ADMIN = "admin"


class User(Base):
    """Registered account. Admins manage listings, users and uploads."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name"
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="User email address - must be unique and valid"
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole, name="user_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=UserRole.USER,
        index=True
    )

    properties: Mapped[List["Property"]] = relationship(
        "Property",
        back_populates="owner",
        passive_deletes=True,
        lazy="raise"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"

    @classmethod
    def validate_email_format(cls, email: str) -> str:
        """
        Validate email format using email-validator.

        Args:
            email: Email address to validate

        Returns:
            Normalized email address

        Raises:
            ValueError: If email format is invalid
        """
        try:
            valid_email = validate_email(email, check_deliverability=False)
            return valid_email.normalized.lower()
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email format: {str(e)}")

    @classmethod
    def hash_password(cls, password: str) -> str:
        """Hash a password using bcrypt."""
        if not password or len(password) < 6:
            raise ValueError("Password must be at least 6 characters long")

        return pwd_context.hash(password)

    def verify_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""
        return pwd_context.verify(password, self.hashed_password)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def to_dict(self) -> dict:
        """
        Convert user to dictionary (excluding sensitive data).

        Returns:
            Dictionary representation of user
        """
        return {
            "id": str(self.id),
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
