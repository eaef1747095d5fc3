"""
User repository for authentication and user management operations.
Provides secure user operations with password handling and role-based access.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from app.repositories.base import BaseRepository
from app.models.user import User, UserRole
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """
    Repository for user management with authentication and authorization support.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def create_user(self, user_data: Dict[str, Any]) -> User:
        """
        Create a new user with email validation and password hashing.

        Args:
            user_data: Dictionary containing user information
                      Must include: name, email, password
                      Optional: role (defaults to USER)

        Returns:
            Created user instance

        Raises:
            ValueError: If validation fails or the email is taken
        """
        user_data = dict(user_data)
        email = User.validate_email_format(user_data["email"])

        existing_user = await self.get_by_email(email)
        if existing_user:
            raise ValueError(f"User with email {email} already exists")

        password = user_data.pop("password")

        create_data = {
            **user_data,
            "email": email,
            "hashed_password": User.hash_password(password),
            "role": user_data.get("role") or UserRole.USER,
        }

        created_user = await self.create(create_data)
        logger.info(f"Created user: {created_user.email} (ID: {created_user.id})")
        return created_user

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Args:
            email: Email address to search for

        Returns:
            User instance if found, None otherwise
        """
        normalized_email = email.lower().strip()
        result = await self.db.execute(select(User).where(User.email == normalized_email))
        return result.scalar_one_or_none()

    async def authenticate_user(self, email: str, password: str) -> Optional[User]:
        """
        Authenticate user with email and password.

        Returns:
            User instance if authentication successful, None otherwise
        """
        user = await self.get_by_email(email)

        if not user:
            logger.debug(f"Authentication failed: user {email} not found")
            return None

        if not user.verify_password(password):
            logger.debug(f"Authentication failed: invalid password for {email}")
            return None

        return user
