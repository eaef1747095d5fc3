"""
Authentication service for registration, login, token management and
admin user management.
"""

from typing import List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.user import UserRepository
from app.models.user import User, UserRole
from app.schemas.user import UserCreate, UserUpdate
from app.utils.auth import (
    create_access_token,
    create_refresh_token,
    verify_token,
)
from app.utils.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
    NotFoundError,
    ForbiddenError,
    DuplicateResourceError,
)
from jose import ExpiredSignatureError, JWTError
import uuid
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service: resolves bearer tokens to users, issues tokens
    and manages user accounts for admins.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)

    async def register(self, user_data: UserCreate) -> Tuple[User, str, str]:
        """
        Create a user account and sign it in.

        Args:
            user_data: Registration payload

        Returns:
            Tuple of (user, access_token, refresh_token)

        Raises:
            DuplicateResourceError: If the email is already registered
        """
        if await self.user_repo.get_by_email(user_data.email):
            raise DuplicateResourceError("User", user_data.email)

        user = await self.user_repo.create_user({**user_data.model_dump(), "role": UserRole.USER})
        logger.info(f"User registered: {user.email} (ID: {user.id})")

        access_token, refresh_token = self.create_tokens(user)
        return user, access_token, refresh_token

    async def authenticate_user(self, email: str, password: str) -> User:
        """
        Authenticate user with email and password.

        Raises:
            InvalidCredentialsError: If credentials are invalid
        """
        user = await self.user_repo.authenticate_user(email, password)

        if not user:
            logger.warning(f"Failed authentication attempt for email: {email}")
            raise InvalidCredentialsError()

        logger.info(f"User authenticated successfully: {user.email}")
        return user

    def create_tokens(self, user: User) -> Tuple[str, str]:
        """
        Create access and refresh tokens for user.

        Returns:
            Tuple of (access_token, refresh_token)
        """
        access_token = create_access_token(
            user_id=user.id,
            email=user.email,
            role=user.role
        )
        refresh_token = create_refresh_token(
            user_id=user.id,
            email=user.email
        )
        return access_token, refresh_token

    async def login(self, email: str, password: str) -> Tuple[User, str, str]:
        """
        Authenticate user and create tokens.

        Returns:
            Tuple of (user, access_token, refresh_token)

        Raises:
            InvalidCredentialsError: If credentials are invalid
        """
        user = await self.authenticate_user(email, password)
        access_token, refresh_token = self.create_tokens(user)
        return user, access_token, refresh_token

    async def refresh_access_token(self, refresh_token: str) -> str:
        """
        Create new access token from refresh token.

        Raises:
            InvalidTokenError: If refresh token is invalid or its user is gone
            TokenExpiredError: If refresh token is expired
        """
        user = await self._resolve_token(refresh_token, token_type="refresh")
        return create_access_token(user_id=user.id, email=user.email, role=user.role)

    async def get_current_user(self, token: str) -> User:
        """
        Resolve an access token to its user.

        Raises:
            InvalidTokenError: If token is invalid or its user is gone
            TokenExpiredError: If token is expired
        """
        return await self._resolve_token(token, token_type="access")

    async def _resolve_token(self, token: str, token_type: str) -> User:
        try:
            payload = verify_token(token, token_type=token_type)
            user_id = uuid.UUID(payload.user_id)
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except (JWTError, ValueError) as e:
            raise InvalidTokenError(str(e) or "Invalid token")

        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise InvalidTokenError("User no longer exists")
        return user

    # Admin user management

    async def get_all_users(self) -> List[User]:
        return await self.user_repo.get_multi(order_by="created_at")

    async def get_user_by_id(self, user_id: uuid.UUID) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", str(user_id))
        return user

    async def update_user(self, user_id: uuid.UUID, update_data: UserUpdate) -> User:
        """
        Shallow-merge name/email/role changes into a user.

        Raises:
            NotFoundError: If the user does not exist
            DuplicateResourceError: If the new email belongs to another user
        """
        user = await self.get_user_by_id(user_id)
        changes = update_data.model_dump(exclude_unset=True)

        if "email" in changes and changes["email"] != user.email:
            existing = await self.user_repo.get_by_email(changes["email"])
            if existing and existing.id != user.id:
                raise DuplicateResourceError("User", changes["email"])

        updated = await self.user_repo.apply_update(user, changes)
        logger.info(f"User updated: {updated.id} fields={sorted(changes)}")
        return updated

    async def delete_user(self, user_id: uuid.UUID, current_user: User) -> None:
        """
        Delete a user. Their listings are kept with no creator.

        Raises:
            ForbiddenError: If an admin tries to delete their own account
            NotFoundError: If the user does not exist
        """
        if user_id == current_user.id:
            raise ForbiddenError("Users cannot delete their own account")

        if not await self.user_repo.delete(user_id):
            raise NotFoundError("User", str(user_id))
        logger.info(f"User deleted by {current_user.email}: {user_id}")
