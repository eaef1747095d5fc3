"""
Test configuration and fixtures for the real-estate listings API.
Provides database fixtures, a fake market-data client, test data factories
and authenticated HTTP clients.
"""

import os

# Settings are read at import time; these must be in place before app is imported
os.environ.setdefault("ESTATEINTEL_API_KEY", "test-estateintel-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "testing")

import pytest
import uuid
from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from httpx import AsyncClient, ASGITransport

from app.main import app
from app.database import Base, get_db, enable_sqlite_foreign_keys
from app.models.user import User, UserRole
from app.models.property import Property, PropertyType
from app.repositories.user import UserRepository
from app.repositories.property import PropertyRepository
from app.services.auth import AuthService
from app.utils.auth import create_access_token
from app.utils.dependencies import get_market_data_client
from app.utils.exceptions import UpstreamError


TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")

DEFAULT_LOCATIONS = [
    {"city": "Lagos", "neighborhood": "Ikeja", "country": "NG"},
    {"city": "Lagos", "neighborhood": "Lekki", "country": "NG"},
    {"city": "Lagos", "neighborhood": "Yaba", "country": "NG"},
    {"city": "Lagos", "neighborhood": "Surulere", "country": "NG"},
    {"city": "Abuja", "neighborhood": "Wuse", "country": "NG"},
    {"city": "Abuja", "neighborhood": "Maitama", "country": "NG"},
    {"city": "Ibadan", "neighborhood": "Bodija", "country": "NG"},
    {"city": "Port Harcourt", "neighborhood": "GRA", "country": "NG"},
]


class FakeMarketDataClient:
    """
    Stand-in for MarketDataClient with canned responses.
    Set ``locations_error``/``prices_error`` to make the calls fail.
    """

    def __init__(
        self,
        locations: Optional[List[Dict[str, Any]]] = None,
        average_price: float = 60_000_000.0
    ):
        self.locations = DEFAULT_LOCATIONS if locations is None else locations
        self.average_price = average_price
        self.locations_error: Optional[UpstreamError] = None
        self.prices_error: Optional[UpstreamError] = None
        self.location_calls = 0
        self.price_calls: List[Dict[str, Any]] = []

    async def list_supported_locations(self) -> List[Dict[str, Any]]:
        self.location_calls += 1
        if self.locations_error is not None:
            raise self.locations_error
        return self.locations

    async def get_residential_prices(
        self,
        location: str,
        deal_type: str = "sale",
        bedrooms: int = 3,
        country: str = "NG"
    ) -> Dict[str, Any]:
        self.price_calls.append({
            "location": location,
            "deal_type": deal_type,
            "bedrooms": bedrooms,
            "country": country,
        })
        if self.prices_error is not None:
            raise self.prices_error
        return {"location": location, "average_price": self.average_price}

    async def aclose(self) -> None:
        pass


@pytest.fixture
async def test_engine(tmp_path):
    """A fresh schema per test; SQLite file database unless TEST_DATABASE_URL is set."""
    url = TEST_DATABASE_URL or f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    engine = create_async_engine(url, echo=False)
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def market_data() -> FakeMarketDataClient:
    return FakeMarketDataClient()


@pytest.fixture
async def async_client(session_factory, market_data) -> AsyncGenerator[AsyncClient, None]:
    """Async test client with the database and market-data client overridden."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_market_data_client] = lambda: market_data

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    return PropertyRepository(db_session)


@pytest.fixture
def auth_service(db_session: AsyncSession) -> AuthService:
    return AuthService(db_session)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        email: str = None,
        password: str = "testpassword123",
        name: str = "Test User",
        role: UserRole = UserRole.USER
    ) -> dict:
        return {
            "email": email or f"test{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
            "name": name,
            "role": role,
        }

    @staticmethod
    async def create_user(
        user_repo: UserRepository,
        email: str = None,
        password: str = "testpassword123",
        name: str = "Test User",
        role: UserRole = UserRole.USER
    ) -> User:
        """Create a test user in the database."""
        user_data = UserFactory.create_user_data(email=email, password=password, name=name, role=role)
        return await user_repo.create_user(user_data)


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_payload(
        title: str = "Test Property",
        city: str = "Lagos",
        state: str = "Lagos",
        neighborhood: Optional[str] = "Ikeja",
        price: float = 45_000_000,
        bedrooms: int = 3,
        bathrooms: float = 2,
        property_type: str = "Duplex",
        **extra: Any
    ) -> dict:
        """JSON body for the property create endpoints."""
        payload = {
            "title": title,
            "description": "A well-kept test listing",
            "location": {
                "city": city,
                "state": state,
                "neighborhood": neighborhood,
                "coordinates": {"lat": 6.6018, "lng": 3.3515},
            },
            "price": price,
            "bedrooms": bedrooms,
            "bathrooms": bathrooms,
            "property_type": property_type,
        }
        payload.update(extra)
        return payload

    @staticmethod
    async def create_property(
        property_repo: PropertyRepository,
        owner_id: Optional[uuid.UUID] = None,
        title: str = "Test Property",
        city: str = "Lagos",
        state: str = "Lagos",
        neighborhood: Optional[str] = "Ikeja",
        price: float = 45_000_000,
        bedrooms: int = 3,
        bathrooms: float = 2,
        property_type: PropertyType = PropertyType.HOUSE,
        date_listed: Optional[datetime] = None,
        for_sale: bool = True,
        for_rent: bool = False
    ) -> Property:
        """Create a test property in the database."""
        return await property_repo.create_property({
            "title": title,
            "description": "A well-kept test listing",
            "city": city,
            "state": state,
            "neighborhood": neighborhood,
            "price": price,
            "bedrooms": bedrooms,
            "bathrooms": bathrooms,
            "property_type": property_type,
            "date_listed": date_listed or datetime.now(timezone.utc),
            "for_sale": for_sale,
            "for_rent": for_rent,
            "created_by": owner_id,
        })


def auth_headers(user: User) -> Dict[str, str]:
    """Bearer header for ``user``."""
    token = create_access_token(user_id=user.id, email=user.email, role=user.role)
    return {"Authorization": f"Bearer {token}"}


# Common test fixtures
@pytest.fixture
async def test_user(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(user_repository, email="user@test.com", name="Test User")


@pytest.fixture
async def other_user(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(user_repository, email="other@test.com", name="Other User")


@pytest.fixture
async def test_admin(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="admin@test.com",
        name="Test Admin",
        role=UserRole.ADMIN
    )


@pytest.fixture
async def test_property(property_repository: PropertyRepository, test_admin: User) -> Property:
    return await PropertyFactory.create_property(property_repository, owner_id=test_admin.id)
