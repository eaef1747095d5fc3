"""
Tests for service classes.
Covers location validation, search, analytics enhancement, favorites,
saved searches, testimonials and authentication.
"""

import pytest
import uuid
from datetime import datetime, timezone

from app.models.user import User, UserRole
from app.models.property import Property, PropertyType
from app.repositories.property import PropertyRepository
from app.repositories.user import UserRepository
from app.services.analytics import AnalyticsService, location_slug
from app.services.auth import AuthService
from app.services.favorite import FavoriteService
from app.services.property import PropertyService
from app.services.saved_search import SavedSearchService
from app.services.search import LocationValidator, PropertyQueryBuilder
from app.services.testimonial import TestimonialService
from app.schemas.property import PropertyCreate, PropertyUpdate, PropertySearchFilters
from app.schemas.saved_search import SavedSearchCreate, SavedSearchUpdate
from app.schemas.testimonial import TestimonialCreate, TestimonialUpdate
from app.schemas.user import UserCreate, UserUpdate
from app.utils.auth import create_refresh_token
from app.utils.dependencies import get_current_admin_user, require_role
from app.utils.exceptions import (
    BadRequestError,
    DuplicateFavoriteError,
    DuplicateResourceError,
    ForbiddenError,
    InsufficientPermissionsError,
    InvalidCredentialsError,
    InvalidLocationError,
    InvalidTokenError,
    NotFoundError,
    UpstreamError,
)
from tests.conftest import FakeMarketDataClient, PropertyFactory, UserFactory


class TestLocationValidator:
    """Test validation against the supported-location catalog."""

    @pytest.mark.asyncio
    async def test_no_lookup_without_city_or_neighborhood(self, market_data: FakeMarketDataClient):
        validator = LocationValidator(market_data)

        await validator.validate(None, None)
        await validator.validate("", "")
        await validator.validate("   ", None)

        assert market_data.location_calls == 0

    @pytest.mark.asyncio
    async def test_known_city_is_case_insensitive(self, market_data: FakeMarketDataClient):
        validator = LocationValidator(market_data)

        await validator.validate("lAgOs", "ikeja")

        assert market_data.location_calls == 1

    @pytest.mark.asyncio
    async def test_unknown_city(self, market_data: FakeMarketDataClient):
        validator = LocationValidator(market_data)

        with pytest.raises(InvalidLocationError) as exc_info:
            await validator.validate("Atlantis")

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "Invalid city: Atlantis. Supported cities include: lagos, abuja, ibadan"

    @pytest.mark.asyncio
    async def test_unknown_neighborhood(self, market_data: FakeMarketDataClient):
        validator = LocationValidator(market_data)

        with pytest.raises(InvalidLocationError) as exc_info:
            await validator.validate("Lagos", "Gotham")

        assert exc_info.value.detail == "Invalid neighborhood: Gotham for city Lagos. Supported: ikeja, lekki, yaba"

    @pytest.mark.asyncio
    async def test_neighborhood_must_belong_to_city(self, market_data: FakeMarketDataClient):
        validator = LocationValidator(market_data)

        with pytest.raises(InvalidLocationError):
            await validator.validate("Abuja", "Ikeja")

    @pytest.mark.asyncio
    async def test_upstream_failure_is_not_a_validation_error(self, market_data: FakeMarketDataClient):
        market_data.locations_error = UpstreamError("Failed to fetch locations: timeout")
        validator = LocationValidator(market_data)

        with pytest.raises(UpstreamError) as exc_info:
            await validator.validate("Lagos")

        assert not isinstance(exc_info.value, InvalidLocationError)
        assert exc_info.value.status_code == 502


class TestPropertyQueryBuilder:
    """Test filter-to-condition translation."""

    def test_no_filters(self):
        assert PropertyQueryBuilder.build(PropertySearchFilters()) == []

    def test_blank_strings_are_ignored(self):
        filters = PropertySearchFilters(city="", state="  ", neighborhood="")
        assert PropertyQueryBuilder.build(filters) == []

    def test_one_condition_per_filter(self):
        filters = PropertySearchFilters(
            city="Lagos",
            state="Lagos",
            neighborhood="Ikeja",
            min_price=10,
            max_price=20,
            bedrooms=3,
            property_type=PropertyType.VILLA,
        )
        assert len(PropertyQueryBuilder.build(filters)) == 7

    def test_min_greater_than_max_is_rejected(self):
        with pytest.raises(ValueError):
            PropertySearchFilters(min_price=100, max_price=50)


class TestPropertyService:
    """Test property search and CRUD rules."""

    @pytest.mark.asyncio
    async def test_search_price_range_is_inclusive(
        self,
        db_session,
        market_data: FakeMarketDataClient,
        property_repository: PropertyRepository
    ):
        for price in (100, 200, 300, 400):
            await PropertyFactory.create_property(property_repository, title=f"P{price}", price=price)

        service = PropertyService(db_session, market_data)
        results = await service.search_properties(PropertySearchFilters(min_price=200, max_price=300))

        assert sorted(p.price for p in results) == [200, 300]
        assert all(200 <= p.price <= 300 for p in results)

    @pytest.mark.asyncio
    async def test_search_orders_newest_first(
        self,
        db_session,
        market_data: FakeMarketDataClient,
        property_repository: PropertyRepository
    ):
        await PropertyFactory.create_property(
            property_repository, title="Old", date_listed=datetime(2023, 1, 1, tzinfo=timezone.utc)
        )
        await PropertyFactory.create_property(
            property_repository, title="New", date_listed=datetime(2024, 6, 1, tzinfo=timezone.utc)
        )

        service = PropertyService(db_session, market_data)
        results = await service.search_properties(PropertySearchFilters())

        assert [p.title for p in results] == ["New", "Old"]

    @pytest.mark.asyncio
    async def test_invalid_city_fails_before_query(
        self,
        db_session,
        market_data: FakeMarketDataClient,
        property_repository: PropertyRepository
    ):
        await PropertyFactory.create_property(property_repository, city="Atlantis")
        service = PropertyService(db_session, market_data)

        with pytest.raises(InvalidLocationError):
            await service.search_properties(PropertySearchFilters(city="Atlantis"))

    @pytest.mark.asyncio
    async def test_update_keeps_omitted_fields(
        self,
        db_session,
        market_data: FakeMarketDataClient,
        test_property: Property
    ):
        service = PropertyService(db_session, market_data)

        updated = await service.update_property(test_property.id, PropertyUpdate(for_sale=False))

        assert updated.for_sale is False
        assert updated.title == "Test Property"
        assert updated.price == 45_000_000
        assert updated.city == "Lagos"
        assert updated.for_rent is False

    @pytest.mark.asyncio
    async def test_update_validates_stored_location_when_omitted(
        self,
        db_session,
        market_data: FakeMarketDataClient,
        test_property: Property
    ):
        service = PropertyService(db_session, market_data)

        await service.update_property(test_property.id, PropertyUpdate(price=1))

        assert market_data.location_calls == 1

    @pytest.mark.asyncio
    async def test_owner_scoped_update_of_foreign_listing_is_not_found(
        self,
        db_session,
        market_data: FakeMarketDataClient,
        test_property: Property,
        test_user: User
    ):
        service = PropertyService(db_session, market_data)

        with pytest.raises(NotFoundError):
            await service.update_user_property(test_property.id, PropertyUpdate(price=1), test_user)
        with pytest.raises(NotFoundError):
            await service.delete_user_property(test_property.id, test_user)

        unchanged = await PropertyRepository(db_session).get_by_id(test_property.id)
        assert unchanged is not None
        assert unchanged.price == 45_000_000

    @pytest.mark.asyncio
    async def test_user_listing_is_created_without_validation(
        self,
        db_session,
        market_data: FakeMarketDataClient,
        test_user: User
    ):
        service = PropertyService(db_session, market_data)
        data = PropertyCreate(**PropertyFactory.create_property_payload(city="Atlantis", neighborhood=None))

        created = await service.create_user_property(data, test_user)

        assert created.created_by == test_user.id
        assert market_data.location_calls == 0


class TestAnalyticsService:
    """Test grouping, summary and market-data enhancement."""

    async def _seed(self, property_repository: PropertyRepository):
        await PropertyFactory.create_property(property_repository, city="Lagos", price=100)
        await PropertyFactory.create_property(property_repository, city="Lagos", price=300)
        await PropertyFactory.create_property(property_repository, city="Abuja", price=500, neighborhood="Wuse")
        await PropertyFactory.create_property(property_repository, city="Ibadan", price=50, neighborhood=None)

    def test_location_slug(self):
        assert location_slug("Lagos") == "lagos-ikeja"
        assert location_slug("Abuja") == "abuja-central"

    @pytest.mark.asyncio
    async def test_average_price_by_city(self, db_session, market_data, property_repository):
        await self._seed(property_repository)
        service = AnalyticsService(db_session, market_data)

        rows = await service.average_price_by_city()

        assert [r["city"] for r in rows] == ["Abuja", "Lagos", "Ibadan"]
        assert rows[1]["local_average_price"] == 200
        assert sum(r["listing_count"] for r in rows) == 4
        assert len({r["city"] for r in rows}) == len(rows)
        assert market_data.price_calls == []

    @pytest.mark.asyncio
    async def test_enhancement_merges_into_existing_city(self, db_session, market_data, property_repository):
        await self._seed(property_repository)
        market_data.average_price = 400
        service = AnalyticsService(db_session, market_data)

        rows = await service.average_price_by_city(enhanced=True, city="lagos", deal_type="rent", bedrooms=2)

        lagos = next(r for r in rows if r["city"] == "Lagos")
        assert lagos["market_average_price"] == 400
        assert lagos["enhanced_average_price"] == 300
        assert market_data.price_calls == [
            {"location": "lagos-ikeja", "deal_type": "rent", "bedrooms": 2, "country": "NG"}
        ]
        assert "market_average_price" not in next(r for r in rows if r["city"] == "Abuja")

    @pytest.mark.asyncio
    async def test_enhancement_appends_city_without_listings(self, db_session, market_data, property_repository):
        await self._seed(property_repository)
        market_data.average_price = 250
        service = AnalyticsService(db_session, market_data)

        rows = await service.average_price_by_city(enhanced=True, city="Kano")

        assert rows[-1] == {
            "city": "Kano",
            "local_average_price": None,
            "listing_count": 0,
            "market_average_price": 250,
            "enhanced_average_price": 250,
        }
        assert market_data.price_calls[0]["location"] == "kano-central"

    @pytest.mark.asyncio
    async def test_enhancement_failure_returns_plain_groups(self, db_session, market_data, property_repository):
        await self._seed(property_repository)
        service = AnalyticsService(db_session, market_data)
        plain = await service.average_price_by_city()

        market_data.prices_error = UpstreamError("Failed to fetch prices: timeout")
        rows = await service.average_price_by_city(enhanced=True, city="Lagos")

        assert rows == plain
        assert all("market_average_price" not in r for r in rows)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_value", ["N/A", {"amount": 1}, [1, 2]])
    async def test_non_numeric_market_average_returns_plain_groups(
        self, db_session, market_data, property_repository, bad_value
    ):
        await self._seed(property_repository)
        service = AnalyticsService(db_session, market_data)
        plain = await service.average_price_by_city()

        market_data.average_price = bad_value
        rows = await service.average_price_by_city(enhanced=True, city="Lagos")

        assert rows == plain
        assert len(market_data.price_calls) == 1

    @pytest.mark.asyncio
    async def test_enhanced_without_city_makes_no_call(self, db_session, market_data, property_repository):
        await self._seed(property_repository)
        service = AnalyticsService(db_session, market_data)

        await service.average_price_by_city(enhanced=True)

        assert market_data.price_calls == []

    @pytest.mark.asyncio
    async def test_summary_empty(self, db_session, market_data):
        service = AnalyticsService(db_session, market_data)

        summary = await service.summary()

        assert summary == {"total_listings": 0, "average_price": 0, "top_cities": []}

    @pytest.mark.asyncio
    async def test_summary_top_cities_limited_to_five(self, db_session, market_data, property_repository):
        cities = {"A": 6, "B": 5, "C": 4, "D": 3, "E": 2, "F": 1}
        for city, count in cities.items():
            for _ in range(count):
                await PropertyFactory.create_property(property_repository, city=city, price=10)
        service = AnalyticsService(db_session, market_data)

        summary = await service.summary()

        assert summary["total_listings"] == 21
        assert summary["average_price"] == 10
        assert len(summary["top_cities"]) == 5
        counts = [c["listing_count"] for c in summary["top_cities"]]
        assert counts == sorted(counts, reverse=True)
        assert summary["top_cities"][0] == {"city": "A", "listing_count": 6}

    @pytest.mark.asyncio
    async def test_price_trends_chronological(self, db_session, market_data, property_repository):
        for year, month, price in ((2024, 3, 100), (2023, 11, 200), (2024, 3, 300), (2024, 1, 50)):
            await PropertyFactory.create_property(
                property_repository,
                price=price,
                date_listed=datetime(year, month, 15, tzinfo=timezone.utc)
            )
        service = AnalyticsService(db_session, market_data)

        trends = await service.price_trends_by_month()

        assert [(t["year"], t["month"]) for t in trends] == [(2023, 11), (2024, 1), (2024, 3)]
        assert trends[-1]["average_price"] == 200
        assert trends[-1]["listing_count"] == 2

    @pytest.mark.asyncio
    async def test_admin_stats_counts_users(self, db_session, market_data, test_user, test_admin):
        service = AnalyticsService(db_session, market_data)

        stats = await service.admin_stats()

        assert stats["total_users"] == 2
        assert stats["total_listings"] == 0

    @pytest.mark.asyncio
    async def test_market_prices_requires_location(self, db_session, market_data):
        service = AnalyticsService(db_session, market_data)

        with pytest.raises(BadRequestError) as exc_info:
            await service.market_prices(None)

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "Location slug is required (e.g., lagos-ikeja)"


class TestFavoriteService:
    """Test favorite uniqueness and ownership."""

    @pytest.mark.asyncio
    async def test_duplicate_favorite(self, db_session, test_user: User, test_property: Property):
        service = FavoriteService(db_session)

        favorite = await service.add_favorite(test_user, test_property.id)
        with pytest.raises(DuplicateFavoriteError) as exc_info:
            await service.add_favorite(test_user, test_property.id)

        assert exc_info.value.detail == "Property already in favorites"
        assert favorite.listing.id == test_property.id
        assert len(await service.get_favorites(test_user)) == 1

    @pytest.mark.asyncio
    async def test_favorite_unknown_property(self, db_session, test_user: User):
        service = FavoriteService(db_session)

        with pytest.raises(NotFoundError):
            await service.add_favorite(test_user, uuid.uuid4())

    @pytest.mark.asyncio
    async def test_remove_other_users_favorite(
        self,
        db_session,
        test_user: User,
        other_user: User,
        test_property: Property
    ):
        service = FavoriteService(db_session)
        favorite = await service.add_favorite(test_user, test_property.id)

        with pytest.raises(NotFoundError):
            await service.remove_favorite(other_user, favorite.id)

        assert len(await service.get_favorites(test_user)) == 1


class TestSavedSearchService:

    @pytest.mark.asyncio
    async def test_rename_keeps_filters(self, db_session, test_user: User):
        service = SavedSearchService(db_session)
        saved = await service.create_saved_search(
            test_user,
            SavedSearchCreate(name="Lagos 3BR", filters={"city": "Lagos", "bedrooms": 3})
        )

        updated = await service.update_saved_search(test_user, saved.id, SavedSearchUpdate(name="Renamed"))

        assert updated.name == "Renamed"
        assert updated.filters == {"city": "Lagos", "bedrooms": 3}

    @pytest.mark.asyncio
    async def test_other_owner_is_not_found(self, db_session, test_user: User, other_user: User):
        service = SavedSearchService(db_session)
        saved = await service.create_saved_search(test_user, SavedSearchCreate(name="Mine"))

        with pytest.raises(NotFoundError):
            await service.update_saved_search(other_user, saved.id, SavedSearchUpdate(name="Theirs"))
        with pytest.raises(NotFoundError):
            await service.delete_saved_search(other_user, saved.id)


class TestTestimonialService:

    @pytest.mark.asyncio
    async def test_explicit_false_unapproves(self, db_session, test_user: User):
        service = TestimonialService(db_session)
        testimonial = await service.create_testimonial(
            test_user,
            TestimonialCreate(name="Ada", email="ada@example.com", message="Great", rating=5)
        )
        assert testimonial.is_approved is False
        assert testimonial.user.name == "Test User"

        approved = await service.update_testimonial(testimonial.id, TestimonialUpdate(is_approved=True))
        assert approved.is_approved is True

        unapproved = await service.update_testimonial(testimonial.id, TestimonialUpdate(is_approved=False))
        assert unapproved.is_approved is False
        assert unapproved.rating == 5

    @pytest.mark.asyncio
    async def test_approved_only_filter(self, db_session, test_user: User):
        service = TestimonialService(db_session)
        first = await service.create_testimonial(
            test_user, TestimonialCreate(name="A", email="a@example.com", message="One", rating=4)
        )
        await service.create_testimonial(
            test_user, TestimonialCreate(name="B", email="b@example.com", message="Two", rating=3)
        )
        await service.update_testimonial(first.id, TestimonialUpdate(is_approved=True))

        assert len(await service.get_testimonials()) == 2
        approved = await service.get_testimonials(approved_only=True)
        assert [t.id for t in approved] == [first.id]


class TestAuthService:
    """Test AuthService functionality."""

    @pytest.mark.asyncio
    async def test_register_assigns_user_role(self, auth_service: AuthService):
        user, access_token, refresh_token = await auth_service.register(
            UserCreate(name="New User", email="New@Example.com", password="secret123")
        )

        assert user.role == UserRole.USER
        assert user.email == "new@example.com"
        assert access_token and refresh_token

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, auth_service: AuthService, test_user: User):
        with pytest.raises(DuplicateResourceError):
            await auth_service.register(UserCreate(name="Dup", email=test_user.email, password="secret123"))

    @pytest.mark.asyncio
    async def test_authenticate_user_success(self, auth_service: AuthService, test_user: User):
        authenticated_user = await auth_service.authenticate_user(test_user.email, "testpassword123")
        assert authenticated_user.id == test_user.id

    @pytest.mark.asyncio
    async def test_authenticate_user_invalid_credentials(self, auth_service: AuthService, test_user: User):
        with pytest.raises(InvalidCredentialsError):
            await auth_service.authenticate_user(test_user.email, "wrongpassword")

    @pytest.mark.asyncio
    async def test_get_current_user_rejects_refresh_token(self, auth_service: AuthService, test_user: User):
        refresh_token = create_refresh_token(test_user.id, test_user.email)

        with pytest.raises(InvalidTokenError):
            await auth_service.get_current_user(refresh_token)

    @pytest.mark.asyncio
    async def test_refresh_access_token(self, auth_service: AuthService, test_user: User):
        refresh_token = create_refresh_token(test_user.id, test_user.email)

        access_token = await auth_service.refresh_access_token(refresh_token)

        user = await auth_service.get_current_user(access_token)
        assert user.id == test_user.id

    @pytest.mark.asyncio
    async def test_update_user_role(self, auth_service: AuthService, test_user: User):
        updated = await auth_service.update_user(test_user.id, UserUpdate(role=UserRole.ADMIN))

        assert updated.role == UserRole.ADMIN
        assert updated.name == "Test User"

    @pytest.mark.asyncio
    async def test_admin_cannot_delete_self(self, auth_service: AuthService, test_admin: User):
        with pytest.raises(ForbiddenError):
            await auth_service.delete_user(test_admin.id, test_admin)

    @pytest.mark.asyncio
    async def test_deleting_user_keeps_listings(
        self,
        db_session,
        auth_service: AuthService,
        test_admin: User,
        user_repository: UserRepository,
        property_repository: PropertyRepository
    ):
        owner = await UserFactory.create_user(user_repository, email="owner@test.com")
        listing = await PropertyFactory.create_property(property_repository, owner_id=owner.id)

        await auth_service.delete_user(owner.id, test_admin)

        listing_id = listing.id
        db_session.expire_all()
        kept = await property_repository.get_by_id(listing_id)
        assert kept is not None
        assert kept.created_by is None


class TestRequireRole:
    """Role-gate dependency used by the admin routes."""

    @pytest.mark.asyncio
    async def test_matching_role_passes(self, test_user: User):
        assert await require_role(UserRole.USER)(current_user=test_user) is test_user

    @pytest.mark.asyncio
    async def test_admin_satisfies_every_role(self, test_admin: User):
        assert await require_role(UserRole.USER)(current_user=test_admin) is test_admin
        assert await get_current_admin_user(current_user=test_admin) is test_admin

    @pytest.mark.asyncio
    async def test_missing_role_is_forbidden(self, test_user: User):
        with pytest.raises(InsufficientPermissionsError) as exc_info:
            await get_current_admin_user(current_user=test_user)

        assert exc_info.value.status_code == 403
        assert exc_info.value.detail == "Insufficient permissions to access admin resources"
