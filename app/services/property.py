"""
Property service for listing search and CRUD.
Handles location validation, shallow-merge updates and owner-scoped access.
"""

from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.property import PropertyRepository
from app.models.property import Property
from app.models.user import User
from app.schemas.property import PropertyCreate, PropertyUpdate, PropertySearchFilters
from app.services.market_data import MarketDataClient
from app.services.search import LocationValidator, PropertyQueryBuilder
from app.utils.exceptions import NotFoundError
import uuid
import logging

logger = logging.getLogger(__name__)


class PropertyService:
    """
    Property listing operations.

    Public search and the admin create/update endpoints check locations
    against the market-data catalog. The admin panel routes and the
    owner-scoped ``/user/properties`` routes write without that check.
    """

    def __init__(self, db_session: AsyncSession, market_data: MarketDataClient):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session)
        self.location_validator = LocationValidator(market_data)

    async def search_properties(self, filters: PropertySearchFilters) -> List[Property]:
        """
        Search listings, newest first.

        Args:
            filters: Optional search criteria

        Returns:
            Matching properties

        Raises:
            InvalidLocationError: If city or neighborhood is not supported
            UpstreamError: If the location catalog cannot be fetched
        """
        await self.location_validator.validate(filters.city, filters.neighborhood)
        conditions = PropertyQueryBuilder.build(filters)
        return await self.property_repo.search_properties(conditions)

    async def list_properties(self) -> List[Property]:
        return await self.property_repo.get_multi(order_by="-date_listed")

    async def get_property(self, property_id: uuid.UUID) -> Property:
        """
        Get a listing by ID.

        Raises:
            NotFoundError: If the listing does not exist
        """
        property_obj = await self.property_repo.get_by_id(property_id)
        if not property_obj:
            raise NotFoundError("Property", str(property_id))
        return property_obj

    async def create_property(
        self,
        property_data: PropertyCreate,
        current_user: Optional[User] = None,
        validate_location: bool = True
    ) -> Property:
        """
        Create a listing.

        Args:
            property_data: Listing payload
            current_user: Recorded as the listing's creator when given
            validate_location: Check the location against the catalog first

        Returns:
            Created property

        Raises:
            InvalidLocationError: If validation is on and the location is unsupported
        """
        if validate_location:
            location = property_data.location
            await self.location_validator.validate(location.city, location.neighborhood)

        create_data = property_data.to_columns()
        if current_user is not None:
            create_data["created_by"] = current_user.id

        property_obj = await self.property_repo.create_property(create_data)
        logger.info(f"Property created: {property_obj.title} (ID: {property_obj.id})")
        return property_obj

    async def update_property(
        self,
        property_id: uuid.UUID,
        update_data: PropertyUpdate,
        validate_location: bool = True
    ) -> Property:
        """
        Shallow-merge an update into a listing.

        With validation on, the resulting location (the new one if sent,
        otherwise the stored one) is checked against the catalog.

        Raises:
            NotFoundError: If the listing does not exist
            InvalidLocationError: If the resulting location is unsupported
        """
        property_obj = await self.get_property(property_id)
        return await self._apply_update(property_obj, update_data, validate_location)

    async def delete_property(self, property_id: uuid.UUID) -> None:
        """
        Delete a listing.

        Raises:
            NotFoundError: If the listing does not exist
        """
        if not await self.property_repo.delete(property_id):
            raise NotFoundError("Property", str(property_id))
        logger.info(f"Property deleted: {property_id}")

    # Owner-scoped operations

    async def get_user_properties(self, owner: User) -> List[Property]:
        return await self.property_repo.get_properties_by_owner(owner.id)

    async def create_user_property(self, property_data: PropertyCreate, owner: User) -> Property:
        return await self.create_property(property_data, current_user=owner, validate_location=False)

    async def update_user_property(
        self,
        property_id: uuid.UUID,
        update_data: PropertyUpdate,
        owner: User
    ) -> Property:
        """
        Update one of ``owner``'s listings.

        Raises:
            NotFoundError: If the listing does not exist or belongs to someone else
        """
        property_obj = await self.property_repo.get_owned_property(property_id, owner.id)
        if not property_obj:
            raise NotFoundError("Property", str(property_id))
        return await self._apply_update(property_obj, update_data, validate_location=False)

    async def delete_user_property(self, property_id: uuid.UUID, owner: User) -> None:
        """
        Delete one of ``owner``'s listings.

        Raises:
            NotFoundError: If the listing does not exist or belongs to someone else
        """
        if not await self.property_repo.delete(property_id, created_by=owner.id):
            raise NotFoundError("Property", str(property_id))
        logger.info(f"Property deleted by owner {owner.email}: {property_id}")

    async def _apply_update(
        self,
        property_obj: Property,
        update_data: PropertyUpdate,
        validate_location: bool
    ) -> Property:
        if validate_location:
            if update_data.location is not None:
                city, neighborhood = update_data.location.city, update_data.location.neighborhood
            else:
                city, neighborhood = property_obj.city, property_obj.neighborhood
            await self.location_validator.validate(city, neighborhood)

        changes = update_data.to_columns()
        updated = await self.property_repo.apply_update(property_obj, changes)
        logger.info(f"Property updated: {updated.id} fields={sorted(changes)}")
        return updated
