"""
Public property search and admin listing management.
"""

from fastapi import APIRouter, Depends, status, Query
from typing import Optional, List
from pydantic import ValidationError as PydanticValidationError
from uuid import UUID

from app.models.user import User
from app.models.property import PropertyType
from app.services.property import PropertyService
from app.schemas.common import MessageResponse
from app.schemas.property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
    PropertySearchFilters,
)
from app.utils.dependencies import get_current_admin_user, get_property_service
from app.utils.exceptions import ValidationError
from app.schemas.error import get_error_responses, get_crud_error_responses


router = APIRouter(prefix="/properties", tags=["Properties"])


@router.get(
    "",
    response_model=List[PropertyResponse],
    summary="Search properties",
    description="List properties, newest first. City and neighborhood are checked "
                "against the supported-location catalog.",
    responses=get_error_responses(400, 422, 502)
)
async def list_properties(
    city: Optional[str] = Query(None, description="Exact city"),
    state: Optional[str] = Query(None, description="Exact state"),
    neighborhood: Optional[str] = Query(None, description="Exact neighborhood"),
    min_price: Optional[float] = Query(None, ge=0, description="Inclusive minimum price"),
    max_price: Optional[float] = Query(None, ge=0, description="Inclusive maximum price"),
    bedrooms: Optional[int] = Query(None, ge=0, description="Exact number of bedrooms"),
    property_type: Optional[PropertyType] = Query(None, description="Listing type"),
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyResponse]:
    """
    Search listings.

    Raises:
        ValidationError: If the filters are inconsistent, e.g. min_price > max_price (422)
        InvalidLocationError: If city or neighborhood is not supported (400)
        UpstreamError: If the location catalog cannot be fetched (502)
    """
    try:
        filters = PropertySearchFilters(
            city=city,
            state=state,
            neighborhood=neighborhood,
            min_price=min_price,
            max_price=max_price,
            bedrooms=bedrooms,
            property_type=property_type,
        )
    except PydanticValidationError as e:
        raise ValidationError(
            "Invalid search filters",
            field_errors=[
                {
                    "field": " -> ".join(["query", *(str(loc) for loc in err["loc"])]),
                    "message": err["msg"],
                    "type": err["type"],
                }
                for err in e.errors()
            ]
        )
    properties = await property_service.search_properties(filters)
    return [PropertyResponse.model_validate(p.to_dict()) for p in properties]


@router.get(
    "/{property_id}",
    response_model=PropertyResponse,
    summary="Get property by ID",
    responses=get_error_responses(404, 422)
)
async def get_property(
    property_id: UUID,
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.get_property(property_id)
    return PropertyResponse.model_validate(property_obj.to_dict())


@router.post(
    "",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create property",
    description="Create a listing after validating its location. Requires admin role.",
    responses={**get_crud_error_responses(), **get_error_responses(502)}
)
async def create_property(
    property_data: PropertyCreate,
    current_user: User = Depends(get_current_admin_user),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.create_property(property_data, current_user)
    return PropertyResponse.model_validate(property_obj.to_dict())


@router.put(
    "/{property_id}",
    response_model=PropertyResponse,
    summary="Update property",
    description="Partially update a listing; omitted fields keep their value. Requires admin role.",
    responses={**get_crud_error_responses(), **get_error_responses(502)}
)
async def update_property(
    property_id: UUID,
    update_data: PropertyUpdate,
    current_user: User = Depends(get_current_admin_user),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.update_property(property_id, update_data)
    return PropertyResponse.model_validate(property_obj.to_dict())


@router.delete(
    "/{property_id}",
    response_model=MessageResponse,
    summary="Delete property",
    responses=get_crud_error_responses()
)
async def delete_property(
    property_id: UUID,
    current_user: User = Depends(get_current_admin_user),
    property_service: PropertyService = Depends(get_property_service)
) -> MessageResponse:
    await property_service.delete_property(property_id)
    return MessageResponse(message="Property removed")
