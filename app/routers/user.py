"""
Owner-scoped listing management for the signed-in user.
"""

from fastapi import APIRouter, Depends, status
from typing import List
from uuid import UUID

from app.models.user import User
from app.services.property import PropertyService
from app.schemas.common import MessageResponse
from app.schemas.property import PropertyCreate, PropertyUpdate, PropertyResponse
from app.utils.dependencies import get_current_user, get_property_service
from app.schemas.error import get_crud_error_responses


router = APIRouter(prefix="/user", tags=["User Listings"])


@router.get(
    "/properties",
    response_model=List[PropertyResponse],
    summary="List my properties",
    responses=get_crud_error_responses()
)
async def list_my_properties(
    current_user: User = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyResponse]:
    properties = await property_service.get_user_properties(current_user)
    return [PropertyResponse.model_validate(p.to_dict()) for p in properties]


@router.post(
    "/properties",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create my property",
    responses=get_crud_error_responses()
)
async def create_my_property(
    property_data: PropertyCreate,
    current_user: User = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.create_user_property(property_data, current_user)
    return PropertyResponse.model_validate(property_obj.to_dict())


@router.put(
    "/properties/{property_id}",
    response_model=PropertyResponse,
    summary="Update my property",
    description="Another user's listing is reported as not found.",
    responses=get_crud_error_responses()
)
async def update_my_property(
    property_id: UUID,
    update_data: PropertyUpdate,
    current_user: User = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.update_user_property(property_id, update_data, current_user)
    return PropertyResponse.model_validate(property_obj.to_dict())


@router.delete(
    "/properties/{property_id}",
    response_model=MessageResponse,
    summary="Delete my property",
    responses=get_crud_error_responses()
)
async def delete_my_property(
    property_id: UUID,
    current_user: User = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> MessageResponse:
    await property_service.delete_user_property(property_id, current_user)
    return MessageResponse(message="Property removed")
