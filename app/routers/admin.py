"""
Admin panel: user management, unvalidated listing CRUD and dashboard stats.
Every route requires the admin role.
"""

from fastapi import APIRouter, Depends, status
from typing import List
from uuid import UUID

from app.models.user import User
from app.services.auth import AuthService
from app.services.analytics import AnalyticsService
from app.services.property import PropertyService
from app.schemas.analytics import AdminStats
from app.schemas.common import MessageResponse
from app.schemas.property import PropertyCreate, PropertyUpdate, PropertyResponse
from app.schemas.user import UserResponse, UserUpdate
from app.utils.dependencies import (
    get_analytics_service,
    get_auth_service,
    get_current_admin_user,
    get_property_service,
)
from app.schemas.error import get_crud_error_responses


router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(get_current_admin_user)],
    responses=get_crud_error_responses()
)


@router.get("/users", response_model=List[UserResponse], summary="List users")
async def list_users(
    auth_service: AuthService = Depends(get_auth_service)
) -> List[UserResponse]:
    users = await auth_service.get_all_users()
    return [UserResponse.model_validate(u.to_dict()) for u in users]


@router.put("/users/{user_id}", response_model=UserResponse, summary="Update user")
async def update_user(
    user_id: UUID,
    update_data: UserUpdate,
    auth_service: AuthService = Depends(get_auth_service)
) -> UserResponse:
    user = await auth_service.update_user(user_id, update_data)
    return UserResponse.model_validate(user.to_dict())


@router.delete("/users/{user_id}", response_model=MessageResponse, summary="Delete user")
async def delete_user(
    user_id: UUID,
    current_user: User = Depends(get_current_admin_user),
    auth_service: AuthService = Depends(get_auth_service)
) -> MessageResponse:
    await auth_service.delete_user(user_id, current_user)
    return MessageResponse(message="User removed")


@router.get("/properties", response_model=List[PropertyResponse], summary="List all properties")
async def list_all_properties(
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyResponse]:
    properties = await property_service.list_properties()
    return [PropertyResponse.model_validate(p.to_dict()) for p in properties]


@router.post(
    "/properties",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create property without location validation"
)
async def create_property(
    property_data: PropertyCreate,
    current_user: User = Depends(get_current_admin_user),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.create_property(
        property_data, current_user, validate_location=False
    )
    return PropertyResponse.model_validate(property_obj.to_dict())


@router.put(
    "/properties/{property_id}",
    response_model=PropertyResponse,
    summary="Update property without location validation"
)
async def update_property(
    property_id: UUID,
    update_data: PropertyUpdate,
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyResponse:
    property_obj = await property_service.update_property(
        property_id, update_data, validate_location=False
    )
    return PropertyResponse.model_validate(property_obj.to_dict())


@router.delete("/properties/{property_id}", response_model=MessageResponse, summary="Delete property")
async def delete_property(
    property_id: UUID,
    property_service: PropertyService = Depends(get_property_service)
) -> MessageResponse:
    await property_service.delete_property(property_id)
    return MessageResponse(message="Property removed")


@router.get("/stats", response_model=AdminStats, summary="Dashboard statistics")
async def stats(
    analytics_service: AnalyticsService = Depends(get_analytics_service)
) -> AdminStats:
    return AdminStats(**await analytics_service.admin_stats())
