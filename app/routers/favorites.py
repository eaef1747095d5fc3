"""
Favorites of the signed-in user.
"""

from fastapi import APIRouter, Depends, status
from typing import List
from uuid import UUID

from app.models.user import User
from app.services.favorite import FavoriteService
from app.schemas.common import MessageResponse
from app.schemas.favorite import FavoriteCreate, FavoriteResponse
from app.utils.dependencies import get_current_user, get_favorite_service
from app.schemas.error import get_crud_error_responses


router = APIRouter(prefix="/favorites", tags=["Favorites"], responses=get_crud_error_responses())


@router.get("", response_model=List[FavoriteResponse], summary="List my favorites")
async def list_favorites(
    current_user: User = Depends(get_current_user),
    favorite_service: FavoriteService = Depends(get_favorite_service)
) -> List[FavoriteResponse]:
    favorites = await favorite_service.get_favorites(current_user)
    return [FavoriteResponse.model_validate(f.to_dict()) for f in favorites]


@router.post(
    "",
    response_model=FavoriteResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a favorite",
    description="Fails with 400 if the property is already a favorite."
)
async def add_favorite(
    favorite_data: FavoriteCreate,
    current_user: User = Depends(get_current_user),
    favorite_service: FavoriteService = Depends(get_favorite_service)
) -> FavoriteResponse:
    favorite = await favorite_service.add_favorite(current_user, favorite_data.property_id)
    return FavoriteResponse.model_validate(favorite.to_dict())


@router.delete("/{favorite_id}", response_model=MessageResponse, summary="Remove a favorite")
async def remove_favorite(
    favorite_id: UUID,
    current_user: User = Depends(get_current_user),
    favorite_service: FavoriteService = Depends(get_favorite_service)
) -> MessageResponse:
    await favorite_service.remove_favorite(current_user, favorite_id)
    return MessageResponse(message="Favorite removed")
