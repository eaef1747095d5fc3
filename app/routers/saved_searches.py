"""
Saved searches of the signed-in user.
"""

from fastapi import APIRouter, Depends, status
from typing import List
from uuid import UUID

from app.models.user import User
from app.services.saved_search import SavedSearchService
from app.schemas.common import MessageResponse
from app.schemas.saved_search import SavedSearchCreate, SavedSearchUpdate, SavedSearchResponse
from app.utils.dependencies import get_current_user, get_saved_search_service
from app.schemas.error import get_crud_error_responses


router = APIRouter(prefix="/saved-searches", tags=["Saved Searches"], responses=get_crud_error_responses())


@router.get("", response_model=List[SavedSearchResponse], summary="List my saved searches")
async def list_saved_searches(
    current_user: User = Depends(get_current_user),
    search_service: SavedSearchService = Depends(get_saved_search_service)
) -> List[SavedSearchResponse]:
    searches = await search_service.get_saved_searches(current_user)
    return [SavedSearchResponse.model_validate(s.to_dict()) for s in searches]


@router.post(
    "",
    response_model=SavedSearchResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save a search"
)
async def create_saved_search(
    search_data: SavedSearchCreate,
    current_user: User = Depends(get_current_user),
    search_service: SavedSearchService = Depends(get_saved_search_service)
) -> SavedSearchResponse:
    saved_search = await search_service.create_saved_search(current_user, search_data)
    return SavedSearchResponse.model_validate(saved_search.to_dict())


@router.put("/{search_id}", response_model=SavedSearchResponse, summary="Update a saved search")
async def update_saved_search(
    search_id: UUID,
    update_data: SavedSearchUpdate,
    current_user: User = Depends(get_current_user),
    search_service: SavedSearchService = Depends(get_saved_search_service)
) -> SavedSearchResponse:
    saved_search = await search_service.update_saved_search(current_user, search_id, update_data)
    return SavedSearchResponse.model_validate(saved_search.to_dict())


@router.delete("/{search_id}", response_model=MessageResponse, summary="Delete a saved search")
async def delete_saved_search(
    search_id: UUID,
    current_user: User = Depends(get_current_user),
    search_service: SavedSearchService = Depends(get_saved_search_service)
) -> MessageResponse:
    await search_service.delete_saved_search(current_user, search_id)
    return MessageResponse(message="Saved search removed")
