"""
Testimonials: public listing, submission by signed-in users, moderation by admins.
"""

from fastapi import APIRouter, Depends, Query, status
from typing import List
from uuid import UUID

from app.models.user import User
from app.services.testimonial import TestimonialService
from app.schemas.common import MessageResponse
from app.schemas.testimonial import TestimonialCreate, TestimonialUpdate, TestimonialResponse
from app.utils.dependencies import get_current_admin_user, get_current_user, get_testimonial_service
from app.schemas.error import get_crud_error_responses


router = APIRouter(prefix="/testimonials", tags=["Testimonials"])


@router.get("", response_model=List[TestimonialResponse], summary="List testimonials")
async def list_testimonials(
    approved_only: bool = Query(False, description="Only return approved testimonials"),
    testimonial_service: TestimonialService = Depends(get_testimonial_service)
) -> List[TestimonialResponse]:
    testimonials = await testimonial_service.get_testimonials(approved_only=approved_only)
    return [TestimonialResponse.model_validate(t.to_dict()) for t in testimonials]


@router.post(
    "",
    response_model=TestimonialResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a testimonial",
    description="Rating must be between 1 and 5. New testimonials are unapproved.",
    responses=get_crud_error_responses()
)
async def create_testimonial(
    testimonial_data: TestimonialCreate,
    current_user: User = Depends(get_current_user),
    testimonial_service: TestimonialService = Depends(get_testimonial_service)
) -> TestimonialResponse:
    testimonial = await testimonial_service.create_testimonial(current_user, testimonial_data)
    return TestimonialResponse.model_validate(testimonial.to_dict())


@router.put(
    "/{testimonial_id}",
    response_model=TestimonialResponse,
    summary="Moderate a testimonial",
    responses=get_crud_error_responses()
)
async def update_testimonial(
    testimonial_id: UUID,
    update_data: TestimonialUpdate,
    current_user: User = Depends(get_current_admin_user),
    testimonial_service: TestimonialService = Depends(get_testimonial_service)
) -> TestimonialResponse:
    testimonial = await testimonial_service.update_testimonial(testimonial_id, update_data)
    return TestimonialResponse.model_validate(testimonial.to_dict())


@router.delete(
    "/{testimonial_id}",
    response_model=MessageResponse,
    summary="Delete a testimonial",
    responses=get_crud_error_responses()
)
async def delete_testimonial(
    testimonial_id: UUID,
    current_user: User = Depends(get_current_admin_user),
    testimonial_service: TestimonialService = Depends(get_testimonial_service)
) -> MessageResponse:
    await testimonial_service.delete_testimonial(testimonial_id)
    return MessageResponse(message="Testimonial removed")
