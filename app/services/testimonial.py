"""
Testimonial service: submission by users, moderation by admins.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.testimonial import TestimonialRepository
from app.models.testimonial import Testimonial
from app.models.user import User
from app.schemas.testimonial import TestimonialCreate, TestimonialUpdate
from app.utils.exceptions import NotFoundError
import uuid
import logging

logger = logging.getLogger(__name__)


class TestimonialService:

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.testimonial_repo = TestimonialRepository(db_session)

    async def get_testimonials(self, approved_only: bool = False) -> List[Testimonial]:
        return await self.testimonial_repo.get_testimonials(approved_only=approved_only)

    async def create_testimonial(self, user: User, testimonial_data: TestimonialCreate) -> Testimonial:
        """New testimonials start unapproved."""
        testimonial = await self.testimonial_repo.create({
            **testimonial_data.model_dump(),
            "user_id": user.id,
        })
        await self.db.refresh(testimonial, ["user"])
        logger.info(f"Testimonial submitted by {user.email} (ID: {testimonial.id})")
        return testimonial

    async def update_testimonial(self, testimonial_id: uuid.UUID, update_data: TestimonialUpdate) -> Testimonial:
        """
        Shallow-merge a moderation update.

        Raises:
            NotFoundError: If the testimonial does not exist
        """
        testimonial = await self.testimonial_repo.update(
            testimonial_id, update_data.model_dump(exclude_unset=True)
        )
        if not testimonial:
            raise NotFoundError("Testimonial", str(testimonial_id))
        await self.db.refresh(testimonial, ["user"])
        return testimonial

    async def delete_testimonial(self, testimonial_id: uuid.UUID) -> None:
        if not await self.testimonial_repo.delete(testimonial_id):
            raise NotFoundError("Testimonial", str(testimonial_id))
