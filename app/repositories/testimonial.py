"""
Testimonial repository.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.base import BaseRepository
from app.models.testimonial import Testimonial
from typing import List


class TestimonialRepository(BaseRepository[Testimonial]):

    def __init__(self, db: AsyncSession):
        super().__init__(Testimonial, db)

    async def get_testimonials(self, approved_only: bool = False) -> List[Testimonial]:
        filters = {"is_approved": True} if approved_only else None
        return await self.get_multi(filters=filters)
