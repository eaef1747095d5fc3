"""
Pydantic schemas for favorites.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from uuid import UUID
from app.schemas.property import PropertyResponse


class FavoriteCreate(BaseModel):
    property_id: UUID = Field(..., description="Property to add to favorites")


class FavoriteResponse(BaseModel):
    id: str
    user_id: str
    property_id: str
    property: Optional[PropertyResponse] = None
    created_at: datetime
