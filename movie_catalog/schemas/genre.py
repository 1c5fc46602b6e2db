from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class GenreUpdate(BaseModel):
    """Full replacement payload for the admin update"""
    name: str
    slug: str
    description: str
    icon: str


class GenreRead(BaseModel):
    id: int
    name: str
    slug: Optional[str] = None
    description: str
    icon: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class Collection(BaseModel):
    """A genre paired with the big poster of one of its movies. Never stored."""
    id: int
    title: str
    slug: Optional[str] = None
    image: str
