from pydantic import BaseModel, field_validator
from typing import Any, List, Optional
from datetime import datetime

from .actor import ActorRead
from .genre import GenreRead


def _to_ids(value: Any) -> Any:
    """Collapse loaded relationship objects to their ids"""
    if isinstance(value, (list, tuple, set)):
        return [getattr(item, "id", item) for item in value]
    return value


class MovieUpdate(BaseModel):
    title: str
    slug: str
    poster: str
    big_poster: str
    video_url: str
    genres: List[int]
    actors: List[int]
    # Only honoured when True: marks the movie as announced without sending
    is_send_telegram: Optional[bool] = None


class MovieBase(BaseModel):
    id: int
    title: str
    slug: Optional[str] = None
    poster: str
    big_poster: str
    video_url: str
    count_opened: int
    rating: float
    is_send_telegram: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MovieRead(MovieBase):
    """Movie with genres and actors as plain id lists"""
    genres: List[int] = []
    actors: List[int] = []

    @field_validator("genres", "actors", mode="before")
    @classmethod
    def collapse_references(cls, value):
        return _to_ids(value)


class MovieDetail(MovieBase):
    """Movie with genres and actors resolved"""
    genres: List[GenreRead] = []
    actors: List[ActorRead] = []


class MoviePopular(MovieBase):
    genres: List[GenreRead] = []
    actors: List[int] = []

    @field_validator("actors", mode="before")
    @classmethod
    def collapse_actors(cls, value):
        return _to_ids(value)


class ByGenresRequest(BaseModel):
    genre_ids: List[int]


class CountOpenedRequest(BaseModel):
    slug: str
