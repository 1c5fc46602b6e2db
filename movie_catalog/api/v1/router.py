from fastapi import APIRouter
from . import genres, movies

api_router = APIRouter()

api_router.include_router(genres.router, tags=["genres"])
api_router.include_router(movies.router, tags=["movies"])

__all__ = ["api_router"]
