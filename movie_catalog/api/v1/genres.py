# movie_catalog/api/v1/genres.py
from fastapi import APIRouter, Depends, status
from typing import List, Optional
import logging

from ..deps import get_genre_service
from ...schemas.genre import Collection, GenreRead, GenreUpdate
from ...services.genre_service import GenreService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/genres", tags=["genres"])


@router.get("", response_model=List[GenreRead])
async def list_genres(
    search_term: Optional[str] = None,
    service: GenreService = Depends(get_genre_service)
):
    """Get all genres, optionally filtered by name, slug or description"""
    logger.info(f"list_genres called with search_term={search_term}")
    genres = await service.get_all(search_term)
    logger.info(f"Found {len(genres)} genres")
    return genres


@router.get("/by-slug/{slug}", response_model=GenreRead)
async def get_genre_by_slug(slug: str, service: GenreService = Depends(get_genre_service)):
    return await service.get_by_slug(slug)


@router.get("/collections", response_model=List[Collection])
async def get_collections(service: GenreService = Depends(get_genre_service)):
    """Genres paired with a poster from one of their movies"""
    return await service.get_collections()


@router.get("/popular", response_model=List[GenreRead])
async def get_popular_genres(service: GenreService = Depends(get_genre_service)):
    return await service.get_popular()


# ==================== ADMIN ====================

@router.get("/{genre_id}", response_model=GenreRead)
async def get_genre(genre_id: int, service: GenreService = Depends(get_genre_service)):
    return await service.get_by_id(genre_id)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=int)
async def create_genre(service: GenreService = Depends(get_genre_service)):
    """Create an empty genre and return its id"""
    genre_id = await service.create()
    logger.info(f"Genre created via admin: {genre_id}")
    return genre_id


@router.put("/{genre_id}", response_model=GenreRead)
async def update_genre(
    genre_id: int,
    genre_data: GenreUpdate,
    service: GenreService = Depends(get_genre_service)
):
    genre = await service.update(genre_id, genre_data)
    logger.info(f"Genre updated via admin: {genre.name}")
    return genre


@router.delete("/{genre_id}", response_model=GenreRead)
async def delete_genre(genre_id: int, service: GenreService = Depends(get_genre_service)):
    genre = await service.delete(genre_id)
    logger.info(f"Genre deleted via admin: {genre.name}")
    return genre
