# movie_catalog/api/v1/movies.py
from fastapi import APIRouter, Depends, status
from typing import List, Optional
import logging

from ..deps import get_movie_service
from ...schemas.movie import (
    ByGenresRequest,
    CountOpenedRequest,
    MovieDetail,
    MoviePopular,
    MovieRead,
    MovieUpdate,
)
from ...services.movie_service import MovieService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/movies", tags=["movies"])


@router.get("", response_model=List[MovieDetail])
async def list_movies(
    search_term: Optional[str] = None,
    service: MovieService = Depends(get_movie_service)
):
    """Get all movies, optionally filtered by title"""
    logger.info(f"list_movies called with search_term={search_term}")
    movies = await service.get_all(search_term)
    logger.info(f"Found {len(movies)} movies")
    return movies


@router.get("/by-slug/{slug}", response_model=MovieDetail)
async def get_movie_by_slug(slug: str, service: MovieService = Depends(get_movie_service)):
    return await service.get_by_slug(slug)


@router.get("/by-actor/{actor_id}", response_model=List[MovieRead])
async def get_movies_by_actor(actor_id: int, service: MovieService = Depends(get_movie_service)):
    return await service.get_by_actor(actor_id)


@router.post("/by-genres", response_model=List[MovieRead])
async def get_movies_by_genres(
    payload: ByGenresRequest,
    service: MovieService = Depends(get_movie_service)
):
    return await service.by_genres(payload.genre_ids)


@router.get("/most-popular", response_model=List[MoviePopular])
async def get_most_popular(service: MovieService = Depends(get_movie_service)):
    """Movies opened at least once, most opened first"""
    return await service.get_most_popular()


@router.put("/update-count-opened", response_model=MovieRead)
async def update_count_opened(
    payload: CountOpenedRequest,
    service: MovieService = Depends(get_movie_service)
):
    return await service.update_count_opened(payload.slug)


# ==================== ADMIN ====================

@router.get("/{movie_id}", response_model=MovieRead)
async def get_movie(movie_id: int, service: MovieService = Depends(get_movie_service)):
    return await service.get_by_id(movie_id)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=int)
async def create_movie(service: MovieService = Depends(get_movie_service)):
    """Create an empty movie and return its id"""
    movie_id = await service.create()
    logger.info(f"Movie created via admin: {movie_id}")
    return movie_id


@router.put("/{movie_id}", response_model=MovieRead)
async def update_movie(
    movie_id: int,
    movie_data: MovieUpdate,
    service: MovieService = Depends(get_movie_service)
):
    """Update a movie; the first update announces it on Telegram"""
    movie = await service.update(movie_id, movie_data)
    logger.info(f"Movie updated via admin: {movie.title}")
    return movie


@router.delete("/{movie_id}", response_model=MovieRead)
async def delete_movie(movie_id: int, service: MovieService = Depends(get_movie_service)):
    movie = await service.delete(movie_id)
    logger.info(f"Movie deleted via admin: {movie.title}")
    return movie
