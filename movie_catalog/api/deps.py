# movie_catalog/api/deps.py
from ..services.genre_service import GenreService, genre_service
from ..services.movie_service import MovieService, movie_service


def get_genre_service() -> GenreService:
    return genre_service


def get_movie_service() -> MovieService:
    return movie_service
