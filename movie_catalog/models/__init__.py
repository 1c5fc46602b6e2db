from movie_catalog.database import Base
from movie_catalog.models.movie import Movie, movie_genres, movie_actors
from movie_catalog.models.genre import Genre
from movie_catalog.models.actor import Actor

# This ensures all models are registered with Base.metadata
__all__ = ["Base", "Movie", "Genre", "Actor", "movie_genres", "movie_actors"]
