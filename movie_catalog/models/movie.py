# movie_catalog/models/movie.py
"""
Movie model for the catalog

Genres and actors are referenced through association tables, never owned:
deleting a movie drops its association rows only.
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Float, ForeignKey, Table
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base

# Association table for many-to-many relationship between movies and genres
movie_genres = Table(
    'movie_genres',
    Base.metadata,
    Column('movie_id', Integer, ForeignKey('movies.id', ondelete='CASCADE'), primary_key=True),
    Column('genre_id', Integer, ForeignKey('genres.id', ondelete='CASCADE'), primary_key=True)
)

# Association table for many-to-many relationship between movies and actors
movie_actors = Table(
    'movie_actors',
    Base.metadata,
    Column('movie_id', Integer, ForeignKey('movies.id', ondelete='CASCADE'), primary_key=True),
    Column('actor_id', Integer, ForeignKey('actors.id', ondelete='CASCADE'), primary_key=True)
)


class Movie(Base):
    __tablename__ = "movies"

    # ==================== PRIMARY KEY ====================
    id = Column(Integer, primary_key=True, index=True)

    # ==================== BASIC INFO ====================
    title = Column(String(255), nullable=False, default="", index=True)
    slug = Column(String(255), unique=True, nullable=True, index=True)  # NULL until the admin fills it in

    # ==================== MEDIA URLS ====================
    poster = Column(String(500), nullable=False, default="")
    big_poster = Column(String(500), nullable=False, default="")
    video_url = Column(String(500), nullable=False, default="")

    # ==================== METADATA ====================
    count_opened = Column(Integer, nullable=False, default=0, index=True)
    rating = Column(Float, nullable=False, default=0.0)
    is_send_telegram = Column(Boolean, nullable=False, default=False)  # Set once, by the server

    # ==================== TIMESTAMPS ====================
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # ==================== RELATIONSHIPS ====================
    genres = relationship(
        "Genre",
        secondary=movie_genres,
        back_populates="movies"
    )

    actors = relationship(
        "Actor",
        secondary=movie_actors,
        back_populates="movies"
    )

    def __repr__(self):
        return f"<Movie(id={self.id}, title='{self.title}', slug={self.slug})>"
