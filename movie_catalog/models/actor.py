# movie_catalog/models/actor.py
"""Actor model, referenced by movies"""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base
from .movie import movie_actors


class Actor(Base):
    __tablename__ = "actors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, default="")
    slug = Column(String(255), unique=True, index=True, nullable=True)
    photo = Column(String(500), nullable=False, default="")

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    movies = relationship("Movie", secondary=movie_actors, back_populates="actors")

    def __repr__(self):
        return f"<Actor(id={self.id}, name={self.name})>"
