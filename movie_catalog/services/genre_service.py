"""
Genre catalog service
Listing, search, slug lookup, collections and admin CRUD
"""

import asyncio
import logging
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import async_sessionmaker

from ..config import settings
from ..exceptions import CatalogError, GenreNotFoundError
from ..models import Genre
from ..schemas.genre import Collection, GenreUpdate
from .base import CatalogService
from .movie_service import MovieService, movie_service as default_movie_service

logger = logging.getLogger(__name__)


class GenreService(CatalogService):

    def __init__(
        self,
        session_factory: Optional[async_sessionmaker] = None,
        movie_service: Optional[MovieService] = None,
    ):
        super().__init__(session_factory)
        if movie_service is None:
            movie_service = (
                MovieService(session_factory) if session_factory else default_movie_service
            )
        self.movie_service = movie_service

    async def get_all(self, search_term: Optional[str] = None) -> List[Genre]:
        """
        All genres, newest first.

        With a search term, keeps genres whose name, slug or description
        contains it (case-insensitive).
        """
        query = select(Genre)

        if search_term:
            pattern = f"%{search_term}%"
            query = query.where(
                or_(
                    Genre.name.ilike(pattern),
                    Genre.slug.ilike(pattern),
                    Genre.description.ilike(pattern),
                )
            )

        query = query.order_by(Genre.created_at.desc(), Genre.id.desc())

        async with self.session_factory() as db:
            result = await db.execute(query)
            return list(result.scalars().all())

    async def get_by_slug(self, slug: str) -> Genre:
        async with self.session_factory() as db:
            result = await db.execute(select(Genre).where(Genre.slug == slug))
            genre = result.scalar_one_or_none()

        if genre is None:
            raise GenreNotFoundError()
        return genre

    async def get_popular(self) -> List[Genre]:
        # TODO: rank by count_opened of the genre's movies once the frontend needs it
        return await self.get_all()

    async def get_collections(self) -> List[Collection]:
        """
        One collection per genre, in listing order.

        Movie lookups run concurrently, one session each; the first failure
        fails the whole call. Genres without movies get the placeholder image.
        """
        genres = await self.get_all()

        async def build(genre: Genre) -> Collection:
            movies = await self.movie_service.by_genres([genre.id])
            image = movies[0].big_poster if movies else settings.COLLECTION_PLACEHOLDER_IMAGE
            return Collection(id=genre.id, title=genre.name, slug=genre.slug, image=image)

        return list(await asyncio.gather(*(build(genre) for genre in genres)))

    # ==================== ADMIN ====================

    async def get_by_id(self, genre_id: int) -> Genre:
        async with self.session_factory() as db:
            genre = await db.get(Genre, genre_id)

        if genre is None:
            raise GenreNotFoundError()
        return genre

    async def create(self) -> int:
        async with self.session_factory() as db:
            try:
                genre = Genre(name="", slug=None, description="", icon="")
                db.add(genre)
                await db.commit()

            except Exception as e:
                await db.rollback()
                logger.error(f"❌ Error creating genre: {e}")
                raise

            logger.info(f"🏷️ Genre created: {genre.id}")
            return genre.id

    async def update(self, genre_id: int, dto: GenreUpdate) -> Genre:
        async with self.session_factory() as db:
            try:
                genre = await db.get(Genre, genre_id)
                if genre is None:
                    raise GenreNotFoundError()

                await self._ensure_slug_available(db, Genre, dto.slug, genre_id)

                for field, value in dto.model_dump().items():
                    setattr(genre, field, value)

                await db.commit()
                await db.refresh(genre)

            except CatalogError:
                await db.rollback()
                raise
            except Exception as e:
                await db.rollback()
                logger.error(f"❌ Error updating genre {genre_id}: {e}")
                raise

            logger.info(f"🏷️ Genre updated: {genre.slug}")
            return genre

    async def delete(self, genre_id: int) -> Genre:
        """Delete a genre; its movies stay, only the associations go"""
        async with self.session_factory() as db:
            try:
                genre = await db.get(Genre, genre_id)
                if genre is None:
                    raise GenreNotFoundError()

                await db.delete(genre)
                await db.commit()

            except CatalogError:
                await db.rollback()
                raise
            except Exception as e:
                await db.rollback()
                logger.error(f"❌ Error deleting genre {genre_id}: {e}")
                raise

            logger.info(f"🗑️ Genre deleted: {genre_id}")
            return genre


genre_service = GenreService()
