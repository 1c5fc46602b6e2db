"""
Movie catalog service
Public lookups, the open counter, ratings, admin CRUD and the one-shot
Telegram announcement
"""

import html
import logging
from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from ..config import settings
from ..exceptions import ActorNotFoundError, CatalogError, MovieNotFoundError
from ..models import Actor, Genre, Movie
from ..schemas.movie import MovieUpdate
from ..utils.telegram import TelegramService, telegram_service
from .base import CatalogService

logger = logging.getLogger(__name__)

# Genres and actors are always loaded: even unpopulated responses list their ids
WITH_REFERENCES = (selectinload(Movie.genres), selectinload(Movie.actors))


class MovieService(CatalogService):

    def __init__(
        self,
        session_factory: Optional[async_sessionmaker] = None,
        telegram: Optional[TelegramService] = None,
    ):
        super().__init__(session_factory)
        self.telegram = telegram or telegram_service

    # ==================== PUBLIC ====================

    async def get_by_slug(self, slug: str) -> Movie:
        async with self.session_factory() as db:
            result = await db.execute(
                select(Movie).options(*WITH_REFERENCES).where(Movie.slug == slug)
            )
            movie = result.scalar_one_or_none()

        if movie is None:
            raise MovieNotFoundError()
        return movie

    async def get_by_actor(self, actor_id: int) -> List[Movie]:
        """
        Movies featuring an actor.

        An unknown actor raises ActorNotFoundError; a known actor without
        movies returns an empty list.
        """
        async with self.session_factory() as db:
            actor = await db.get(Actor, actor_id)
            if actor is None:
                raise ActorNotFoundError()

            result = await db.execute(
                select(Movie)
                .options(*WITH_REFERENCES)
                .where(Movie.actors.any(Actor.id == actor_id))
                .order_by(Movie.id)
            )
            return list(result.scalars().all())

    async def by_genres(self, genre_ids: Sequence[int]) -> List[Movie]:
        """Movies tagged with any of the given genres, oldest first"""
        if not genre_ids:
            return []

        async with self.session_factory() as db:
            result = await db.execute(
                select(Movie)
                .options(*WITH_REFERENCES)
                .where(Movie.genres.any(Genre.id.in_(list(genre_ids))))
                .order_by(Movie.id)
            )
            return list(result.scalars().all())

    async def get_all(self, search_term: Optional[str] = None) -> List[Movie]:
        query = select(Movie).options(*WITH_REFERENCES)

        if search_term:
            query = query.where(Movie.title.ilike(f"%{search_term}%"))

        query = query.order_by(Movie.created_at.desc(), Movie.id.desc())

        async with self.session_factory() as db:
            result = await db.execute(query)
            return list(result.scalars().all())

    async def update_count_opened(self, slug: str) -> Movie:
        """Atomically bump count_opened for the movie with this slug"""
        async with self.session_factory() as db:
            try:
                result = await db.execute(
                    Movie.__table__.update()
                    .where(Movie.slug == slug)
                    .values(count_opened=Movie.count_opened + 1)
                    .returning(Movie.id)
                )
                movie_id = result.scalar_one_or_none()
                if movie_id is None:
                    raise MovieNotFoundError()

                await db.commit()

            except CatalogError:
                await db.rollback()
                raise
            except Exception as e:
                await db.rollback()
                logger.error(f"❌ Error counting open of movie {slug}: {e}")
                raise

            return await self._load(db, movie_id)

    async def get_most_popular(self) -> List[Movie]:
        async with self.session_factory() as db:
            result = await db.execute(
                select(Movie)
                .options(*WITH_REFERENCES)
                .where(Movie.count_opened > 0)
                .order_by(Movie.count_opened.desc(), Movie.id)
            )
            return list(result.scalars().all())

    async def update_rating(self, movie_id: int, new_rating: float) -> Movie:
        async with self.session_factory() as db:
            try:
                result = await db.execute(
                    Movie.__table__.update()
                    .where(Movie.id == movie_id)
                    .values(rating=new_rating)
                    .returning(Movie.id)
                )
                if result.scalar_one_or_none() is None:
                    raise MovieNotFoundError()

                await db.commit()

            except CatalogError:
                await db.rollback()
                raise
            except Exception as e:
                await db.rollback()
                logger.error(f"❌ Error updating rating of movie {movie_id}: {e}")
                raise

            return await self._load(db, movie_id)

    # ==================== ADMIN ====================

    async def get_by_id(self, movie_id: int) -> Movie:
        async with self.session_factory() as db:
            movie = await self._load(db, movie_id)

        if movie is None:
            raise MovieNotFoundError()
        return movie

    async def create(self) -> int:
        """Create an empty movie to be filled in by a later update"""
        async with self.session_factory() as db:
            try:
                movie = Movie(
                    title="",
                    slug=None,
                    poster="",
                    big_poster="",
                    video_url="",
                    genres=[],
                    actors=[],
                )
                db.add(movie)
                await db.commit()

            except Exception as e:
                await db.rollback()
                logger.error(f"❌ Error creating movie: {e}")
                raise

            logger.info(f"🎬 Movie created: {movie.id}")
            return movie.id

    async def update(self, movie_id: int, dto: MovieUpdate) -> Movie:
        """
        Replace a movie's fields.

        The first update that finds is_send_telegram unset claims it in the
        same transaction and announces the movie; the claim only commits once
        the announcement went out. Passing is_send_telegram=True marks the
        movie as announced without sending anything.
        """
        async with self.session_factory() as db:
            try:
                movie = await self._load(db, movie_id)
                if movie is None:
                    raise MovieNotFoundError()

                await self._ensure_slug_available(db, Movie, dto.slug, movie_id)

                fields = dto.model_dump(exclude={"genres", "actors", "is_send_telegram"})
                for field, value in fields.items():
                    setattr(movie, field, value)

                movie.genres = await self._fetch_by_ids(db, Genre, dto.genres)
                movie.actors = await self._fetch_by_ids(db, Actor, dto.actors)

                if dto.is_send_telegram:
                    movie.is_send_telegram = True

                await db.flush()

                if await self._claim_announcement(db, movie_id):
                    await self.send_notification(movie)
                    logger.info(f"📣 Movie announced: {movie.slug}")

                await db.commit()

            except CatalogError:
                await db.rollback()
                raise
            except Exception as e:
                await db.rollback()
                logger.error(f"❌ Error updating movie {movie_id}: {e}")
                raise

            return await self._load(db, movie_id)

    async def delete(self, movie_id: int) -> Movie:
        async with self.session_factory() as db:
            try:
                movie = await self._load(db, movie_id)
                if movie is None:
                    raise MovieNotFoundError()

                await db.delete(movie)
                await db.commit()

            except CatalogError:
                await db.rollback()
                raise
            except Exception as e:
                await db.rollback()
                logger.error(f"❌ Error deleting movie {movie_id}: {e}")
                raise

            logger.info(f"🗑️ Movie deleted: {movie_id}")
            return movie

    # ==================== NOTIFICATIONS ====================

    async def send_notification(self, movie) -> None:
        """Post the announcement photo and a title message with a watch button"""
        await self.telegram.send_photo(settings.TELEGRAM_ANNOUNCE_PHOTO_URL)

        msg = f"<b>{html.escape(movie.title)}</b>\n\n"

        await self.telegram.send_message(
            msg,
            reply_markup={
                "inline_keyboard": [
                    [
                        {
                            "url": settings.TELEGRAM_WATCH_URL,
                            "text": settings.TELEGRAM_WATCH_BUTTON_TEXT,
                        },
                    ],
                ],
            },
        )

    # ==================== HELPERS ====================

    @staticmethod
    async def _load(db: AsyncSession, movie_id: int) -> Optional[Movie]:
        result = await db.execute(
            select(Movie)
            .options(*WITH_REFERENCES)
            .where(Movie.id == movie_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def _claim_announcement(db: AsyncSession, movie_id: int) -> bool:
        """Compare-and-set is_send_telegram false -> true; True if this call flipped it"""
        result = await db.execute(
            Movie.__table__.update()
            .where(Movie.id == movie_id, Movie.is_send_telegram.is_(False))
            .values(is_send_telegram=True)
            .returning(Movie.id)
        )
        return result.scalar_one_or_none() is not None


movie_service = MovieService()
