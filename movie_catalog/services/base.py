"""Shared plumbing for the catalog services"""

from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..database import AsyncSessionLocal
from ..exceptions import DuplicateSlugError


class CatalogService:
    """
    Base for services that open one session per operation.

    Each public method runs in its own session so independent calls can be
    awaited concurrently (see GenreService.get_collections).
    """

    def __init__(self, session_factory: Optional[async_sessionmaker] = None):
        self.session_factory = session_factory or AsyncSessionLocal

    @staticmethod
    async def _ensure_slug_available(db: AsyncSession, model, slug: str, exclude_id: int) -> None:
        result = await db.execute(
            select(model.id).where(model.slug == slug, model.id != exclude_id)
        )
        if result.first() is not None:
            raise DuplicateSlugError(f"{model.__name__} slug '{slug}' already exists")

    @staticmethod
    async def _fetch_by_ids(db: AsyncSession, model, ids: Sequence[int]) -> List:
        """Load referenced rows; unknown ids are dropped"""
        if not ids:
            return []
        result = await db.execute(select(model).where(model.id.in_(ids)))
        return list(result.scalars().all())
