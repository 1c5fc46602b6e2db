"""create_catalog_tables

Revision ID: 3f1c2a9d8e41
Revises:
Create Date: 2026-10-19 10:12:44.102377

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d8e41'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]

def upgrade():
    op.create_table(
        "genres",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=True),
        sa.Column("description", sa.String(length=500), nullable=False),
        sa.Column("icon", sa.String(length=255), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_genres_id", "genres", ["id"])
    op.create_index("ix_genres_name", "genres", ["name"])
    op.create_index("ix_genres_slug", "genres", ["slug"], unique=True)
    op.create_index("ix_genres_created_at", "genres", ["created_at"])

    op.create_table(
        "actors",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=True),
        sa.Column("photo", sa.String(length=500), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_actors_id", "actors", ["id"])
    op.create_index("ix_actors_slug", "actors", ["slug"], unique=True)

    op.create_table(
        "movies",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=True),
        sa.Column("poster", sa.String(length=500), nullable=False),
        sa.Column("big_poster", sa.String(length=500), nullable=False),
        sa.Column("video_url", sa.String(length=500), nullable=False),
        sa.Column("count_opened", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("rating", sa.Float(), nullable=False, server_default="0"),
        sa.Column("is_send_telegram", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_movies_id", "movies", ["id"])
    op.create_index("ix_movies_title", "movies", ["title"])
    op.create_index("ix_movies_slug", "movies", ["slug"], unique=True)
    op.create_index("ix_movies_count_opened", "movies", ["count_opened"])
    op.create_index("ix_movies_created_at", "movies", ["created_at"])

    op.create_table(
        "movie_genres",
        sa.Column("movie_id", sa.Integer(), sa.ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("genre_id", sa.Integer(), sa.ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True),
    )
    op.create_table(
        "movie_actors",
        sa.Column("movie_id", sa.Integer(), sa.ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("actor_id", sa.Integer(), sa.ForeignKey("actors.id", ondelete="CASCADE"), primary_key=True),
    )

def downgrade():
    op.drop_table("movie_actors")
    op.drop_table("movie_genres")
    op.drop_table("movies")
    op.drop_table("actors")
    op.drop_table("genres")
