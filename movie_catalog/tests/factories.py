"""Unsaved ORM objects with sensible test defaults"""

from movie_catalog.models import Actor, Genre, Movie


def make_genre(slug: str, name: str = None, description: str = "") -> Genre:
    return Genre(name=name or slug.title(), slug=slug, description=description, icon="")


def make_actor(slug: str) -> Actor:
    return Actor(name=slug.title(), slug=slug, photo="")


def make_movie(slug: str, title: str = None, genres=(), actors=(), **fields) -> Movie:
    fields.setdefault("big_poster", f"/uploads/{slug}-big.jpg")
    return Movie(
        title=title or slug.replace("-", " ").title(),
        slug=slug,
        poster=fields.pop("poster", f"/uploads/{slug}.jpg"),
        video_url=fields.pop("video_url", ""),
        genres=list(genres),
        actors=list(actors),
        **fields,
    )
