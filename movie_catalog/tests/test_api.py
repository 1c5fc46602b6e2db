"""
HTTP tests for the genre and movie routes.

Runs the real app through httpx's ASGI transport with the services
overridden to use the per-test database.
"""

import logging

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from movie_catalog.api.deps import get_genre_service, get_movie_service
from movie_catalog.exceptions import NotificationError
from movie_catalog.main import app

from .factories import make_actor, make_genre, make_movie


@pytest_asyncio.fixture
async def client(genre_service, movie_service):
    app.dependency_overrides[get_genre_service] = lambda: genre_service
    app.dependency_overrides[get_movie_service] = lambda: movie_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


def movie_payload(**overrides) -> dict:
    payload = {
        "title": "Heat",
        "slug": "heat",
        "poster": "/uploads/heat.jpg",
        "big_poster": "/uploads/heat-big.jpg",
        "video_url": "/uploads/heat.m3u8",
        "genres": [],
        "actors": [],
    }
    payload.update(overrides)
    return payload


class TestGenreEndpoints:

    async def test_create_update_and_fetch_by_slug(self, client):
        r = await client.post("/api/v1/genres")
        assert r.status_code == 201
        genre_id = r.json()

        r = await client.put(
            f"/api/v1/genres/{genre_id}",
            json={"name": "Action", "slug": "action", "description": "", "icon": ""},
        )
        assert r.status_code == 200

        r = await client.get("/api/v1/genres/by-slug/action")
        assert r.status_code == 200
        data = r.json()
        assert data["id"] == genre_id
        assert data["name"] == "Action"
        assert "updated_at" not in data

    async def test_unknown_slug_is_404(self, client):
        r = await client.get("/api/v1/genres/by-slug/missing")

        assert r.status_code == 404
        assert r.json() == {"detail": "Genre not found"}

    async def test_search(self, client, add):
        await add(make_genre("drama"), make_genre("comedy"))

        r = await client.get("/api/v1/genres", params={"search_term": "DRA"})

        assert [g["slug"] for g in r.json()] == ["drama"]

    async def test_collections(self, client, add):
        drama = make_genre("drama")
        await add(make_movie("titanic", genres=[drama], big_poster="/big/titanic.jpg"))

        r = await client.get("/api/v1/genres/collections")

        assert r.status_code == 200
        assert r.json() == [
            {"id": drama.id, "title": "Drama", "slug": "drama", "image": "/big/titanic.jpg"}
        ]

    async def test_duplicate_slug_is_400(self, client, add):
        await add(make_genre("action"))
        genre_id = (await client.post("/api/v1/genres")).json()

        r = await client.put(
            f"/api/v1/genres/{genre_id}",
            json={"name": "Action", "slug": "action", "description": "", "icon": ""},
        )

        assert r.status_code == 400

    async def test_listing_is_logged(self, client, add, caplog):
        caplog.set_level(logging.INFO, logger="movie_catalog.api.v1.genres")
        await add(make_genre("drama"), make_genre("comedy"))

        r = await client.get("/api/v1/genres")

        assert r.status_code == 200
        assert "Found 2 genres" in caplog.text

    async def test_delete_unknown_is_404(self, client):
        r = await client.delete("/api/v1/genres/999")

        assert r.status_code == 404


class TestMovieEndpoints:

    async def test_by_slug_is_populated(self, client, add):
        drama, leo = make_genre("drama"), make_actor("leo")
        await add(make_movie("titanic", genres=[drama], actors=[leo]))

        r = await client.get("/api/v1/movies/by-slug/titanic")

        assert r.status_code == 200
        data = r.json()
        assert data["genres"][0]["slug"] == "drama"
        assert data["actors"][0]["slug"] == "leo"
        assert "updated_at" not in data

    async def test_admin_get_lists_reference_ids(self, client, add):
        drama = make_genre("drama")
        (movie,) = await add(make_movie("titanic", genres=[drama]))

        r = await client.get(f"/api/v1/movies/{movie.id}")

        assert r.json()["genres"] == [drama.id]

    async def test_by_genres(self, client, add):
        drama = make_genre("drama")
        await add(make_movie("titanic", genres=[drama]), make_movie("heat"))

        r = await client.post("/api/v1/movies/by-genres", json={"genre_ids": [drama.id]})

        assert [m["slug"] for m in r.json()] == ["titanic"]

    async def test_by_unknown_actor_is_404(self, client):
        r = await client.get("/api/v1/movies/by-actor/999")

        assert r.status_code == 404
        assert r.json() == {"detail": "Actor not found"}

    async def test_count_opened_and_most_popular(self, client, add):
        await add(make_movie("heat"), make_movie("titanic"))

        for _ in range(2):
            r = await client.put("/api/v1/movies/update-count-opened", json={"slug": "heat"})
        assert r.json()["count_opened"] == 2

        r = await client.get("/api/v1/movies/most-popular")
        assert [m["slug"] for m in r.json()] == ["heat"]

    async def test_count_opened_unknown_slug_is_404(self, client):
        r = await client.put("/api/v1/movies/update-count-opened", json={"slug": "missing"})

        assert r.status_code == 404

    async def test_create_and_update_announces(self, client, telegram):
        movie_id = (await client.post("/api/v1/movies")).json()

        r = await client.put(f"/api/v1/movies/{movie_id}", json=movie_payload())

        assert r.status_code == 200
        assert r.json()["is_send_telegram"] is True
        telegram.send_photo.assert_awaited_once()

    async def test_failed_announcement_is_502(self, client, telegram):
        movie_id = (await client.post("/api/v1/movies")).json()
        telegram.send_photo.side_effect = NotificationError("chat not found")

        r = await client.put(f"/api/v1/movies/{movie_id}", json=movie_payload())

        assert r.status_code == 502

    async def test_update_missing_fields_is_422(self, client):
        movie_id = (await client.post("/api/v1/movies")).json()

        r = await client.put(f"/api/v1/movies/{movie_id}", json={"title": "Heat"})

        assert r.status_code == 422

    async def test_delete(self, client, add):
        (movie,) = await add(make_movie("heat"))

        r = await client.delete(f"/api/v1/movies/{movie.id}")
        assert r.status_code == 200
        assert r.json()["slug"] == "heat"

        r = await client.get(f"/api/v1/movies/{movie.id}")
        assert r.status_code == 404

    async def test_admin_delete_is_logged(self, client, add, caplog):
        caplog.set_level(logging.INFO, logger="movie_catalog.api.v1.movies")
        (movie,) = await add(make_movie("heat"))

        await client.delete(f"/api/v1/movies/{movie.id}")

        assert "Movie deleted via admin" in caplog.text
