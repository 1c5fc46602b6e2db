"""Errors raised by the catalog services and mapped to HTTP responses in main.py"""


class CatalogError(Exception):
    """Base class for catalog errors"""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class NotFoundError(CatalogError):
    """An id- or slug-keyed lookup found nothing"""


class GenreNotFoundError(NotFoundError):
    def __init__(self, message: str = "Genre not found"):
        super().__init__(message)


class MovieNotFoundError(NotFoundError):
    def __init__(self, message: str = "Movie not found"):
        super().__init__(message)


class ActorNotFoundError(NotFoundError):
    def __init__(self, message: str = "Actor not found"):
        super().__init__(message)


class DuplicateSlugError(CatalogError):
    pass


class NotificationError(CatalogError):
    """The Telegram Bot API rejected a call or could not be reached"""
