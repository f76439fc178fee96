"""
Jokebox — Joke Service (Business Logic)
========================================

What:  Validates and serves create/list operations over the jokes collection.
Why:   Keeps validation rules and store-error translation out of the routes.
How:   Holds a JokeStore handed in at construction and delegates to it.
Who:   Built per request by the `get_joke_service` dependency.

Error Handling Strategy:
    - Input problems raise ValidationError before the store is touched.
    - Any StoreError is logged with its context and re-raised as
      ServiceError(kind=UNAVAILABLE) carrying a fixed user-facing message.

Append-and-read only: there is no update or delete.
"""

import logging
from typing import Any, List

from jokebox.database import JokeStore
from jokebox.exceptions import (
    ServiceError,
    ServiceErrorKind,
    StoreError,
    ValidationError,
)
from jokebox.schemas.joke import Joke

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "title and description are required"
FETCH_ERROR_MESSAGE = "Error fetching jokes"
CREATE_ERROR_MESSAGE = "Error adding joke"


def _is_present(value: Any) -> bool:
    return isinstance(value, str) and value != ""


class JokeService:
    """
    Business logic layer for joke operations.

    The store is injected rather than imported, so tests can hand in a double
    and the app controls the single connection's lifetime.
    """

    def __init__(self, store: JokeStore):
        self.store = store

    async def list_all(self) -> List[Joke]:
        """
        Return every stored joke, order unspecified.

        Raises:
            ServiceError: the store could not be read (→ 500)
        """
        try:
            return await self.store.find_all()
        except StoreError as e:
            logger.error("Error fetching jokes: %s | Context: %s", e.message, e.context)
            raise ServiceError(
                message=FETCH_ERROR_MESSAGE,
                kind=ServiceErrorKind.UNAVAILABLE,
                context=e.context,
            ) from e

    async def create(self, title: Any, description: Any) -> Joke:
        """
        Validate and persist a new joke.

        Both fields must be non-empty strings. A missing title and a missing
        description are reported the same way.

        Returns:
            The created Joke including its store-assigned identity.

        Raises:
            ValidationError: title or description absent/empty (→ 400)
            ServiceError: the store rejected the write (→ 500)
        """
        if not (_is_present(title) and _is_present(description)):
            raise ValidationError(
                message=REQUIRED_FIELDS_MESSAGE,
                context={
                    "title_present": _is_present(title),
                    "description_present": _is_present(description),
                },
            )

        try:
            identity = await self.store.insert_one(
                {"title": title, "description": description}
            )
        except StoreError as e:
            logger.error("Error adding joke: %s | Context: %s", e.message, e.context)
            raise ServiceError(
                message=CREATE_ERROR_MESSAGE,
                kind=ServiceErrorKind.UNAVAILABLE,
                context=e.context,
            ) from e

        logger.info("Joke created: %s", identity)
        return Joke(id=identity, title=title, description=description)
