"""
Jokebox — Joke Service Unit Tests
==================================

What:  Tests for JokeService validation and error translation.
How:   Runs against the in-memory store double; AsyncMock where call
       arguments matter.

What we test:
    ✅ create → list contains exactly one new joke with a fresh identity
    ✅ Missing/empty title or description → ValidationError, count unchanged
    ✅ list_all is stable without intervening writes
    ✅ Store failures → ServiceError(kind=UNAVAILABLE) with fixed messages
"""

from unittest.mock import AsyncMock

import pytest

from jokebox.exceptions import (
    ServiceError,
    ServiceErrorKind,
    StoreReadError,
    ValidationError,
)
from jokebox.services.joke_service import JokeService


class TestJokeServiceCreate:

    @pytest.mark.asyncio
    async def test_create_then_list_includes_new_joke(self, connected_store):
        service = JokeService(connected_store)
        before = {j.id for j in await service.list_all()}

        joke = await service.create("Joke 4", "desc")

        after = await service.list_all()
        new = [j for j in after if j.id not in before]
        assert len(new) == 1
        assert new[0].id == joke.id
        assert (new[0].title, new[0].description) == ("Joke 4", "desc")

    @pytest.mark.asyncio
    async def test_duplicates_are_allowed(self, connected_store):
        service = JokeService(connected_store)

        first = await service.create("Same", "same")
        second = await service.create("Same", "same")

        assert first.id != second.id
        assert await connected_store.count() == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "title,description",
        [
            (None, "desc"),
            ("title", None),
            ("", "desc"),
            ("title", ""),
            (None, None),
            (5, "desc"),
        ],
    )
    async def test_invalid_input_rejected_without_write(self, connected_store, title, description):
        service = JokeService(connected_store)

        with pytest.raises(ValidationError, match="title and description are required"):
            await service.create(title, description)

        assert await connected_store.count() == 0

    @pytest.mark.asyncio
    async def test_validation_never_reaches_store(self, connected_store):
        connected_store.insert_one = AsyncMock()
        service = JokeService(connected_store)

        with pytest.raises(ValidationError):
            await service.create("", "")

        connected_store.insert_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_write_failure_becomes_service_error(self, connected_store):
        connected_store.fail_writes = True
        service = JokeService(connected_store)

        with pytest.raises(ServiceError) as exc_info:
            await service.create("t", "d")

        assert exc_info.value.kind is ServiceErrorKind.UNAVAILABLE
        assert exc_info.value.message == "Error adding joke"


class TestJokeServiceList:

    @pytest.mark.asyncio
    async def test_list_is_stable_without_writes(self, connected_store):
        service = JokeService(connected_store)
        await service.create("a", "1")
        await service.create("b", "2")

        first = await service.list_all()
        second = await service.list_all()

        assert {(j.id, j.title) for j in first} == {(j.id, j.title) for j in second}

    @pytest.mark.asyncio
    async def test_store_read_failure_becomes_service_error(self, connected_store):
        connected_store.find_all = AsyncMock(side_effect=StoreReadError())
        service = JokeService(connected_store)

        with pytest.raises(ServiceError) as exc_info:
            await service.list_all()

        assert exc_info.value.kind is ServiceErrorKind.UNAVAILABLE
        assert exc_info.value.message == "Error fetching jokes"

    @pytest.mark.asyncio
    async def test_service_error_does_not_mutate_store_error_context(self, connected_store):
        cause = StoreReadError(context={"operation": "find_all"})
        connected_store.find_all = AsyncMock(side_effect=cause)
        service = JokeService(connected_store)

        with pytest.raises(ServiceError) as exc_info:
            await service.list_all()

        assert exc_info.value.__cause__ is cause
        assert cause.context == {"operation": "find_all"}
        assert exc_info.value.context == {"operation": "find_all", "kind": "unavailable"}
