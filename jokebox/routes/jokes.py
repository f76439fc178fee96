"""
Jokebox — Joke Route Handlers
==============================

What:  Handles GET /jokes (list) and POST /jokes (create).
How:   Delegates to JokeService; error responses come from the global
       exception handlers in main.py.

Status codes:
    GET /jokes   200 JSON array │ 500 plain text "Error fetching jokes"
    POST /jokes  201 {message, joke} │ 400 {message} │ 500 plain text "Error adding joke"

POST /jokes accepts `application/json` and `application/x-www-form-urlencoded`
(multipart forms too). Both reach JokeService.create the same way.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError as PydanticValidationError

from jokebox.database import JokeStore, get_store
from jokebox.exceptions import ValidationError
from jokebox.schemas.joke import (
    Joke,
    JokeCreate,
    JokeCreatedResponse,
    MessageResponse,
)
from jokebox.services.joke_service import JokeService

logger = logging.getLogger(__name__)

INVALID_BODY_MESSAGE = "Invalid request body"
FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

_JOKE_CREATE_SCHEMA = JokeCreate.model_json_schema()

router = APIRouter(tags=["Jokes"])


def get_joke_service(store: JokeStore = Depends(get_store)) -> JokeService:
    """Builds a JokeService around the app's shared store."""
    return JokeService(store)


async def read_joke_payload(request: Request) -> JokeCreate:
    """
    Parses a POST /jokes body sent either as JSON or as an HTML form.

    An absent body yields an empty JokeCreate so that JokeService, not the
    parser, reports the missing fields. Unparseable bodies and wrongly typed
    fields raise ValidationError("Invalid request body").
    """
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        data = dict(form)
    elif await request.body():
        try:
            data = await request.json()
        except ValueError as e:
            raise ValidationError(INVALID_BODY_MESSAGE) from e
    else:
        data = None

    if data is None:
        return JokeCreate()
    try:
        return JokeCreate.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(INVALID_BODY_MESSAGE, context={"errors": e.errors()}) from e


@router.get(
    "/jokes",
    response_model=List[Joke],
    responses={
        200: {"description": "Every stored joke, order unspecified"},
        500: {"description": "Store failure (plain text)"},
    },
    summary="List all jokes",
)
async def list_jokes(service: JokeService = Depends(get_joke_service)) -> List[Joke]:
    return await service.list_all()


@router.post(
    "/jokes",
    status_code=201,
    response_model=JokeCreatedResponse,
    responses={
        201: {"description": "Joke created", "model": JokeCreatedResponse},
        400: {"description": "title or description missing", "model": MessageResponse},
        500: {"description": "Store failure (plain text)"},
    },
    summary="Create a joke",
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {"schema": _JOKE_CREATE_SCHEMA},
                "application/x-www-form-urlencoded": {"schema": _JOKE_CREATE_SCHEMA},
            },
        },
    },
)
async def create_joke(
    request: Request,
    service: JokeService = Depends(get_joke_service),
) -> JokeCreatedResponse:
    """
    Create a joke from `{title, description}`, sent as JSON or as a form.

    An absent body is treated the same as absent fields: JokeService rejects
    it with a 400.
    """
    payload = await read_joke_payload(request)
    joke = await service.create(payload.title, payload.description)
    return JokeCreatedResponse(joke=joke)
