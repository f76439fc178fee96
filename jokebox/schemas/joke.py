"""
Jokebox — Pydantic Request/Response Schemas
============================================

What:  Pydantic models defining the API contract.
Why:   Automatic serialization and OpenAPI doc generation.
How:   FastAPI serializes route return values through these models.

Identity field:
    MongoDB stores the identity under `_id`. Pydantic treats leading
    underscores as private, so the field is named `id` with alias `_id`.
    FastAPI serializes response models by alias, so clients see `_id`.
"""

from typing import Optional, Union

from pydantic import BaseModel, Field

# Scalar types a stored title/description may hold. Order matters: bool
# before int so True is not read back as 1.
JokeField = Union[str, bool, int, float]


class Joke(BaseModel):
    """
    A stored joke.

    Fields are optional because documents written outside this service are
    not guaranteed to carry them, and scalar values other than strings are
    passed through unchanged. Jokes created through JokeService always have
    both as non-empty strings.
    """
    id: str = Field(alias="_id", description="Store-assigned identity (ObjectId hex)")
    title: Optional[JokeField] = Field(default=None, description="Joke title")
    description: Optional[JokeField] = Field(default=None, description="Joke body")

    model_config = {"populate_by_name": True}


class JokeCreate(BaseModel):
    """
    Body of POST /jokes.

    Both fields are Optional here on purpose: presence and emptiness are
    checked by JokeService so that a missing field yields a 400 with the
    service's message rather than FastAPI's 422.
    """
    title: Optional[str] = None
    description: Optional[str] = None


class JokeCreatedResponse(BaseModel):
    """Returned by POST /jokes with HTTP 201."""
    message: str = Field(default="Joke added successfully!")
    joke: Joke


class UploadResponse(BaseModel):
    """Returned by POST /upload with HTTP 201."""
    message: str = Field(default="File uploaded successfully")
    filename: str = Field(description="Name the file was stored under")


class MessageResponse(BaseModel):
    """
    Error body for 4xx responses.

    Only a human-readable message is exposed; the HTTP status code is the
    sole machine-readable signal.
    """
    message: str


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
