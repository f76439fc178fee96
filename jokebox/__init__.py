"""
Jokebox — Application Package Initializer
==========================================

What: Marks the `jokebox` directory as a Python package.
Why:  Enables module imports like `from jokebox.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The service follows the same thin layered layout throughout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Validation, Seeding)    │  ← JokeService, seeder, uploads
    ├─────────────────────────────────────┤
    │          Schemas (Data)             │  ← Pydantic models
    ├─────────────────────────────────────┤
    │      Document Store (MongoDB)       │  ← JokeStore over Motor
    └─────────────────────────────────────┘

    Routes never talk to MongoDB directly; they go through JokeService,
    which owns validation and error translation.
"""

__version__ = "1.0.0"
