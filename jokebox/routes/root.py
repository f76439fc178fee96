"""
Jokebox — Greeting Routes
==========================

What:  GET / and GET /test, static plain-text greetings.
Why:   Cheap liveness checks that touch nothing but the process itself.
       GET /health is the variant that also pings MongoDB.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["Greeting"])


@router.get("/", response_class=PlainTextResponse, summary="Default greeting")
async def hello_world() -> str:
    return "Hello World"


@router.get("/test", response_class=PlainTextResponse, summary="Test greeting")
async def hello_test() -> str:
    return "Hello Test"
