from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

GREETING = "Hello World from EKS!"

router = APIRouter(tags=["greeting"])


@router.get(
    "/",
    response_class=PlainTextResponse,
    summary="Greeting",
    description="Returns a fixed plain-text greeting. The body is identical on every request.",
    responses={200: {"content": {"text/plain": {"example": GREETING}}}},
)
async def greet() -> str:
    return GREETING
