"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter(tags=["health"])

_version: str = "0.0.0"


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str


def init_router(version: str) -> None:
    global _version  # noqa: PLW0603
    _version = version


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    return HealthResponse(version=_version)
