"""Liveness endpoint. Never calls the knowledge base."""

from fastapi import APIRouter

from kbrelay.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(status="ok")
