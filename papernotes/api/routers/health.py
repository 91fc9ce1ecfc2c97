"""
Health check API endpoints.

Routes: GET /, GET /health

Dependencies: fastapi
System role: Health check HTTP API
"""

from fastapi import APIRouter
from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(tags=["health"])


@router.get("/", response_model=HealthResponse)
async def root() -> HealthResponse:
    """Root liveness check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")
