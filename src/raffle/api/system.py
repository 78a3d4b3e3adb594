"""Health check and hello-world endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter

system_router = APIRouter(tags=["system"])


@system_router.get("/health")
async def health() -> dict:
    return {
        "status": "Healthy",
        "timestamp": datetime.now(UTC).isoformat(),
    }


@system_router.get("/api/hello")
async def hello(name: str | None = None) -> dict:
    return {
        "message": f"Hello, {name or 'World'}!",
        "timestamp": datetime.now(UTC).isoformat(),
    }
