"""Liveness and readiness endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from src.user_management.api.http.deps import get_user_store
from src.user_management.core.storage import UserStore

router = APIRouter()


@router.get("/health")
def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@router.get("/ready")
def readiness(store: UserStore = Depends(get_user_store)) -> JSONResponse:
    """Readiness check endpoint; fails while the store backend is unreachable."""
    if store.health_check():
        return JSONResponse(status_code=200, content={"status": "ready"})
    return JSONResponse(status_code=503, content={"status": "unavailable"})
