"""Health check endpoint. No dependencies; used for liveness probes."""

from fastapi import APIRouter

from officeauth.core.config import get_settings
from officeauth.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return ok status and the configured storage backend."""
    return HealthResponse(storage_backend=get_settings().storage_backend)
