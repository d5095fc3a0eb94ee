"""
Note Pad API: Health Check Route
=================================

GET /api/v1/healthcheck reports that the process is serving requests.
It performs no database access, so it answers even when every pooled
connection is busy.
"""

from fastapi import APIRouter

from notepad.schemas.note import HealthResponse

router = APIRouter(prefix="/api/v1", tags=["Health"])

SERVICE_MESSAGE = "Note Pad API Services"


@router.get(
    "/healthcheck",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", message=SERVICE_MESSAGE)
