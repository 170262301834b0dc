"""Health Probe — liveness endpoint for container orchestration.

Invariants:
    - GET /api/v1/health always returns 200 if the process is up
    - Registered before the catch-all resource route so it is never dispatched
"""

from fastapi import APIRouter, Request, status

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
async def health_check(request: Request):
    """Basic liveness probe with entity counts."""
    return {
        "status": "healthy",
        "service": "newsboard-api",
        "version": "1.0.0",
        "entities": request.app.state.store.counts(),
    }
