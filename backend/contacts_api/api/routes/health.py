"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /api/health/ always returns 200 if process is up (liveness)
    - GET /api/health/ready returns 503 / NETWORK_ERROR if the database is
      unreachable or no store was ever attached to the app
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from contacts_api.api.responses import render
from contacts_api.core.envelope import error_response, success_response
from contacts_api.core.errors import TransportFailure

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/")
async def health_check() -> JSONResponse:
    """Basic liveness probe."""
    return render(success_response("healthy", {"service": "contacts-api"}))


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe, includes database connectivity."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        logger.warning("Readiness check failed: database not initialized")
        return render(error_response(TransportFailure("database not initialized")))
    if not await store.health_check():
        logger.warning("Readiness check failed: database unavailable")
        return render(error_response(TransportFailure("database unavailable")))
    return render(success_response("ready", {"database": "healthy"}))
