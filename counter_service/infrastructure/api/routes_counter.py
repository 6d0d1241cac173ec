"""Counter endpoints: read, increment, decrement.

Every response carries either ``{"value", "timestamp"}`` or an
``{"error", "message"}`` envelope; error codes are stable identifiers
clients switch on.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from counter_service.application.use_cases.get_counter import GetCounterUseCase
from counter_service.application.use_cases.update_counter import UpdateCounterUseCase
from counter_service.domain.entities.counter import Counter
from counter_service.domain.errors import (
    BoundaryError,
    NotFoundError,
    RetryExhaustedError,
    TransportError,
)
from counter_service.infrastructure.api.dependencies import (
    get_counter_uc,
    get_update_counter_uc,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["counter"])

NOT_FOUND_MESSAGE = "Counter not found in database. Please initialize the counter."
CONFLICT_MESSAGE = "Counter update failed due to concurrent modifications. Please retry."


def _request_context(request: Request) -> dict[str, str]:
    return {
        "request_id": request.headers.get("x-request-id", "direct-invocation"),
        "source_ip": request.client.host if request.client else "unknown",
    }


def _error(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "message": message})


def _success(counter: Counter, action: str) -> JSONResponse:
    timestamp = datetime.now(tz=timezone.utc).isoformat()
    logger.info(
        "Counter %s: value=%d, version=%d, timestamp=%s",
        action, counter.value, counter.version, timestamp,
    )
    return JSONResponse({"value": counter.value, "timestamp": timestamp})


@router.get("/count")
async def get_count(request: Request, uc: GetCounterUseCase = Depends(get_counter_uc)):
    """Return the current counter value."""
    logger.info("GET /count request: %s", _request_context(request))
    try:
        counter = await uc.execute()
    except NotFoundError:
        return _error(404, "NotFound", NOT_FOUND_MESSAGE)
    except TransportError as e:
        logger.error("Error retrieving counter: %s", e)
        return _error(500, "InternalServerError", str(e) or "Failed to retrieve counter value")
    except Exception:
        logger.exception("Unexpected error retrieving counter")
        return _error(500, "InternalServerError", "An unexpected error occurred")
    return _success(counter, "retrieved")


@router.post("/increment")
async def increment(request: Request, uc: UpdateCounterUseCase = Depends(get_update_counter_uc)):
    """Add one to the counter."""
    logger.info("POST /increment request: %s", _request_context(request))
    try:
        counter = await uc.increment()
    except BoundaryError as e:
        return _error(
            400, "BoundaryViolation",
            f"Cannot increment counter: already at maximum value ({e.maximum:,})",
        )
    except Exception as e:
        return _update_failure(e, "increment")
    return _success(counter, "incremented")


@router.post("/decrement")
async def decrement(request: Request, uc: UpdateCounterUseCase = Depends(get_update_counter_uc)):
    """Subtract one from the counter."""
    logger.info("POST /decrement request: %s", _request_context(request))
    try:
        counter = await uc.decrement()
    except BoundaryError as e:
        return _error(
            400, "BoundaryViolation",
            f"Cannot decrement counter: already at minimum value ({e.minimum:,})",
        )
    except Exception as e:
        return _update_failure(e, "decrement")
    return _success(counter, "decremented")


def _update_failure(exc: Exception, action: str) -> JSONResponse:
    """Map a non-boundary update failure to its HTTP envelope."""
    if isinstance(exc, RetryExhaustedError):
        logger.warning("Counter %s gave up after %d attempts", action, exc.attempts)
        return _error(409, "ConcurrentUpdateConflict", CONFLICT_MESSAGE)
    if isinstance(exc, NotFoundError):
        return _error(404, "NotFound", NOT_FOUND_MESSAGE)
    if isinstance(exc, TransportError):
        logger.error("Error %sing counter: %s", action, exc)
        return _error(500, "InternalServerError", str(exc) or f"Failed to {action} counter value")
    logger.exception("Unexpected error during counter %s", action, exc_info=exc)
    return _error(500, "InternalServerError", "An unexpected error occurred")
