"""Health check endpoint."""

from fastapi import APIRouter, Depends

from counter_service.application.ports.counter_store import CounterStore
from counter_service.domain.errors import TransportError
from counter_service.infrastructure.api.dependencies import get_counter_store

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(store: CounterStore = Depends(get_counter_store)):
    """Check API and store connectivity."""
    try:
        await store.ping()
        store_status = "connected"
    except TransportError as e:
        store_status = f"error: {e}"

    return {
        "status": "ok" if store_status == "connected" else "degraded",
        "store": store_status,
        "service": "Counter Service",
    }
