"""
Restaurant Ops — Health endpoint
"""
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from restopos.core.config import get_settings
from restopos.db.store import EntityKind
from restopos.schemas.restaurant import HealthResponse

settings = get_settings()
router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """
    Verifies the entity store answers reads.
    Returns 200 if all dependencies are healthy, 503 otherwise.
    """
    deps: dict[str, str] = {}
    healthy = True

    try:
        store = request.app.state.restaurant.store
        counts = {kind.value: store.count(kind) for kind in (EntityKind.ORDER, EntityKind.TABLE)}
        deps["store"] = "ok ({order} orders, {table} tables)".format(**counts)
    except Exception as e:
        deps["store"] = f"error: {str(e)[:100]}"
        healthy = False

    response = HealthResponse(
        status="healthy" if healthy else "degraded",
        service=settings.SERVICE_NAME,
        version=settings.SERVICE_VERSION,
        dependencies=deps,
    )

    return JSONResponse(
        content=response.model_dump(),
        status_code=200 if healthy else 503,
    )
