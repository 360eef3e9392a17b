"""Health check endpoint."""

import time
from fastapi import APIRouter, Request

from data_alchemist.models.responses import HealthResponse, HealthDependency

router = APIRouter()

_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """System health check with dependency status.

    Validation itself has no dependencies; Redis only backs the workspace store,
    so a Redis outage degrades the service rather than taking it down.
    """
    dependencies = {}

    # Check Redis
    try:
        redis = request.app.state.redis
        if redis is None:
            raise ConnectionError("Redis is not connected")
        start = time.time()
        await redis.ping()
        latency = (time.time() - start) * 1000
        dependencies["redis"] = HealthDependency(status="healthy", latency_ms=round(latency, 2))
    except Exception as e:
        dependencies["redis"] = HealthDependency(status="unhealthy", message=str(e))

    # Overall status
    all_healthy = all(d.status == "healthy" for d in dependencies.values())

    return HealthResponse(
        status="healthy" if all_healthy else "degraded",
        uptime_seconds=round(time.time() - _start_time, 2),
        dependencies=dependencies,
    )
