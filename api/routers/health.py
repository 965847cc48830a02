# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Description: health.py
# -----------------------------------------------------------------------------
import logging
from fastapi import APIRouter, Depends, HTTPException, Query

from api.schemas.health import HealthResponse, DeepHealthResponse
from api.dependencies import get_health_service, get_worker
from services.EmbeddingWorker import EmbeddingWorker
from services.HealthService import HealthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/", response_model=HealthResponse)
def health_check(worker: EmbeddingWorker = Depends(get_worker)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        message="SNHub matching API running",
        worker_running=worker.running,
    )


@router.get("/deep", response_model=DeepHealthResponse)
def deep_health_check(
    svc: HealthService = Depends(get_health_service),
    run_heavy_embedding: bool = Query(False, description="Generate a real embedding as well"),
) -> DeepHealthResponse:
    logger.info("GET /health/deep called (run_heavy_embedding=%s)", run_heavy_embedding)
    try:
        result = svc.deep_health(run_heavy_embedding=run_heavy_embedding)

        logger.info("GET /health/deep completed: %s", result.status)
        return result

    except Exception as e:
        logger.exception("GET /health/deep failed: %s", e)
        raise HTTPException(status_code=500, detail=f"deep health failed: {e}")
