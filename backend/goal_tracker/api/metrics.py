import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse, Response

from goal_tracker.core.metrics import GoalsMetrics, request_metrics


logger = logging.getLogger(__name__)

router = APIRouter(tags=["metrics"])


@router.get("/metrics")
def read_metrics(metrics: GoalsMetrics = Depends(request_metrics)):
    try:
        body, content_type = metrics.render()
    except Exception:
        logger.exception("Failed to collect metrics")
        return PlainTextResponse("Failed to collect metrics.", status_code=500)
    return Response(content=body, media_type=content_type)
