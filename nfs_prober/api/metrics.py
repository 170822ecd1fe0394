from fastapi import APIRouter, Depends, Response
from prometheus_client import CONTENT_TYPE_LATEST

from ..dependencies import get_metrics
from ..services.metrics import ProbeMetrics

router = APIRouter(tags=["metrics"])


@router.get("/metrics")
async def metrics(probe_metrics: ProbeMetrics = Depends(get_metrics)) -> Response:
    return Response(content=probe_metrics.expose(), media_type=CONTENT_TYPE_LATEST)
