# fonsterkalkyl/routers/metrics.py
from fastapi import APIRouter
from fastapi.responses import Response

from ..metrics import CONTENT_TYPE_LATEST, render_latest

router = APIRouter(prefix="/metrics", tags=["metrics"])


# ------------------------------
# Prometheus exposition endpoint
# ------------------------------
@router.get("", summary="Prometheus metrics")
async def prometheus_metrics():
    return Response(content=render_latest(), media_type=CONTENT_TYPE_LATEST)
