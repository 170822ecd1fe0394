from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ..core.readiness import ReadinessSignal
from ..dependencies import get_readiness

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(readiness: ReadinessSignal = Depends(get_readiness)) -> JSONResponse:
    """
    Readiness of the prober.

    HTTP Status Codes:
        200: All target schedulers have been dispatched
        500: Still launching
    """
    if readiness.is_ready():
        return JSONResponse(status_code=status.HTTP_200_OK, content={"status": readiness.state.value})
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"status": readiness.state.value},
    )
