from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ..dependencies import get_status_registry
from ..models import TargetStatus
from ..services.reporting import TargetStatusRegistry

router = APIRouter(prefix="/api", tags=["targets"])


@router.get("/targets", response_model=List[TargetStatus])
async def list_targets(
    registry: TargetStatusRegistry = Depends(get_status_registry),
) -> List[TargetStatus]:
    """Latest state and outcomes of every probed target."""
    return registry.get_all()


@router.get("/targets/{address}", response_model=TargetStatus)
async def get_target(
    address: str, registry: TargetStatusRegistry = Depends(get_status_registry)
) -> TargetStatus:
    """
    Status of one target.

    HTTP Status Codes:
        200: Target known
        404: No target with that address is being probed
    """
    for target_status in registry.get_all():
        if target_status.address == address:
            return target_status
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"No target with address {address} is being probed",
    )
