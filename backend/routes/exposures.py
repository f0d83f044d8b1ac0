from fastapi import APIRouter, Depends, Path

from models import AlertListResponse, ExposureListResponse
from storage import RecordStore
from .deps import get_store

router = APIRouter(prefix="/profiles", tags=["Exposures"])


@router.get("/{profile_id}/exposures", response_model=ExposureListResponse)
async def list_exposures(
    profile_id: str = Path(..., min_length=1, max_length=64),
    store: RecordStore = Depends(get_store),
):
    records = sorted(store.list_by_profile(profile_id), key=lambda r: -r.risk_score)
    return ExposureListResponse(profile_id=profile_id, exposures=records)


@router.get("/{profile_id}/alerts", response_model=AlertListResponse)
async def list_alerts(
    profile_id: str = Path(..., min_length=1, max_length=64),
    store: RecordStore = Depends(get_store),
):
    return AlertListResponse(profile_id=profile_id, alerts=store.list_alerts(profile_id))
