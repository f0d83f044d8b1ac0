from fastapi import APIRouter
from datetime import datetime
from models import HealthResponse
from config import settings
from services import identity_scan_pipeline

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(
        status="ok",
        version=settings.VERSION,
        timestamp=datetime.utcnow(),
        search_configured=identity_scan_pipeline.search is not None,
        correlation_configured=identity_scan_pipeline.correlation is not None,
    )
