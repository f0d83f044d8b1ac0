from fastapi import APIRouter, Depends, HTTPException, Path

from config import settings
from engine.errors import EngineError
from models import RiskRecomputeRequest, RiskRecomputeResponse
from security import RateLimiter
from services import RiskRecomputePipeline
from .deps import enforce_limit, get_recompute_limiter, get_recompute_pipeline

router = APIRouter(prefix="/profiles", tags=["Risk"])


@router.post("/{profile_id}/risk/recompute", response_model=RiskRecomputeResponse)
async def recompute(
    body: RiskRecomputeRequest,
    profile_id: str = Path(..., min_length=1, max_length=64),
    pipeline: RiskRecomputePipeline = Depends(get_recompute_pipeline),
    limiter: RateLimiter = Depends(get_recompute_limiter),
):
    """Recompute advanced risk scores for stored records and assess the profile."""
    enforce_limit(limiter, profile_id, settings.RATE_LIMIT_RECOMPUTE_PER_HOUR, "recompute")

    try:
        return await pipeline.run(
            profile_id,
            social_findings=body.social_findings,
            correlation_multiplier=body.correlation_multiplier,
        )
    except EngineError as e:
        raise HTTPException(400, {"success": False, "error": str(e)})
