"""Identity scan and re-correlation endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Path

from config import settings
from engine.errors import EngineError, ProviderError
from models import AggregationResult, IdentityScanRequest, IdentityScanResponse
from security import RateLimiter
from services import IdentityScanPipeline
from .deps import enforce_limit, get_scan_limiter, get_scan_pipeline

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profiles", tags=["Scan"])

ProfileId = Path(..., min_length=1, max_length=64)


@router.post("/{profile_id}/identity-scan", response_model=IdentityScanResponse)
async def identity_scan(
    body: IdentityScanRequest,
    profile_id: str = ProfileId,
    pipeline: IdentityScanPipeline = Depends(get_scan_pipeline),
    limiter: RateLimiter = Depends(get_scan_limiter),
):
    """
    Validate, score and persist findings for a profile.

    Findings come from the request body, or from the search provider when
    only identifiers are supplied.
    """
    if body.findings is None:
        if body.identifiers is None or body.identifiers.is_empty():
            raise HTTPException(400, {"success": False, "error": "findings or identifiers are required"})
        if pipeline.search is None:
            raise HTTPException(400, {"success": False, "error": "No search provider configured; supply findings"})

    enforce_limit(limiter, profile_id, settings.RATE_LIMIT_SCAN_PER_HOUR, "scan")

    try:
        return await pipeline.run(
            profile_id,
            findings=body.findings,
            identifiers=body.identifiers,
            strict=body.strict,
        )
    except ProviderError as e:
        logger.warning("Search provider failed: %s", e)
        raise HTTPException(502, {"success": False, "error": "Search provider unavailable"})
    except EngineError as e:
        raise HTTPException(400, {"success": False, "error": str(e)})


@router.get("/{profile_id}/correlation", response_model=AggregationResult)
async def correlation(
    profile_id: str = ProfileId,
    pipeline: IdentityScanPipeline = Depends(get_scan_pipeline),
):
    """Re-apply matching rules and scoring to the profile's stored records."""
    return pipeline.correlate_stored(profile_id)
