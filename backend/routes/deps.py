from fastapi import HTTPException

from services import (
    IdentityScanPipeline,
    RiskRecomputePipeline,
    identity_scan_pipeline,
    risk_recompute_pipeline,
)
from storage import RecordStore, record_store
from security import RateLimiter, scan_limiter, recompute_limiter


def get_scan_pipeline() -> IdentityScanPipeline:
    return identity_scan_pipeline


def get_recompute_pipeline() -> RiskRecomputePipeline:
    return risk_recompute_pipeline


def get_store() -> RecordStore:
    return record_store


def get_scan_limiter() -> RateLimiter:
    return scan_limiter


def get_recompute_limiter() -> RateLimiter:
    return recompute_limiter


def enforce_limit(limiter: RateLimiter, profile_id: str, per_hour: int, action: str):
    allowed, retry_after = limiter.is_allowed(
        key=profile_id,
        max_requests=per_hour,
        window_seconds=3600,
    )
    if not allowed:
        raise HTTPException(
            status_code=429,
            detail={
                "success": False,
                "error": f"Rate limited. {per_hour} {action}(s) per profile per hour.",
                "retry_after": retry_after,
            },
        )
