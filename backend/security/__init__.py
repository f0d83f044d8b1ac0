from .rate_limit import RateLimiter, scan_limiter, recompute_limiter

__all__ = [
    "RateLimiter",
    "scan_limiter",
    "recompute_limiter",
]
