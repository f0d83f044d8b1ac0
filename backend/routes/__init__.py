from .health import router as health_router
from .scan import router as scan_router
from .risk import router as risk_router
from .exposures import router as exposures_router

__all__ = ["health_router", "scan_router", "risk_router", "exposures_router"]
