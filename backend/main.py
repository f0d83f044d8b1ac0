import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from routes import health_router, scan_router, risk_router, exposures_router
from storage import record_store

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("vaultscore")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "%s backend v%s starting (environment: %s)",
        settings.APP_NAME, settings.VERSION, settings.ENVIRONMENT,
    )
    orphans = record_store.audit_orphans()
    if orphans:
        logger.error("Record store holds %d record(s) without profile_id", len(orphans))
    yield
    logger.info("%s backend shutdown", settings.APP_NAME)


app = FastAPI(
    title="VAULTSCORE API",
    version=settings.VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url=None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def error_handler(request: Request, exc: Exception):
    # Exception text can carry personal values; log the type only.
    logger.error("Unhandled %s on %s", type(exc).__name__, request.url.path)
    return JSONResponse(status_code=500, content={"success": False, "error": "Internal error"})


app.include_router(health_router, prefix="/api")
app.include_router(scan_router, prefix="/api")
app.include_router(risk_router, prefix="/api")
app.include_router(exposures_router, prefix="/api")


@app.get("/")
async def root():
    return {"name": "VAULTSCORE API", "version": settings.VERSION, "status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=True)
