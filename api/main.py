"""Dataset marketplace FastAPI application.

Entry point: uvicorn api.main:app --reload
"""

from __future__ import annotations

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.config import settings
from api.errors import MarketplaceError

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("app_startup", env=settings.APP_ENV, storage=settings.FILE_STORAGE_TYPE)
    yield
    from api.db.session import engine

    await engine.dispose()
    logger.info("app_shutdown")


app = FastAPI(
    title="Dataset Marketplace API",
    description="Contributor uploads, admin moderation, token wallets and dataset purchases",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.APP_ENV == "development" else None,
    redoc_url="/redoc" if settings.APP_ENV == "development" else None,
)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Exception handlers ---

@app.exception_handler(MarketplaceError)
async def marketplace_exception_handler(request: Request, exc: MarketplaceError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        "request_failed",
        path=request.url.path,
        error=exc.message,
        error_type=type(exc).__name__,
        details=exc.details,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": ".".join(str(p) for p in err["loc"][1:]), "message": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Missing required fields", "details": errors},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_exception", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error", "details": str(exc)},
    )


# --- Routers ---

from api.routers.auth import router as auth_router  # noqa: E402
from api.routers.uploads import router as uploads_router  # noqa: E402
from api.routers.admin import router as admin_router  # noqa: E402
from api.routers.purchases import router as purchases_router  # noqa: E402
from api.routers.marketplace import router as marketplace_router  # noqa: E402
from api.routers.wallets import router as wallets_router  # noqa: E402

app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
app.include_router(uploads_router, prefix="/api", tags=["uploads"])
app.include_router(admin_router, prefix="/api", tags=["admin"])
app.include_router(purchases_router, prefix="/api", tags=["purchases"])
app.include_router(marketplace_router, prefix="/api", tags=["marketplace"])
app.include_router(wallets_router, prefix="/api", tags=["wallets"])


# --- Health check ---

@app.get("/api/health")
async def health_check():
    return {"status": "ok", "version": "0.1.0"}
