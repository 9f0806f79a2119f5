import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# === Config ===
from app.core.config import Settings, load_settings
from app.middleware.api_logger import APILoggerMiddleware
from app.services.storage import Storage, create_storage

# === Routers ===
from app.routes.crm import (
    crm_clients,
    crm_dashboard,
    crm_followups,
    crm_integrations,
    crm_interactions,
    crm_tasks,
)

logger = logging.getLogger(__name__)


def create_app(storage: Optional[Storage] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Builds the API around one store instance. The store lives on app.state for
    the whole life of the process; pass one in to control it (tests do).
    """
    settings = settings or load_settings()

    # === Logging ===
    logging.basicConfig(level=settings.log_level)

    if storage is None:
        storage = create_storage(settings)

    # === App lifecycle ===
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"✅ Startup complete: {type(app.state.storage).__name__} in use.")
        yield
        logger.info("🛑 Shutdown complete.")

    # === Initialize App ===
    app = FastAPI(title=settings.app_title, version="1.0.0", lifespan=lifespan)
    app.state.storage = storage
    app.state.settings = settings

    # === Exception Handlers ===
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"⚠️ Validation Error on {request.method} {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid request data", "errors": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"❌ Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"message": "Internal server error"})

    # === Middleware ===
    app.add_middleware(APILoggerMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # === Health Check ===
    @app.get("/ping")
    async def ping():
        return {"status": "ok", "message": "CRM API is live"}

    # === Mount API Routes ===
    app.include_router(crm_dashboard.router, prefix="/api")
    app.include_router(crm_clients.router, prefix="/api")
    app.include_router(crm_tasks.router, prefix="/api")
    app.include_router(crm_followups.router, prefix="/api")
    app.include_router(crm_interactions.router, prefix="/api")
    app.include_router(crm_integrations.router, prefix="/api")

    return app


# === Dev Hot Reload ===
# Run with `python -m app.main` or `uvicorn app.main:create_app --factory`
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=load_settings().env == "dev",
    )
