# braketime/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from braketime.config.backend import create_backend
from braketime.config.settings import settings
from braketime.core.middleware import setup_middleware
from braketime.api.v1.router import api_router
from braketime.shared.schemas.common import ErrorResponse
from braketime.shared.services.backend_client import BackendError

logging.basicConfig(level=settings.log_level,
                    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("🚀 Brake Time Admin API starting...")
    logger.info(f"📍 Version: {settings.version}")
    logger.info(f"🌍 Environment: {'Development' if settings.debug else 'Production'}")
    logger.info(f"🗄️  Backend: {settings.rest_url}")
    logger.info(f"🔗 Store manager mode: {settings.store_manager_mode}")
    if not hasattr(app.state, "backend"):
        app.state.backend = create_backend()

    yield

    # Shutdown
    await app.state.backend.aclose()
    logger.info("🛑 Brake Time Admin API shutting down...")

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Back office for markets, stores and market managers",
    lifespan=lifespan
)

# Setup middleware
setup_middleware(app)

# Include routers
app.include_router(api_router, prefix="/api/v1")

@app.exception_handler(BackendError)
async def backend_error_handler(request: Request, exc: BackendError):
    logger.error(f"Unhandled backend error on {request.url.path}: {exc.message}")
    body = ErrorResponse(message=exc.message, error_code=exc.code)
    return JSONResponse(status_code=502, content=body.model_dump(mode="json"))

# Root endpoint
@app.get("/")
async def root():
    return {
        "message": "🛑 Brake Time Admin API",
        "version": settings.version,
        "status": "running",
        "environment": "production" if not settings.debug else "development",
        "docs": "/docs",
        "api": "/api/v1"
    }

@app.get("/health")
async def health_check():
    backend_ok = await app.state.backend.health_check()
    return {
        "status": "healthy" if backend_ok else "degraded",
        "backend": "reachable" if backend_ok else "unreachable",
        "version": settings.version,
        "app": settings.app_name
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "braketime.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
