"""
FastAPI Application Factory

Assembles the control API:
- Routes (layers, transitions, effects, background, auto-advance, system)
- Exception handlers (PerformanceError → structured ErrorResponse)
- CORS for browser-based control panels

Same factory in main_asyncio.py and the tests; the service container is
injected separately through api.dependencies.set_service_container().
"""

from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.middleware.error_handler import register_exception_handlers
from api.routes import auto, background, effects, layers, system, transitions
from models.enums import LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)

API_PREFIX = "/api/v1"


def create_app(
    title: str = "Performance Control API",
    description: str = "REST API for live text layers, background transitions and overlay effects",
    version: str = "1.0.0",
    docs_enabled: bool = True,
    cors_origins: Optional[List[str]] = None
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        title: API title (shown in docs)
        description: API description
        version: API version
        docs_enabled: Enable /docs and /redoc
        cors_origins: CORS allowed origins (default: localhost dev servers)
    """
    app = FastAPI(
        title=title,
        description=description,
        version=version,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None
    )

    # =========================================================================
    # CORS Configuration
    # =========================================================================

    if cors_origins is None:
        cors_origins = [
            "http://localhost:3000",
            "http://localhost:5173",
            "http://localhost",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    register_exception_handlers(app)

    # =========================================================================
    # Routes
    # =========================================================================

    for router in (layers.router, transitions.router, effects.router, background.router, auto.router, system.router):
        app.include_router(router, prefix=API_PREFIX)

    log.debug(f"Routes registered under {API_PREFIX}: layers, transitions, effects, background, auto, system")

    @app.get(
        "/api/health",
        tags=["System"],
        summary="Health check",
        description="Check if API is running and responding"
    )
    async def health_check():
        return {
            "status": "healthy",
            "service": "performance-api",
            "version": version
        }

    @app.get("/", include_in_schema=False)
    async def root():
        return JSONResponse(
            {
                "message": title,
                "docs": "/docs",
                "health": "/api/health"
            }
        )

    log.info(f"FastAPI app created: {title} v{version}")
    return app
