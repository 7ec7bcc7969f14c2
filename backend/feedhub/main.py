"""
Feed Hub - FastAPI application
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from feedhub.api.v1.api import api_router
from feedhub.core.config import settings
from feedhub.core.database import close_db, init_db
from feedhub.core.exceptions import setup_exception_handlers
from feedhub.core.logging import configure_logging


def create_app() -> FastAPI:
    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description="Feed aggregation backend: sources, articles and keyword search",
        version=settings.VERSION,
        docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
        redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None,
        openapi_url="/openapi.json" if settings.ENVIRONMENT != "production" else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_HOSTS,
        allow_origin_regex=settings.ALLOWED_ORIGIN_REGEX,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)
    app.include_router(api_router)

    @app.on_event("startup")
    async def startup_event():
        """Initialize application on startup"""
        configure_logging(settings.LOG_LEVEL)
        logger.info(f"Starting {settings.APP_NAME} API...")
        await init_db()
        logger.info("Application startup complete!")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info(f"Shutting down {settings.APP_NAME} API...")
        await close_db()

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return JSONResponse(
            status_code=200,
            content={
                "status": "healthy",
                "service": "feedhub-api",
                "version": settings.VERSION,
                "environment": settings.ENVIRONMENT,
            },
        )

    return app


app = create_app()
