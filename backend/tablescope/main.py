"""
TableScope application entry point.

Run with:
    uvicorn tablescope.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.analyses import router as analyses_router
from .core.config import settings
from .middleware import ErrorHandlerMiddleware, RequestLoggerMiddleware, profiling_error_handler
from .services.dataset_profiler import ProfilingError


def configure_logging() -> None:
    level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Automatic statistical profiling of tabular datasets",
        debug=settings.DEBUG,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Last added runs first: the logger assigns the request id the error handler reports.
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(RequestLoggerMiddleware)

    app.add_exception_handler(ProfilingError, profiling_error_handler)
    app.include_router(analyses_router, prefix=settings.API_PREFIX)

    @app.get("/health")
    async def health():
        return {"status": "healthy", "version": settings.APP_VERSION}

    return app


app = create_app()
