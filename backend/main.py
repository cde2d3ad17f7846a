"""
Ride Patterns Demo - FastAPI Entry Point
Main application file with CORS, middleware, and route registration
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import Settings, get_settings
from logging_config import setup_logging
from models.errors import RideDemoError
from routes import fare_routes, ride_routes, ui_routes
from services.app_context import build_context
from sockets import status_socket
from sockets.status_socket import ConnectionManager, StatusNotifier

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Ride Patterns API...")
    yield
    logger.info("Shutting down Ride Patterns API...")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application and its ride context

    Args:
        settings: Explicit settings; read from the environment when omitted
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Ride Patterns API",
        description="Ride booking demo built on observer, strategy and command",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    context = build_context(settings)
    notifier = StatusNotifier(ConnectionManager(), audience=settings.rider_name)
    context.ride_request.subscribe(notifier)

    app.state.settings = settings
    app.state.context = context
    app.state.notifier = notifier

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all incoming requests with timing"""
        start_time = time.time()
        logger.info(f"Request: {request.method} {request.url.path}")

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(f"Completed in {process_time:.2f}s - Status: {response.status_code}")
        return response

    @app.exception_handler(RideDemoError)
    async def ride_error_handler(request: Request, exc: RideDemoError):
        """Domain errors that a route did not map itself"""
        logger.warning(f"Unmapped ride error on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=400,
            content={"success": False, "message": str(exc), "error": type(exc).__name__},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle all unhandled exceptions"""
        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "message": "Internal server error",
                "error": str(exc),
            },
        )

    @app.get("/")
    async def root():
        """API health check"""
        return {"success": True, "message": "Ride Patterns API is running", "version": "1.0.0"}

    @app.get("/health")
    async def health_check():
        """Detailed health check"""
        return {
            "success": True,
            "status": "healthy",
            "ride_status": context.ride_request.status,
            "feed_clients": notifier.manager.connection_count,
        }

    # Register route modules
    app.include_router(ride_routes.router, prefix="/rides", tags=["Rides"])
    app.include_router(fare_routes.router, prefix="/fares", tags=["Fares"])
    app.include_router(ui_routes.router, tags=["Demo"])

    # Register WebSocket routes
    app.include_router(status_socket.router, prefix="/ws", tags=["WebSocket"])

    return app


setup_logging(get_settings().log_level)
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
