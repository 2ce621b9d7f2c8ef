"""
Main Application - APRE Reporting API

FastAPI application serving the customer feedback, sales and agent
performance report endpoints under the configured API prefix. All errors,
including unknown routes, are returned as {message, status, type: 'error'}.
"""

import time
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import config, setup_logging
from .database import get_database_manager
from .reports import customer_feedback_router, sales_router, dashboard_router

setup_logging()

# Global state
app_state = {
    "db_manager": None
}

logger = logging.getLogger(__name__)


def error_body(message: str, status: int) -> dict:
    """Error payload shared by every failing response"""
    return {"message": message, "status": status, "type": "error"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    # Startup
    app_state["db_manager"] = get_database_manager()
    logger.info(f"APRE API starting ({config.environment.value})")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if app_state.get("db_manager"):
        try:
            app_state["db_manager"].close()
            logger.info("Database connections closed")
        except Exception as e:
            logger.error(f"Error closing database connections: {e}")
    app_state["db_manager"] = None


# Create FastAPI app
app = FastAPI(
    title="APRE Reporting API",
    description="Sales and customer feedback reports for the APRE dashboard",
    version="1.0.0",
    lifespan=lifespan
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log each request with its status and duration"""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.debug(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)")
    return response


# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.web.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(customer_feedback_router, prefix=config.web.api_prefix)
app.include_router(sales_router, prefix=config.web.api_prefix)
app.include_router(dashboard_router, prefix=config.web.api_prefix)


@app.get(f"{config.web.api_prefix}/health")
def health_check():
    """Report API and database reachability"""
    db_manager = app_state.get("db_manager")
    database_ok = bool(db_manager and db_manager.ping())
    return {
        "status": "ok" if database_ok else "degraded",
        "database": "connected" if database_ok else "unavailable",
        "pool": db_manager.get_pool_stats() if db_manager else None
    }


# ============================================================================
# ERROR HANDLERS
# ============================================================================

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Format HTTP errors (including unknown routes) as error bodies"""
    if exc.status_code >= 500:
        logger.error(
            f"HTTP Exception: {request.method} {request.url.path} - "
            f"Status: {exc.status_code} - Detail: {exc.detail}"
        )
    else:
        logger.debug(
            f"HTTP Exception: {request.method} {request.url.path} - "
            f"Status: {exc.status_code} - Detail: {exc.detail}"
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail), exc.status_code),
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request parameter validation errors are client errors"""
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    logger.debug(f"Validation error: {request.method} {request.url.path} - {errors}")
    return JSONResponse(status_code=400, content=error_body(message, 400))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Catch-all exception handler for unhandled errors"""
    logger.error(
        f"Unhandled Exception: {request.method} {request.url.path}\n"
        f"  Exception Type: {type(exc).__name__}\n"
        f"  Message: {str(exc)}",
        exc_info=True
    )
    return JSONResponse(status_code=500, content=error_body(str(exc) or "Internal Server Error", 500))
