"""
Fitness Manager API - Main Entry Point

This is the FastAPI application entry point.
Uses core/ for configuration, exceptions, and logging.
"""

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from core.config import settings, VERSION
from core.exceptions import AppException
from core.responses import ApiResponse
from core.logging import setup_logging, get_logger, log_error

# Setup logging first
setup_logging(
    level="DEBUG" if settings.debug else settings.log_level,
    echo_sql=settings.database_echo,
)
logger = get_logger(__name__)

from infrastructure.database import init_db
from middleware import AuthMiddleware, RequestLoggingMiddleware
from services.auth import PageRedirect
from routers import auth, exercises, methods, training_sheets, schedules, pages

# ============================================================
# Application Setup
# ============================================================

app = FastAPI(
    title="Fitness Manager API",
    description="Exercises, training methods, workout sheets and weekly schedules",
    version=VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    redirect_slashes=False,
)

# ============================================================
# Middleware (last added runs first)
# ============================================================

app.add_middleware(AuthMiddleware)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
    max_age=3600,
)

logger.info("Middleware configured")

# ============================================================
# Global Exception Handlers
# ============================================================

@app.exception_handler(PageRedirect)
async def page_redirect_handler(request: Request, exc: PageRedirect):
    """Session gate on pages: send the browser elsewhere."""
    return RedirectResponse(exc.location, status_code=303)


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """
    Handle all custom AppException and subclasses.
    Returns unified ApiResponse format.
    """
    logger.warning(f"AppException: {exc.code} - {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=ApiResponse.from_exception(exc).model_dump()
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request body/query validation errors in the unified format."""
    errors = [
        {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg", "")}
        for error in exc.errors()
    ]
    message = "; ".join(f"{'.'.join(e['loc'])}: {e['msg']}" for e in errors) or "Invalid request"
    return JSONResponse(
        status_code=422,
        content=ApiResponse.fail(message, code="VALIDATION_ERROR", meta={"errors": errors}).model_dump()
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """
    Handle unexpected exceptions.
    Logs full traceback and returns generic error.
    """
    log_error(logger, exc, context=f"{request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=ApiResponse.fail(
            message="Internal server error",
            code="INTERNAL_ERROR"
        ).model_dump()
    )

# ============================================================
# Database
# ============================================================

logger.info(f"Starting Fitness Manager v{VERSION}")
init_db()

# ============================================================
# Root Endpoints
# ============================================================

@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return ApiResponse.ok({
        "status": "healthy",
        "service": "fitness-manager",
        "version": VERSION,
    })

# ============================================================
# Router Registration
# ============================================================

app.include_router(auth.router, prefix="/api")
app.include_router(exercises.router, prefix="/api/exercises", tags=["exercises"])
app.include_router(methods.router, prefix="/api/methods", tags=["methods"])
app.include_router(training_sheets.router, prefix="/api/training-sheets", tags=["training-sheets"])
app.include_router(schedules.router, prefix="/api/schedules", tags=["schedules"])
app.include_router(pages.router)

logger.info(f"Application startup complete. Running on {settings.server_host}:{settings.server_port}")

# ============================================================
# Entry Point
# ============================================================

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.debug
    )
