# vehicle_registry/main.py
"""
FastAPI application entry point.
Includes request timing, error handlers that map AppError kinds to HTTP
statuses, and all routers.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from vehicle_registry.routers import root, health, vehicles, drivers, vehicle_logs
from vehicle_registry.database import create_tables
from vehicle_registry.config import settings
from vehicle_registry.errors import AppError, ValidationError
from vehicle_registry.utils.logger import get_logger
import time
import uvicorn

logger = get_logger(__name__)

app = FastAPI(
    title="Vehicle Registry API",
    description="Vehicles, drivers, and validated vehicle entry/exit logs.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Error Handlers ───────────────────────────────────────────────────────────
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"path": ".".join(str(part) for part in err["loc"][1:]), "message": err["msg"]}
        for err in exc.errors()
    ]
    error = ValidationError(errors)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": {"type": "InternalError", "info": "Internal server error"}},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(root.router)
app.include_router(health.router,       prefix="/api/v1", tags=["Health"])
app.include_router(vehicles.router,     prefix="/api/v1", tags=["Vehicles"])
app.include_router(drivers.router,      prefix="/api/v1", tags=["Drivers"])
app.include_router(vehicle_logs.router, prefix="/api/v1", tags=["Vehicle Logs"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("Vehicle Registry starting up...")
    create_tables()
    logger.info("Database tables ready")
    logger.info(f"Environment: {settings.ENV_MODE}")
    logger.info(f"Listening on http://{settings.HOST}:{settings.PORT}")


@app.on_event("shutdown")
async def shutdown():
    logger.info("Vehicle Registry shutting down...")


if __name__ == "__main__":
    uvicorn.run("vehicle_registry.main:app", host=settings.HOST, port=settings.PORT)
