# safarsorted/main.py
import logging
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from safarsorted.core.config import settings
from safarsorted.core.deps import get_store
from safarsorted.core.errors import AppError, Unauthorized
from safarsorted.core.log_config import configure_logging
from safarsorted.core.security import uses_default_credentials

# Routers
from safarsorted.api.inquiries import router as inquiries_router
from safarsorted.api.admin import router as admin_router

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger("safarsorted")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
}

app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)


def check_admin_credentials() -> None:
    """Refuse to boot in production with the shipped admin login."""
    if not uses_default_credentials(settings):
        return
    if settings.is_production:
        raise RuntimeError("ADMIN_USER / ADMIN_PASS must be set in production")
    logger.warning(
        "Admin login is using the built-in defaults. "
        "Set ADMIN_USER and ADMIN_PASS before exposing this server."
    )


@app.on_event("startup")
def on_startup():
    check_admin_credentials()
    store = app.dependency_overrides.get(get_store, get_store)()
    store.ensure_initialized()
    logger.info("JSON file storage initialized at %s", store.path)
    logger.info("%s v%s ready (API base: /api)", settings.APP_NAME, settings.APP_VERSION)


# Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


# Errors -> {"error": "..."}
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    headers = {"WWW-Authenticate": 'Basic realm="admin"'} if isinstance(exc, Unauthorized) else None
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=headers)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Server error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# Routers
app.include_router(inquiries_router)
app.include_router(admin_router)


@app.get("/")
def root():
    return {
        "status": "ok",
        "message": "SafarSorted API is running",
        "version": settings.APP_VERSION,
    }


@app.get("/api/health")
def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


if __name__ == "__main__":
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)
