import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import analytics, auth, health, lecturers, students, venues
from app.core.config import get_settings
from app.core.exceptions import AppError
from app.core.middleware import AccessLogMiddleware, RequestSizeLimitMiddleware, SecurityHeadersMiddleware

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        # Invariant violations are logged in full but never leak into the response.
        logger.error("%s %s failed: %s %s", request.method, request.url.path, exc.message, exc.details)
        return JSONResponse(status_code=exc.status_code, content={"message": INTERNAL_ERROR_MESSAGE, "details": {}})
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "details": exc.details},
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("%s %s failed", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"message": INTERNAL_ERROR_MESSAGE})


app = FastAPI(title=settings.project_name)
app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(Exception, unhandled_error_handler)

app.add_middleware(RequestSizeLimitMiddleware, max_bytes=settings.max_request_size_bytes)
app.add_middleware(SecurityHeadersMiddleware, settings=settings)
app.add_middleware(AccessLogMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix=settings.api_prefix, tags=["health"])
app.include_router(auth.router, prefix=f"{settings.api_prefix}/auth", tags=["auth"])
app.include_router(analytics.router, prefix=f"{settings.api_prefix}/analytics", tags=["analytics"])
app.include_router(students.router, prefix=f"{settings.api_prefix}/student", tags=["student"])
app.include_router(lecturers.router, prefix=f"{settings.api_prefix}/lecturer", tags=["lecturer"])
app.include_router(venues.router, prefix=f"{settings.api_prefix}/venue", tags=["venue"])
