# main.py
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from api.router import router as api_router  # << use this, not api.v1.router
from apps.chat.config import get_chat_settings
from apps.chat.db import init_chat_db
from apps.chat.errors import ChatError, ErrorKind
from common.utils.logging_config import setup_logging

# Get settings
settings = get_chat_settings()

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="MindMate API", version="1.0.0")

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)


# Custom middleware to add security headers
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        return response


# Add security headers middleware
app.add_middleware(SecurityHeadersMiddleware)


@app.exception_handler(ChatError)
async def chat_error_handler(request: Request, exc: ChatError):
    """Map error kinds to status codes; internal details are logged, never returned"""
    if exc.kind == ErrorKind.PERSISTENCE:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.kind.value}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Framework and auth errors share the {"message": ...} body"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.on_event("startup")
async def startup_event():
    """Initialize database on startup"""
    await init_chat_db()
    logger.info("MindMate API started")


app.include_router(api_router)
