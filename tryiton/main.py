import os
import time
import uuid
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog

from .config import settings
from .routers.tryon import router as tryon_router
from .routers.widget import router as widget_router
from .routers.analytics import router as analytics_router


logger = structlog.get_logger("tryiton")


app = FastAPI(title="TryItOn Widget", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)


def _request_id(request: Request) -> str:
    # Reuse the storefront's id when it sends a sane one
    incoming = request.headers.get("x-request-id", "")
    if 0 < len(incoming) <= 64 and incoming.isascii() and incoming.replace("-", "").isalnum():
        return incoming
    return uuid.uuid4().hex[:12]


def _validate_config() -> None:
    strict = os.getenv("STRICT_CONFIG", "0") == "1"
    errors = []
    if not settings.api_key or settings.api_key == "change-me":
        errors.append("API_KEY must be set to a secure value")
    if (settings.tryon_provider or "gemini").lower() != "mock" and not settings.gemini_api_key:
        errors.append("GEMINI_API_KEY must be set for the gemini provider")
    if settings.max_image_dimension <= 0:
        errors.append("MAX_IMAGE_DIMENSION must be positive")
    if not 1 <= settings.jpeg_quality <= 95:
        errors.append("JPEG_QUALITY must be between 1 and 95")
    if errors:
        if strict:
            raise RuntimeError("Configuration error: " + "; ".join(errors))
        else:
            for e in errors:
                logger.warning("config_warning", warning=e)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    request_id = _request_id(request)
    request.state.request_id = request_id
    path = str(request.url.path)

    # Everything logged while handling this request carries these keys
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, path=path, method=request.method)
    if path.endswith("/tryon"):
        structlog.contextvars.bind_contextvars(provider=settings.tryon_provider)

    logger.info("request_started",
                client_ip=request.client.host if request.client else "unknown",
                content_type=request.headers.get("content-type", "unknown"),
                content_length=request.headers.get("content-length"))
    try:
        resp = await call_next(request)
    except Exception as e:
        logger.error("request_failed", error=str(e), duration_ms=int((time.time() - start) * 1000), exc_info=True)
        raise
    finally:
        structlog.contextvars.clear_contextvars()

    resp.headers["X-Request-ID"] = request_id
    duration_ms = int((time.time() - start) * 1000)
    log = logger.warning if resp.status_code >= 500 else logger.info
    log("request_completed", request_id=request_id, path=path, status=resp.status_code, duration_ms=duration_ms)
    return resp


@app.exception_handler(Exception)
async def handle_exceptions(request: Request, exc: Exception):
    request_id = getattr(request.state, "request_id", None) or _request_id(request)

    logger.error("unhandled_exception",
                 request_id=request_id,
                 path=str(request.url.path),
                 error=str(exc),
                 error_type=type(exc).__name__,
                 exc_info=True)

    return JSONResponse(
        status_code=500,
        headers={"X-Request-ID": request_id},
        content={
            "detail": "Internal server error",
            "error_code": "INTERNAL_ERROR",
            "request_id": request_id,
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        }
    )


@app.get("/api/health")
async def health():
    return {"status": "ok", "provider": settings.tryon_provider}


app.include_router(tryon_router, prefix="/api")
app.include_router(widget_router, prefix="/api")
app.include_router(analytics_router, prefix="/api")

# Validate configuration at import time (warnings by default; set STRICT_CONFIG=1 to enforce)
_validate_config()
