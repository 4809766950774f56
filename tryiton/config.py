import os
from pydantic import BaseModel


def _origins() -> list[str]:
    raw = os.getenv("CORS_ALLOW_ORIGINS", "*")
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseModel):
    api_key: str = os.getenv("API_KEY", "change-me")

    # Generation service
    tryon_provider: str = os.getenv("TRYON_PROVIDER", "gemini")
    gemini_api_key: str | None = os.getenv("GEMINI_API_KEY")
    gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-2.0-flash-exp")
    gemini_timeout_seconds: float = float(os.getenv("GEMINI_TIMEOUT_SECONDS", "120"))

    # Product image download
    fetch_timeout_seconds: float = float(os.getenv("FETCH_TIMEOUT_SECONDS", "30"))

    # Upload limits and normalization
    max_upload_bytes: int = int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))
    max_image_dimension: int = int(os.getenv("MAX_IMAGE_DIMENSION", "1024"))
    jpeg_quality: int = int(os.getenv("JPEG_QUALITY", "85"))

    # Widget store
    storage_dir: str = os.getenv("STORAGE_DIR", os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "storage")))
    result_cache_limit: int = int(os.getenv("RESULT_CACHE_LIMIT", "20"))
    result_cache_ttl_seconds: int = int(os.getenv("RESULT_CACHE_TTL_SECONDS", str(10 * 60 * 60)))
    result_max_url_chars: int = int(os.getenv("RESULT_MAX_URL_CHARS", str(8 * 1024 * 1024)))

    cors_allow_origins: list[str] = _origins()

    # Server
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))


settings = Settings()
