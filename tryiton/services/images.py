from io import BytesIO

import httpx
import structlog
from PIL import Image, ImageOps, UnidentifiedImageError

from ..config import settings
from ..errors import ImageDecodeError, UpstreamFetchError


logger = structlog.get_logger("tryiton")

NORMALIZED_MIME_TYPE = "image/jpeg"


def normalize_image(data: bytes, max_dimension: int | None = None, quality: int | None = None) -> bytes:
    """Fit the image inside a max_dimension square and re-encode it as JPEG.

    Aspect ratio is kept and smaller images are never enlarged.
    """
    max_dimension = max_dimension or settings.max_image_dimension
    quality = quality or settings.jpeg_quality
    try:
        img = Image.open(BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ImageDecodeError(f"Could not read image data: {e}") from e

    img = ImageOps.exif_transpose(img)
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.split()[-1])
        img = background
    elif img.mode != "RGB":
        img = img.convert("RGB")

    # thumbnail() only ever shrinks
    img.thumbnail((max_dimension, max_dimension), Image.Resampling.LANCZOS)

    out = BytesIO()
    img.save(out, format="JPEG", quality=quality)
    return out.getvalue()


async def fetch_product_image(url: str, timeout: float | None = None) -> bytes:
    try:
        async with httpx.AsyncClient(timeout=timeout or settings.fetch_timeout_seconds, follow_redirects=True) as client:
            resp = await client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning("product_fetch_failed", url=url, error=str(e))
        raise UpstreamFetchError(f"Failed to download product image: {e}") from e

    if not resp.is_success:
        logger.warning("product_fetch_failed", url=url, status=resp.status_code)
        raise UpstreamFetchError(f"Failed to download product image (HTTP {resp.status_code})")
    return resp.content
