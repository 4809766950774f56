import time

import anyio
import anyio.to_thread
import structlog

from ..schemas.tryon import TryOnResponse
from .extractor import extract_image, to_data_url
from .images import NORMALIZED_MIME_TYPE, fetch_product_image, normalize_image
from .prompts import build_prompt
from .providers import ImageGenerator
from .validator import TryOnRequest


logger = structlog.get_logger("tryiton")

SUCCESS_MESSAGE = "Virtual try-on completed successfully!"


async def run_tryon(request: TryOnRequest, generator: ImageGenerator) -> TryOnResponse:
    """Normalize, invoke and extract for an already validated request.

    Any TryOnError raised along the way propagates to the caller unchanged.
    """
    start = time.monotonic()

    user_image = await anyio.to_thread.run_sync(normalize_image, request.photo)
    raw_product = await fetch_product_image(request.product_image_url)
    product_image = await anyio.to_thread.run_sync(normalize_image, raw_product)
    logger.info("images_normalized", user_bytes=len(user_image), product_bytes=len(product_image))

    prompt = build_prompt(request.product_type, request.product_title)
    response = await generator.generate(
        prompt,
        [(user_image, NORMALIZED_MIME_TYPE), (product_image, NORMALIZED_MIME_TYPE)],
    )
    payload = extract_image(response)

    elapsed = time.monotonic() - start
    return TryOnResponse(
        success=True,
        resultImageUrl=to_data_url(payload),
        processingTime=f"{elapsed:.1f}s",
        message=SUCCESS_MESSAGE,
    )
