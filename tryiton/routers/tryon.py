from typing import Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse
import structlog

from ..errors import TryOnError
from ..schemas.tryon import TryOnFailure, TryOnResponse
from ..services.pipeline import run_tryon
from ..services.providers import ImageGenerator, get_provider
from ..services.validator import validate_request


logger = structlog.get_logger("tryiton")

router = APIRouter(tags=["try-on"])


def get_generator() -> ImageGenerator:
    return get_provider()


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=TryOnFailure(error=message).model_dump())


@router.post("/tryon", response_model=TryOnResponse)
async def try_on(
    userPhoto: Optional[UploadFile] = File(None),
    productImageUrl: Optional[str] = Form(None),
    productType: Optional[str] = Form(None),
    productTitle: Optional[str] = Form(None),
    generator: ImageGenerator = Depends(get_generator),
):
    """Render the product from productImageUrl onto the uploaded photo.

    Every failure is returned as {success: false, error}; 400 for bad input, 500 otherwise.
    Uploaded photos are processed in memory and never stored.
    """
    try:
        photo = await userPhoto.read() if userPhoto is not None else None
        request = validate_request(
            photo=photo,
            content_type=userPhoto.content_type if userPhoto is not None else None,
            product_image_url=productImageUrl,
            product_type=productType,
            product_title=productTitle,
        )
        logger.info("tryon_started",
                    photo_bytes=request.size,
                    content_type=request.content_type,
                    product_type=productType,
                    product_image_url=request.product_image_url)
        result = await run_tryon(request, generator)
    except TryOnError as e:
        log = logger.warning if e.status_code < 500 else logger.error
        log("tryon_failed", error=e.message, error_type=type(e).__name__, status=e.status_code)
        return _failure(e.status_code, e.message)
    except Exception as e:
        logger.error("tryon_failed", error=str(e), error_type=type(e).__name__, status=500, exc_info=True)
        return _failure(500, str(e) or TryOnError.default_message)

    logger.info("tryon_completed", processing_time=result.processingTime)
    return result
