from dataclasses import dataclass

from ..config import settings
from ..errors import MissingParameter, PayloadTooLarge, UnsupportedMediaType


ALLOWED_MIME_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/webp"})


@dataclass(frozen=True)
class TryOnRequest:
    photo: bytes
    content_type: str
    product_image_url: str
    product_type: str | None = None
    product_title: str | None = None

    @property
    def size(self) -> int:
        return len(self.photo)


def validate_request(
    photo: bytes | None,
    content_type: str | None,
    product_image_url: str | None,
    product_type: str | None = None,
    product_title: str | None = None,
    max_bytes: int | None = None,
) -> TryOnRequest:
    """Check presence, size and declared type of the upload.

    Raises MissingParameter, PayloadTooLarge or UnsupportedMediaType, in that order.
    """
    if not photo or not product_image_url or not product_image_url.strip():
        raise MissingParameter()

    limit = max_bytes if max_bytes is not None else settings.max_upload_bytes
    if len(photo) > limit:
        raise PayloadTooLarge()

    mime = (content_type or "").split(";")[0].strip().lower()
    if mime not in ALLOWED_MIME_TYPES:
        raise UnsupportedMediaType()

    return TryOnRequest(
        photo=photo,
        content_type=mime,
        product_image_url=product_image_url.strip(),
        product_type=product_type,
        product_title=product_title,
    )
