import base64
from typing import Any

from ..errors import EmptyGenerationResult


def extract_image(response: Any) -> str:
    """Return the first inline image of the first candidate as base64 text."""
    candidates = getattr(response, "candidates", None)
    if not candidates:
        raise EmptyGenerationResult()
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) if content is not None else None
    if not parts:
        raise EmptyGenerationResult()

    for part in parts:
        inline_data = getattr(part, "inline_data", None)
        data = getattr(inline_data, "data", None) if inline_data is not None else None
        if not data:
            continue
        # The SDK decodes to bytes; raw REST payloads arrive already base64-encoded
        if isinstance(data, str):
            return data
        return base64.b64encode(data).decode("ascii")
    raise EmptyGenerationResult()


def to_data_url(payload: str, mime_type: str = "image/jpeg") -> str:
    return f"data:{mime_type};base64,{payload}"
