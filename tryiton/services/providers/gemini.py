import asyncio
from typing import Any, Dict, Sequence, Tuple

import structlog
from google import genai
from google.genai import types

from ...config import settings
from ...errors import GenerationServiceError, MissingCredential


logger = structlog.get_logger("tryiton")

# One client per API key, shared across requests
_clients: Dict[str, Any] = {}


def _client_for(api_key: str) -> Any:
    client = _clients.get(api_key)
    if client is None:
        client = genai.Client(api_key=api_key)
        _clients[api_key] = client
    return client


class GeminiProvider:
    """Calls the Gemini multimodal model with a text instruction and inline images."""

    def __init__(self, model: str | None = None, timeout: float | None = None) -> None:
        self.model = model or settings.gemini_model
        self.timeout = timeout or settings.gemini_timeout_seconds

    async def generate(self, prompt: str, images: Sequence[Tuple[bytes, str]]) -> Any:
        api_key = settings.gemini_api_key
        if not api_key:
            raise MissingCredential()

        client = _client_for(api_key)
        contents: list[Any] = [prompt]
        contents.extend(types.Part.from_bytes(data=data, mime_type=mime) for data, mime in images)
        config = types.GenerateContentConfig(response_modalities=["TEXT", "IMAGE"])

        logger.info("generation_invoked", model=self.model, images=len(images), prompt_chars=len(prompt))
        try:
            return await asyncio.wait_for(
                client.aio.models.generate_content(model=self.model, contents=contents, config=config),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise GenerationServiceError(f"Image generation timed out after {self.timeout:g}s") from e
        except Exception as e:
            logger.error("generation_failed", model=self.model, error=str(e), error_type=type(e).__name__)
            raise GenerationServiceError(str(e) or None) from e
