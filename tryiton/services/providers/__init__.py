from .base import ImageGenerator
from .gemini import GeminiProvider
from .mock import MockProvider
from ...config import settings


def get_provider(name: str | None = None) -> ImageGenerator:
    name = (name or settings.tryon_provider or "gemini").lower()
    if name == "mock":
        return MockProvider()
    return GeminiProvider()
