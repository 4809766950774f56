from typing import Any, Protocol, Sequence, Tuple


class ImageGenerator(Protocol):
    async def generate(self, prompt: str, images: Sequence[Tuple[bytes, str]]) -> Any:  # returns a GenerateContentResponse-shaped object
        ...
