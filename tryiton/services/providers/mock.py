from io import BytesIO
from typing import Any, Sequence, Tuple

from google.genai import types
from PIL import Image


class MockProvider:
    """Offline stand-in: returns the inputs composed side by side, shaped like a Gemini response."""

    async def generate(self, prompt: str, images: Sequence[Tuple[bytes, str]]) -> Any:
        opened = [Image.open(BytesIO(data)).convert("RGB") for data, _ in images]
        if not opened:
            return types.GenerateContentResponse(candidates=[])

        # Resize every image to the height of the first one
        target_h = opened[0].height
        resized = []
        for img in opened:
            ratio = target_h / max(1, img.height)
            resized.append(img.resize((max(1, int(img.width * ratio)), target_h)))

        canvas = Image.new("RGB", (sum(i.width for i in resized), target_h), color=(240, 240, 240))
        x = 0
        for img in resized:
            canvas.paste(img, (x, 0))
            x += img.width

        out = BytesIO()
        canvas.save(out, format="JPEG", quality=90)
        part = types.Part.from_bytes(data=out.getvalue(), mime_type="image/jpeg")
        return types.GenerateContentResponse(
            candidates=[types.Candidate(content=types.Content(role="model", parts=[part]))]
        )
