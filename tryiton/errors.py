class TryOnError(Exception):
    """Base for every failure the try-on pipeline reports to the caller."""

    status_code: int = 500
    default_message: str = "An unexpected error occurred during processing"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


# Client input errors (400)

class MissingParameter(TryOnError):
    status_code = 400
    default_message = "Missing required parameters"


class PayloadTooLarge(TryOnError):
    status_code = 400
    default_message = "File size too large. Maximum 5MB allowed."


class UnsupportedMediaType(TryOnError):
    status_code = 400
    default_message = "Invalid file type. Only JPEG, PNG and WebP are allowed."


# Operational errors (500)

class UpstreamFetchError(TryOnError):
    default_message = "Failed to download product image"


class ImageDecodeError(TryOnError):
    default_message = "Could not read image data"


class MissingCredential(TryOnError):
    default_message = "GEMINI_API_KEY not configured"


class GenerationServiceError(TryOnError):
    default_message = "Image generation service failed"


class EmptyGenerationResult(TryOnError):
    default_message = "No image generated by AI"
