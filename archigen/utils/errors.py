"""Custom exception classes for the ArchiGen studio."""


class ArchiGenError(Exception):
    """Base exception for all studio errors."""

    def __init__(self, message: str = ""):
        self.message = message
        super().__init__(message)


class ConfigurationError(ArchiGenError):
    """Configuration or initialization errors."""
    pass


class InputValidationError(ArchiGenError):
    """User input does not satisfy a workflow precondition."""
    pass


class SourceImageRequired(InputValidationError):
    """Generation requested without a source image."""

    def __init__(self):
        super().__init__(
            "Source image required. Please upload a source image of the house/model."
        )


class PromptOrReferenceRequired(InputValidationError):
    """Generation requested with neither an instruction nor a reference image."""

    def __init__(self):
        super().__init__(
            "Prompt or reference required. "
            "Please provide a prompt or a reference image (or both)."
        )


class UnsupportedMediaTypeError(ArchiGenError):
    """Upload declared a media type that is not an image."""

    def __init__(self, media_type: str = None):
        self.media_type = media_type
        super().__init__("Please upload an image file.")


class UploadTooLargeError(ArchiGenError):
    """Upload exceeded the configured size limit."""

    def __init__(self, size_bytes: int, limit_bytes: int):
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
        super().__init__(
            f"Image is too large ({size_bytes // 1024} KB). "
            f"Maximum allowed size is {limit_bytes // 1024} KB."
        )


class APIError(ArchiGenError):
    """Base class for API-related errors."""
    pass


class ProviderError(APIError):
    """Generic provider API error with status code."""

    def __init__(self, provider: str, message: str, status_code: int = None):
        self.provider = provider
        self.status_code = status_code
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.provider} error: {self.message}"


class AuthenticationError(ProviderError):
    """API authentication failed."""

    def __init__(self, provider: str, message: str = "Authentication failed"):
        super().__init__(provider, message, 401)


class RateLimitError(ProviderError):
    """API rate limit exceeded."""

    def __init__(self, provider: str, retry_after: int = None, message: str = None):
        self.retry_after = retry_after
        message = message or "Rate limit exceeded"
        if retry_after:
            message += f", retry after {retry_after}s"
        super().__init__(provider, message, 429)


class GenerationError(ArchiGenError):
    """Errors during image transformation."""
    pass


class NoImageGeneratedError(GenerationError):
    """The model answered without any image part."""

    def __init__(self):
        super().__init__("No image generated.")


class ContentRefusedError(GenerationError):
    """The model answered with text only, most likely a refusal."""

    def __init__(self, model_text: str):
        self.model_text = model_text
        super().__init__(
            "The model returned text but no image. "
            f"It might have refused the request: {model_text}"
        )


class EnhancementError(ArchiGenError):
    """Errors during prompt enhancement."""
    pass


class SessionNotFound(ArchiGenError):
    """Studio session is unknown or expired."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session not found or expired: {session_id}")


class ImageProcessingError(ArchiGenError):
    """Error reading image data."""
    pass
