"""Gemini REST client for prompt enhancement and image transformation."""

from typing import Any, Dict, List, Optional
import httpx

from .base import BaseProvider
from ..models.schemas import EncodedImage, GenerationOutcome
from ..utils.config import load_prompt_template
from ..utils.logger import get_logger
from ..utils.images import to_data_uri
from ..utils.errors import (
    ArchiGenError,
    ProviderError,
    GenerationError,
    NoImageGeneratedError,
    ContentRefusedError,
    EnhancementError,
)

logger = get_logger(__name__)

MISSING_KEY_MESSAGE = "GEMINI_API_KEY is missing. Please check your environment configuration."
GENERIC_FAILURE_MESSAGE = "Failed to generate transformation."
DEFAULT_REFERENCE_INSTRUCTION = "Apply the style from the reference image."


def build_enhance_instruction(text: str) -> str:
    """Instruction asking the text model to rewrite a request as a render prompt."""
    return load_prompt_template("enhance").format(request=text)


def build_transform_instruction(prompt: str, has_reference: bool) -> str:
    """
    Compose the instruction that accompanies the image parts.

    With a reference image the house is re-skinned to match it and the
    user's text becomes an extra directive; otherwise the text is the edit.
    """
    if has_reference:
        instruction = prompt if prompt and prompt.strip() else DEFAULT_REFERENCE_INSTRUCTION
        return load_prompt_template("transform_reference").format(instruction=instruction)
    return load_prompt_template("transform_edit").format(instruction=prompt)


def inline_image_part(image: EncodedImage) -> Dict[str, Any]:
    """Request part carrying an uploaded image."""
    return {
        "inlineData": {
            "mimeType": image.media_type,
            "data": image.encoded_payload,
        }
    }


def _candidate_parts(data: Any) -> List[dict]:
    """
    Content parts of the first candidate.

    Anything not shaped like a generateContent response yields no parts;
    non-object parts are dropped.
    """
    if not isinstance(data, dict):
        return []
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return []
    candidate = candidates[0]
    if not isinstance(candidate, dict):
        return []
    content = candidate.get("content")
    if not isinstance(content, dict):
        return []
    parts = content.get("parts")
    if not isinstance(parts, list):
        return []
    return [part for part in parts if isinstance(part, dict)]


def parse_transform_response(data: Any) -> GenerationOutcome:
    """
    Turn a generateContent response into a GenerationOutcome.

    The first inline image wins; the last text part becomes the note.

    Raises:
        ContentRefusedError: Text came back but no image
        NoImageGeneratedError: Nothing usable came back
    """
    image_uri: Optional[str] = None
    note: Optional[str] = None
    image_parts = 0

    for part in _candidate_parts(data):
        inline = part.get("inlineData") or part.get("inline_data")
        if isinstance(inline, dict) and isinstance(inline.get("data"), str) and inline["data"]:
            image_parts += 1
            if image_uri is None:
                media_type = inline.get("mimeType") or inline.get("mime_type") or "image/png"
                image_uri = to_data_uri(media_type, inline["data"])
        elif isinstance(part.get("text"), str) and part["text"]:
            note = part["text"]

    if image_parts > 1:
        logger.warning(
            "Multiple images returned, keeping the first",
            extra={"image_parts": image_parts}
        )

    if image_uri is None:
        if note:
            raise ContentRefusedError(note)
        feedback = data.get("promptFeedback") if isinstance(data, dict) else None
        logger.warning(
            "Response contained no image",
            extra={"block_reason": feedback.get("blockReason") if isinstance(feedback, dict) else None}
        )
        raise NoImageGeneratedError()

    return GenerationOutcome(result_image_uri=image_uri, assistant_note=note)


class GeminiClient(BaseProvider):
    """Client for the Gemini generateContent API."""

    provider_name = "gemini"
    missing_key_message = MISSING_KEY_MESSAGE

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        enhancement_model: str = "gemini-2.5-flash",
        transform_model: str = "gemini-2.5-flash-image",
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Gemini client.

        Args:
            api_key: Gemini API key; a missing key fails each call, not startup
            base_url: REST base URL
            enhancement_model: Text model used to rewrite prompts
            transform_model: Image model used for transformations
            timeout: Request timeout in seconds
            transport: Optional httpx transport
        """
        super().__init__(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )
        self.enhancement_model = enhancement_model
        self.transform_model = transform_model

    def _get_default_headers(self) -> dict:
        """Get default headers for Gemini requests."""
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["x-goog-api-key"] = self.api_key
        return headers

    def _endpoint(self, model: str) -> str:
        return f"{self.base_url}/models/{model}:generateContent"

    async def enhance_prompt(self, text: str) -> str:
        """
        Rewrite a free-text request into a concise render prompt.

        Returns:
            The model's trimmed text, the original text if the model said
            nothing, or "" for a blank request

        Raises:
            ConfigurationError: If the API key is missing
            EnhancementError: If the remote call fails
        """
        self._require_credential()
        if not text.strip():
            return ""

        self._ensure_client()

        payload = {
            "contents": [
                {"role": "user", "parts": [{"text": build_enhance_instruction(text)}]}
            ]
        }

        try:
            response = await self.client.post(
                self._endpoint(self.enhancement_model),
                json=payload,
            )
            self._handle_response_errors(response)
            enhanced = "".join(
                part["text"] for part in _candidate_parts(response.json())
                if isinstance(part.get("text"), str)
            ).strip()
        except ProviderError as e:
            raise EnhancementError(e.message) from e
        except (httpx.HTTPError, ValueError) as e:
            raise EnhancementError(str(e) or "Prompt enhancement failed.") from e

        logger.info(
            "Enhancement complete",
            extra={
                "model": self.enhancement_model,
                "original_length": len(text),
                "enhanced_length": len(enhanced),
            }
        )

        return enhanced or text

    async def transform(
        self,
        prompt: str,
        source_image: EncodedImage,
        reference_image: Optional[EncodedImage] = None,
    ) -> GenerationOutcome:
        """
        Transform the source photo according to the prompt and/or reference.

        Returns:
            GenerationOutcome with a displayable image URI

        Raises:
            ConfigurationError: If the API key is missing
            GenerationError: If the call fails or yields no image
        """
        self._require_credential()
        self._ensure_client()

        parts = [inline_image_part(source_image)]
        if reference_image is not None:
            parts.append(inline_image_part(reference_image))
        parts.append({"text": build_transform_instruction(prompt, reference_image is not None)})

        payload = {
            "contents": [{"role": "user", "parts": parts}],
            "generationConfig": {"responseModalities": ["TEXT", "IMAGE"]},
        }

        logger.info(
            f"Submitting transform to {self.transform_model}",
            extra={
                "model": self.transform_model,
                "with_reference": reference_image is not None,
                "prompt": prompt[:100],
                "source_bytes": source_image.size_bytes,
            }
        )

        try:
            response = await self.client.post(
                self._endpoint(self.transform_model),
                json=payload,
            )
            self._handle_response_errors(response)
            outcome = parse_transform_response(response.json())

        except ArchiGenError as e:
            logger.error(
                f"Gemini transform failed: {e}",
                extra={"model": self.transform_model, "error": str(e)}
            )
            if isinstance(e, GenerationError):
                raise
            raise GenerationError(e.message or GENERIC_FAILURE_MESSAGE) from e

        except (httpx.HTTPError, ValueError) as e:
            logger.error(
                f"Gemini transport failure: {e}",
                extra={"model": self.transform_model, "error": str(e)},
                exc_info=True
            )
            raise GenerationError(str(e) or GENERIC_FAILURE_MESSAGE) from e

        except (AttributeError, TypeError, KeyError) as e:
            logger.error(
                f"Unreadable Gemini response: {e}",
                extra={"model": self.transform_model, "error": str(e)},
                exc_info=True
            )
            raise GenerationError(GENERIC_FAILURE_MESSAGE) from e

        logger.info(
            "Transform complete",
            extra={
                "model": self.transform_model,
                "has_note": outcome.assistant_note is not None,
            }
        )
        return outcome
