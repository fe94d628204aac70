"""Image encoding utilities."""

import base64
from io import BytesIO
from typing import Optional, Tuple
from PIL import Image, UnidentifiedImageError

from .logger import get_logger
from .errors import ImageProcessingError

logger = get_logger(__name__)


def is_image_media_type(media_type: Optional[str]) -> bool:
    """True when the declared media type is an image/* type."""
    return bool(media_type) and media_type.startswith("image/")


def bytes_to_base64(image_bytes: bytes) -> str:
    """Convert raw bytes to a base64 string."""
    return base64.b64encode(image_bytes).decode('utf-8')


def to_data_uri(media_type: str, payload: str) -> str:
    """Build a displayable data URI from a media type and base64 payload."""
    return f"data:{media_type};base64,{payload}"


def split_data_uri(data_uri: str) -> Tuple[str, str]:
    """
    Split a data URI into its metadata prefix and payload.

    The payload is everything after the first comma.

    Raises:
        ImageProcessingError: If there is no comma separator
    """
    header, sep, payload = data_uri.partition(",")
    if not sep:
        raise ImageProcessingError("Malformed data URI: missing ',' separator")
    return header, payload


def get_image_dimensions(image_bytes: bytes) -> Tuple[int, int]:
    """
    Get width and height of an image.

    Raises:
        ImageProcessingError: If image cannot be read
    """
    try:
        with Image.open(BytesIO(image_bytes)) as image:
            return image.size
    except (UnidentifiedImageError, OSError) as e:
        raise ImageProcessingError(f"Failed to read image dimensions: {e}")


def probe_dimensions(image_bytes: bytes) -> Tuple[Optional[int], Optional[int]]:
    """Best-effort dimensions for display; (None, None) if undecodable."""
    try:
        return get_image_dimensions(image_bytes)
    except ImageProcessingError as e:
        logger.warning(
            "Could not read image dimensions",
            extra={"error": str(e), "size_bytes": len(image_bytes)}
        )
        return None, None
