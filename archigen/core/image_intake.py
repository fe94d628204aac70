"""Image intake: validates uploads and encodes them for display and transfer."""

from typing import Dict, Optional, Protocol

from ..models.enums import ImageSlot
from ..models.schemas import EncodedImage, SlotView
from ..utils.images import (
    bytes_to_base64,
    is_image_media_type,
    probe_dimensions,
    split_data_uri,
    to_data_uri,
)
from ..utils.logger import get_logger
from ..utils.errors import UnsupportedMediaTypeError, UploadTooLargeError

logger = get_logger(__name__)


class RawImageFile(Protocol):
    """What intake needs from an upload (FastAPI's UploadFile fits)."""

    filename: Optional[str]
    content_type: Optional[str]

    async def read(self) -> bytes:
        ...


def encode_upload(file_name: str, media_type: str, data: bytes) -> EncodedImage:
    """Encode raw bytes into a preview data URI and a bare base64 payload."""
    preview_uri = to_data_uri(media_type, bytes_to_base64(data))
    _, payload = split_data_uri(preview_uri)
    width, height = probe_dimensions(data)

    return EncodedImage(
        file_name=file_name,
        preview_uri=preview_uri,
        encoded_payload=payload,
        media_type=media_type,
        size_bytes=len(data),
        width=width,
        height=height,
    )


class ImageIntake:
    """Owns the source and reference upload slots of one session."""

    def __init__(self, max_upload_bytes: Optional[int] = None):
        """
        Initialize intake.

        Args:
            max_upload_bytes: Reject larger uploads (None for no limit)
        """
        self.max_upload_bytes = max_upload_bytes
        self._slots: Dict[ImageSlot, Optional[EncodedImage]] = {
            slot: None for slot in ImageSlot
        }
        # Bumped on clear() so the page re-mounts its file input
        self._input_keys: Dict[ImageSlot, int] = {slot: 0 for slot in ImageSlot}

    def get(self, slot: ImageSlot) -> Optional[EncodedImage]:
        return self._slots[slot]

    @property
    def source(self) -> Optional[EncodedImage]:
        return self._slots[ImageSlot.SOURCE]

    @property
    def reference(self) -> Optional[EncodedImage]:
        return self._slots[ImageSlot.REFERENCE]

    async def submit(self, slot: ImageSlot, upload: RawImageFile) -> EncodedImage:
        """
        Accept an upload into a slot.

        Overlapping submits are not queued; whichever read finishes last
        is what the slot holds.

        Raises:
            UnsupportedMediaTypeError: Declared type is not image/*
            UploadTooLargeError: Upload exceeds the size limit
        """
        media_type = upload.content_type
        if not is_image_media_type(media_type):
            logger.info(
                "Upload rejected: not an image",
                extra={"slot": slot.value, "media_type": media_type}
            )
            raise UnsupportedMediaTypeError(media_type)

        data = await upload.read()

        if self.max_upload_bytes is not None and len(data) > self.max_upload_bytes:
            raise UploadTooLargeError(len(data), self.max_upload_bytes)

        image = encode_upload(upload.filename or "upload", media_type, data)
        self._slots[slot] = image

        logger.info(
            f"Image accepted into {slot.value}",
            extra={
                "slot": slot.value,
                "media_type": media_type,
                "size_bytes": image.size_bytes,
                "width": image.width,
                "height": image.height,
            }
        )
        return image

    def clear(self, slot: ImageSlot):
        """Empty a slot and reset its file input so the same file can be re-picked."""
        self._slots[slot] = None
        self._input_keys[slot] += 1
        logger.info(f"Slot {slot.value} cleared", extra={"slot": slot.value})

    def view(self, slot: ImageSlot) -> SlotView:
        return SlotView(
            slot=slot,
            image=self._slots[slot],
            input_key=self._input_keys[slot],
        )
