"""Data models and schemas for ArchiGen."""

from .schemas import (
    EncodedImage,
    GenerationOutcome,
    CatalogEntry,
    Catalog,
    DownloadAction,
    StudioState,
    PromptUpdate,
    CompareRequest,
)
from .enums import (
    WorkflowStatus,
    ImageSlot,
    CompareEvent,
    ResultLabel,
)

__all__ = [
    "EncodedImage",
    "GenerationOutcome",
    "CatalogEntry",
    "Catalog",
    "DownloadAction",
    "StudioState",
    "PromptUpdate",
    "CompareRequest",
    "WorkflowStatus",
    "ImageSlot",
    "CompareEvent",
    "ResultLabel",
]
