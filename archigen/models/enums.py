"""Enumerations for the ArchiGen studio."""

from enum import Enum


class WorkflowStatus(str, Enum):
    """Stage of the transform workflow for one session."""
    IDLE = "idle"
    ENHANCING_PROMPT = "enhancing_prompt"
    GENERATING = "generating"
    SUCCESS = "success"
    ERROR = "error"


class ImageSlot(str, Enum):
    """Upload slots owned by the image intake."""
    SOURCE = "source"
    REFERENCE = "reference"


class CompareEvent(str, Enum):
    """Interaction events driving the press-and-hold comparison."""
    POINTER_DOWN = "pointerdown"
    POINTER_UP = "pointerup"
    POINTER_LEAVE = "pointerleave"
    TOUCH_START = "touchstart"
    TOUCH_END = "touchend"

    @property
    def starts_compare(self) -> bool:
        return self in (CompareEvent.POINTER_DOWN, CompareEvent.TOUCH_START)


class ResultLabel(str, Enum):
    """Badge shown over the result canvas."""
    TRANSFORMED = "TRANSFORMED"
    ORIGINAL = "ORIGINAL"
