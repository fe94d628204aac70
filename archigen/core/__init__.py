"""Core studio components."""

from .image_intake import ImageIntake
from .prompt_composer import PromptComposer
from .orchestrator import TransformOrchestrator
from .result_presenter import ResultPresenter
from .session import StudioSession

__all__ = [
    "ImageIntake",
    "PromptComposer",
    "TransformOrchestrator",
    "ResultPresenter",
    "StudioSession",
]
