"""Pydantic schemas for data validation."""

from typing import List, Optional
from pydantic import BaseModel, Field
from datetime import datetime

from .enums import WorkflowStatus, ImageSlot, CompareEvent, ResultLabel


class EncodedImage(BaseModel):
    """An accepted upload: displayable preview plus transfer-ready payload."""
    file_name: str
    preview_uri: str
    encoded_payload: str
    media_type: str
    size_bytes: int
    width: Optional[int] = None
    height: Optional[int] = None
    received_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        frozen = True


class GenerationOutcome(BaseModel):
    """Successful result of a transform call."""
    result_image_uri: Optional[str] = None
    assistant_note: Optional[str] = None

    class Config:
        frozen = True


class CatalogEntry(BaseModel):
    """A preset or quick-edit shortcut."""
    key: str
    label: str
    prompt: str


class DownloadAction(BaseModel):
    """Client-side save instruction for the current result."""
    filename: str
    href: str


class SlotView(BaseModel):
    """What the page needs to render one upload slot."""
    slot: ImageSlot
    image: Optional[EncodedImage] = None
    input_key: int = 0


class ResultView(BaseModel):
    """Rendered state of the result canvas."""
    display_uri: str
    label: ResultLabel
    comparing: bool
    assistant_note: Optional[str] = None
    download: Optional[DownloadAction] = None


class StudioState(BaseModel):
    """Full snapshot of a studio session, returned by every API call."""
    session_id: str
    status: WorkflowStatus
    prompt: str
    error: Optional[str] = None
    source: SlotView
    reference: SlotView
    result: Optional[ResultView] = None
    can_generate: bool
    can_enhance: bool


class Catalog(BaseModel):
    """Static shortcuts and labels for the page."""
    presets: List[CatalogEntry] = Field(default_factory=list)
    quick_edits: List[CatalogEntry] = Field(default_factory=list)
    model_label: str
    download_filename: str


class PromptUpdate(BaseModel):
    """Body for a free-text prompt overwrite."""
    text: str = ""


class CompareRequest(BaseModel):
    """Body for a compare interaction event."""
    event: CompareEvent


class SessionCreated(BaseModel):
    """Response for a freshly created session."""
    session_id: str
    state: StudioState
