"""Studio routes: sessions, uploads, prompt editing, generation, comparison."""

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile

from ..core.session import StudioSession
from ..models.enums import ImageSlot
from ..models.schemas import (
    Catalog,
    CompareRequest,
    PromptUpdate,
    SessionCreated,
    StudioState,
)

router = APIRouter()


def get_session(session_id: str, request: Request) -> StudioSession:
    """Resolve a live session (SessionNotFound maps to 404)."""
    return request.app.state.sessions.get(session_id)


@router.get("/catalog", response_model=Catalog)
async def catalog(request: Request):
    """Presets, quick edits and labels for the page."""
    return request.app.state.config.catalog()


@router.post("/sessions", response_model=SessionCreated, status_code=201)
async def create_session(request: Request):
    session = request.app.state.sessions.create()
    return SessionCreated(session_id=session.session_id, state=session.snapshot())


@router.get("/sessions/{session_id}", response_model=StudioState)
async def read_session(session: StudioSession = Depends(get_session)):
    return session.snapshot()


@router.delete("/sessions/{session_id}", status_code=204)
async def delete_session(session_id: str, request: Request):
    request.app.state.sessions.delete(session_id)


@router.put("/sessions/{session_id}/images/{slot}", response_model=StudioState)
async def upload_image(
    slot: ImageSlot,
    file: UploadFile = File(...),
    session: StudioSession = Depends(get_session),
):
    """Picker and drag-and-drop uploads both land here."""
    await session.submit_image(slot, file)
    return session.snapshot()


@router.delete("/sessions/{session_id}/images/{slot}", response_model=StudioState)
async def clear_image(slot: ImageSlot, session: StudioSession = Depends(get_session)):
    session.clear_image(slot)
    return session.snapshot()


@router.put("/sessions/{session_id}/prompt", response_model=StudioState)
async def set_prompt(body: PromptUpdate, session: StudioSession = Depends(get_session)):
    session.set_prompt(body.text)
    return session.snapshot()


@router.post("/sessions/{session_id}/prompt/presets/{key}", response_model=StudioState)
async def apply_preset(key: str, session: StudioSession = Depends(get_session)):
    try:
        session.apply_preset(key)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown preset: {key}")
    return session.snapshot()


@router.post("/sessions/{session_id}/prompt/quick-edits/{key}", response_model=StudioState)
async def apply_quick_edit(key: str, session: StudioSession = Depends(get_session)):
    try:
        session.apply_quick_edit(key)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown quick edit: {key}")
    return session.snapshot()


@router.post("/sessions/{session_id}/prompt/enhance", response_model=StudioState)
async def enhance_prompt(session: StudioSession = Depends(get_session)):
    await session.enhance()
    return session.snapshot()


@router.post("/sessions/{session_id}/generate", response_model=StudioState)
async def generate(session: StudioSession = Depends(get_session)):
    """Remote failures come back as status 'error'; bad input is a 400."""
    await session.generate()
    return session.snapshot()


@router.post("/sessions/{session_id}/compare", response_model=StudioState)
async def compare(body: CompareRequest, session: StudioSession = Depends(get_session)):
    session.compare(body.event)
    return session.snapshot()
