"""A studio session: one user's uploads, prompt, workflow and result view."""

from typing import Optional

from .image_intake import ImageIntake, RawImageFile
from .prompt_composer import PromptComposer
from .orchestrator import TransformOrchestrator
from .result_presenter import ResultPresenter
from ..models.enums import CompareEvent, ImageSlot, WorkflowStatus
from ..models.schemas import EncodedImage, GenerationOutcome, StudioState
from ..providers.gemini import GeminiClient
from ..utils.config import Config


class StudioSession:
    """Wires intake, composer, orchestrator and presenter for one browser tab."""

    def __init__(
        self,
        session_id: str,
        intake: ImageIntake,
        composer: PromptComposer,
        orchestrator: TransformOrchestrator,
        presenter: ResultPresenter,
    ):
        self.session_id = session_id
        self.intake = intake
        self.composer = composer
        self.orchestrator = orchestrator
        self.presenter = presenter

    @classmethod
    def build(cls, session_id: str, client: GeminiClient, config: Config) -> "StudioSession":
        composer = PromptComposer(
            client=client,
            presets=config.presets,
            quick_edits=config.quick_edits,
        )
        return cls(
            session_id=session_id,
            intake=ImageIntake(max_upload_bytes=config.max_upload_bytes),
            composer=composer,
            orchestrator=TransformOrchestrator(client=client, composer=composer),
            presenter=ResultPresenter(download_filename=config.download_filename),
        )

    async def submit_image(self, slot: ImageSlot, upload: RawImageFile) -> EncodedImage:
        return await self.intake.submit(slot, upload)

    def clear_image(self, slot: ImageSlot):
        self.intake.clear(slot)

    def set_prompt(self, text: str):
        self.composer.set_text(text)

    def apply_preset(self, key: str):
        self.composer.apply_preset(key)

    def apply_quick_edit(self, key: str):
        self.composer.apply_quick_edit(key)

    async def enhance(self) -> str:
        return await self.orchestrator.enhance()

    async def generate(self) -> Optional[GenerationOutcome]:
        # A new run always starts on the transformed view
        self.presenter.comparing = False
        return await self.orchestrator.generate(
            self.composer.text,
            self.intake.source,
            self.intake.reference,
        )

    def compare(self, event: CompareEvent):
        self.presenter.handle(event)

    def snapshot(self) -> StudioState:
        status = self.orchestrator.status
        # Result is only rendered in the success state
        outcome = self.orchestrator.outcome if status == WorkflowStatus.SUCCESS else None

        return StudioState(
            session_id=self.session_id,
            status=status,
            prompt=self.composer.text,
            error=self.orchestrator.error,
            source=self.intake.view(ImageSlot.SOURCE),
            reference=self.intake.view(ImageSlot.REFERENCE),
            result=self.presenter.render(outcome, self.intake.source),
            can_generate=self.intake.source is not None and not self.orchestrator.busy,
            can_enhance=bool(self.composer.text.strip())
            and status != WorkflowStatus.ENHANCING_PROMPT,
        )
