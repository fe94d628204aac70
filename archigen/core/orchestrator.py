"""Transform orchestrator: owns the workflow status and the current outcome."""

from typing import Optional, Protocol

from .prompt_composer import PromptComposer
from ..models.enums import WorkflowStatus
from ..models.schemas import EncodedImage, GenerationOutcome
from ..utils.logger import get_logger
from ..utils.errors import (
    ArchiGenError,
    SourceImageRequired,
    PromptOrReferenceRequired,
)

logger = get_logger(__name__)

GENERIC_FAILURE_MESSAGE = "Failed to generate transformation."


class TransformClient(Protocol):
    async def transform(
        self,
        prompt: str,
        source_image: EncodedImage,
        reference_image: Optional[EncodedImage] = None,
    ) -> GenerationOutcome:
        ...


class TransformOrchestrator:
    """
    Sequences validation, the remote transform and the status transitions.

    Status moves Idle -> EnhancingPrompt -> Idle for enhancement and
    -> Generating -> Success | Error for generation. A new generate()
    leaves Success/Error by re-entering Generating.

    Every generate() takes a fresh request token; a call that settles after
    a newer one was issued is discarded so the latest request always decides
    the final status.
    """

    def __init__(self, client: TransformClient, composer: PromptComposer):
        """
        Initialize orchestrator.

        Args:
            client: Remote client offering transform()
            composer: Prompt composer whose text enhancement rewrites
        """
        self.client = client
        self.composer = composer
        self.status = WorkflowStatus.IDLE
        self.outcome: Optional[GenerationOutcome] = None
        self.error: Optional[str] = None
        self._latest_request = 0

    @property
    def busy(self) -> bool:
        return self.status in (WorkflowStatus.GENERATING, WorkflowStatus.ENHANCING_PROMPT)

    def validate(
        self,
        prompt: str,
        source_image: Optional[EncodedImage],
        reference_image: Optional[EncodedImage],
    ):
        """
        Check generate() preconditions.

        Raises:
            SourceImageRequired: No source image
            PromptOrReferenceRequired: Blank prompt and no reference image
        """
        if source_image is None:
            raise SourceImageRequired()
        if not (prompt or "").strip() and reference_image is None:
            raise PromptOrReferenceRequired()

    async def generate(
        self,
        prompt: str,
        source_image: Optional[EncodedImage],
        reference_image: Optional[EncodedImage] = None,
    ) -> Optional[GenerationOutcome]:
        """
        Run one transformation.

        Remote failures do not raise: they land in ``error`` with status
        Error. Validation failures raise and leave the status untouched.

        Returns:
            The outcome if this call is still the latest one and succeeded,
            otherwise None

        Raises:
            InputValidationError: A precondition failed
        """
        try:
            self.validate(prompt, source_image, reference_image)
        except ArchiGenError as e:
            self.error = e.message
            logger.info(
                f"Generate rejected: {e.message}",
                extra={"status": self.status.value}
            )
            raise

        self._latest_request += 1
        token = self._latest_request

        self.error = None
        self.outcome = None
        self.status = WorkflowStatus.GENERATING

        logger.info(
            "Generation started",
            extra={
                "request_token": token,
                "with_reference": reference_image is not None,
                "prompt_length": len(prompt or ""),
            }
        )

        try:
            outcome = await self.client.transform(prompt or "", source_image, reference_image)
        except Exception as e:
            if self._is_stale(token):
                return None
            message = e.message if isinstance(e, ArchiGenError) else ""
            self.error = message or str(e) or GENERIC_FAILURE_MESSAGE
            self.status = WorkflowStatus.ERROR
            logger.error(
                f"Generation failed: {self.error}",
                extra={"request_token": token, "error_type": type(e).__name__},
                exc_info=not isinstance(e, ArchiGenError)
            )
            return None

        if self._is_stale(token):
            return None

        self.outcome = outcome
        self.status = WorkflowStatus.SUCCESS
        logger.info(
            "Generation succeeded",
            extra={"request_token": token, "has_note": outcome.assistant_note is not None}
        )
        return outcome

    async def enhance(self) -> str:
        """
        Enhance the composer's text in place.

        Blank text and enhancement during a generation are no-ops. The
        remote failing never surfaces; the text simply stays as it was.

        Returns:
            The composer's text after enhancement
        """
        current = self.composer.text
        if not current.strip():
            return ""
        if self.status == WorkflowStatus.GENERATING:
            logger.info("Enhancement skipped while generating")
            return current

        self.status = WorkflowStatus.ENHANCING_PROMPT
        try:
            refined = await self.composer.enhance(current)
        finally:
            # A generate() issued meanwhile owns the status now
            if self.status == WorkflowStatus.ENHANCING_PROMPT:
                self.status = WorkflowStatus.IDLE

        if refined:
            self.composer.set_text(refined)
        return self.composer.text

    def _is_stale(self, token: int) -> bool:
        if token != self._latest_request:
            logger.info(
                "Discarding stale generation result",
                extra={"request_token": token, "latest_token": self._latest_request}
            )
            return True
        return False
