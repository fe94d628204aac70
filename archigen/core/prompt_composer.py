"""Prompt composer: instruction text plus shortcuts and enhancement."""

from typing import Dict, Iterable, Protocol

from ..models.schemas import CatalogEntry
from ..utils.logger import get_logger
from ..utils.errors import ArchiGenError

logger = get_logger(__name__)


class PromptEnhancerClient(Protocol):
    async def enhance_prompt(self, text: str) -> str:
        ...


class PromptComposer:
    """Holds the instruction text; last write wins, no history."""

    def __init__(
        self,
        client: PromptEnhancerClient,
        presets: Iterable[CatalogEntry] = (),
        quick_edits: Iterable[CatalogEntry] = (),
    ):
        """
        Initialize composer.

        Args:
            client: Remote client offering enhance_prompt()
            presets: Style preset shortcuts
            quick_edits: Quick-edit shortcuts
        """
        self.client = client
        self.text = ""
        self.presets: Dict[str, CatalogEntry] = {p.key: p for p in presets}
        self.quick_edits: Dict[str, CatalogEntry] = {q.key: q for q in quick_edits}

    def set_text(self, text: str):
        self.text = text

    def apply_preset(self, key: str) -> str:
        """
        Overwrite the text with a style preset.

        Raises:
            KeyError: Unknown preset key
        """
        self.text = self.presets[key].prompt
        return self.text

    def apply_quick_edit(self, key: str) -> str:
        """
        Overwrite the text with a quick edit.

        Raises:
            KeyError: Unknown quick-edit key
        """
        self.text = self.quick_edits[key].prompt
        return self.text

    async def enhance(self, current_text: str) -> str:
        """
        Ask the remote model to refine the text.

        Never raises because of the remote: on failure the current text is
        returned unchanged. Blank input returns "".
        """
        if not current_text.strip():
            return ""

        try:
            return await self.client.enhance_prompt(current_text)
        except Exception as e:
            logger.warning(
                f"Prompt enhancement failed, keeping original text: {e}",
                extra={"error": str(e), "error_type": type(e).__name__},
                exc_info=not isinstance(e, ArchiGenError)
            )
            return current_text
