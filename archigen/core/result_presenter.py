"""Result presenter: before/after comparison and client-side download."""

from typing import Optional

from ..models.enums import CompareEvent, ResultLabel
from ..models.schemas import DownloadAction, EncodedImage, GenerationOutcome, ResultView


class ResultPresenter:
    """Decides what the result canvas shows."""

    def __init__(self, download_filename: str = "archigen-transform.png"):
        self.download_filename = download_filename
        self.comparing = False

    def handle(self, event: CompareEvent) -> bool:
        """Apply a press/release interaction; returns the new comparing flag."""
        self.comparing = event.starts_compare
        return self.comparing

    def download(self, outcome: Optional[GenerationOutcome]) -> Optional[DownloadAction]:
        """Save instruction for the browser, or None when there is nothing to save."""
        if outcome is None or not outcome.result_image_uri:
            return None
        return DownloadAction(
            filename=self.download_filename,
            href=outcome.result_image_uri,
        )

    def render(
        self,
        outcome: Optional[GenerationOutcome],
        source_image: Optional[EncodedImage],
    ) -> Optional[ResultView]:
        if outcome is None or not outcome.result_image_uri:
            return None

        # Without a source there is nothing to compare against
        showing_original = self.comparing and source_image is not None

        return ResultView(
            display_uri=source_image.preview_uri if showing_original else outcome.result_image_uri,
            label=ResultLabel.ORIGINAL if showing_original else ResultLabel.TRANSFORMED,
            comparing=showing_original,
            assistant_note=outcome.assistant_note,
            download=self.download(outcome),
        )
