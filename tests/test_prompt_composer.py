"""Tests for the prompt composer."""

import pytest

from archigen.core.prompt_composer import PromptComposer
from archigen.models.schemas import CatalogEntry
from archigen.utils.errors import ConfigurationError, EnhancementError


PRESETS = [CatalogEntry(key="industrial-loft", label="Industrial Loft", prompt="Industrial style, exposed red brick")]
QUICK_EDITS = [CatalogEntry(key="remove-people-cars", label="Remove People/Cars", prompt="Remove all people and vehicles")]


@pytest.fixture
def composer(fake_gemini):
    return PromptComposer(fake_gemini, presets=PRESETS, quick_edits=QUICK_EDITS)


class TestShortcuts:

    @pytest.mark.parametrize("prior", ["", "something else entirely", "Industrial style, exposed red brick"])
    def test_preset_overwrites_unconditionally(self, composer, prior):
        composer.set_text(prior)
        assert composer.apply_preset("industrial-loft") == "Industrial style, exposed red brick"
        assert composer.text == "Industrial style, exposed red brick"

    @pytest.mark.parametrize("prior", ["", "make it blue"])
    def test_quick_edit_overwrites_unconditionally(self, composer, prior):
        composer.set_text(prior)
        composer.apply_quick_edit("remove-people-cars")
        assert composer.text == "Remove all people and vehicles"

    def test_unknown_keys(self, composer):
        with pytest.raises(KeyError):
            composer.apply_preset("gothic")
        with pytest.raises(KeyError):
            composer.apply_quick_edit("sunset")

    def test_last_write_wins(self, composer):
        composer.apply_preset("industrial-loft")
        composer.set_text("my own words")
        assert composer.text == "my own words"


class TestEnhance:

    @pytest.mark.asyncio
    async def test_blank_is_noop(self, composer, fake_gemini):
        assert await composer.enhance("   ") == ""
        assert fake_gemini.enhance_calls == []

    @pytest.mark.asyncio
    async def test_returns_refined_text(self, composer, fake_gemini):
        assert await composer.enhance("make it wood") == "Refined prompt"
        assert fake_gemini.enhance_calls == ["make it wood"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        EnhancementError("boom"),
        ConfigurationError("GEMINI_API_KEY is missing."),
    ])
    async def test_failure_returns_original(self, composer, fake_gemini, error):
        fake_gemini.enhance_error = error
        assert await composer.enhance("make it wood") == "make it wood"

    @pytest.mark.asyncio
    async def test_unexpected_exception_returns_original(self, composer, fake_gemini):
        fake_gemini.enhance_error = RuntimeError("event loop closed")
        assert await composer.enhance("make it wood") == "make it wood"
        assert composer.text == ""
