"""Pytest configuration and shared fixtures."""

import pytest

from archigen.core.image_intake import encode_upload
from archigen.models.schemas import CatalogEntry, EncodedImage
from archigen.providers.gemini import GeminiClient
from archigen.utils.config import Config
from archigen.utils.errors import GenerationError

from .helpers import FakeGemini, GeminiStub, make_png


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def source_image(png_bytes) -> EncodedImage:
    return encode_upload("house.png", "image/png", png_bytes)


@pytest.fixture
def reference_image() -> EncodedImage:
    return encode_upload("style.png", "image/png", make_png(color=(240, 240, 240)))


@pytest.fixture
def config() -> Config:
    return Config(
        GEMINI_API_KEY="test-key",
        GEMINI_BASE_URL="https://gemini.test/v1beta",
        presets=[
            CatalogEntry(key="cyberpunk", label="Cyberpunk", prompt="Cyberpunk aesthetic, neon lighting"),
        ],
        quick_edits=[
            CatalogEntry(key="night-mode", label="Night Mode", prompt="Transform the scene to night time"),
        ],
    )


@pytest.fixture
def fake_gemini() -> FakeGemini:
    return FakeGemini()


@pytest.fixture
def failing_gemini() -> FakeGemini:
    return FakeGemini(error=GenerationError("upstream exploded"))


@pytest.fixture
def gemini_stub() -> GeminiStub:
    return GeminiStub()


@pytest.fixture
async def gemini_client(gemini_stub):
    """GeminiClient wired to the stub transport."""
    client = GeminiClient(
        api_key="test-key",
        base_url="https://gemini.test/v1beta",
        transport=gemini_stub.transport,
    )
    await client.initialize()
    yield client
    await client.close()
