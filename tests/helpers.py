"""Test doubles and canned Gemini payloads."""

import asyncio
import json
from io import BytesIO
from typing import Any, List, Optional

import httpx
from PIL import Image

from archigen.models.schemas import GenerationOutcome


def make_png(width: int = 4, height: int = 3, color=(200, 30, 30)) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


class FakeUpload:
    """Stands in for FastAPI's UploadFile."""

    def __init__(
        self,
        data: bytes,
        content_type: Optional[str] = "image/png",
        filename: str = "house.png",
        gate: Optional[asyncio.Event] = None,
    ):
        self.data = data
        self.content_type = content_type
        self.filename = filename
        self.gate = gate
        self.reads = 0

    async def read(self) -> bytes:
        self.reads += 1
        if self.gate is not None:
            await self.gate.wait()
        return self.data


class FakeGemini:
    """In-memory stand-in for GeminiClient."""

    def __init__(self, outcome: Optional[GenerationOutcome] = None, error: Exception = None):
        self.outcome = outcome or GenerationOutcome(
            result_image_uri="data:image/png;base64,RESULT",
            assistant_note=None,
        )
        self.error = error
        self.enhance_error: Optional[Exception] = None
        self.enhanced_text = "Refined prompt"
        self.transform_calls: List[tuple] = []
        self.enhance_calls: List[str] = []

    async def enhance_prompt(self, text: str) -> str:
        self.enhance_calls.append(text)
        if self.enhance_error is not None:
            raise self.enhance_error
        return self.enhanced_text

    async def transform(self, prompt, source_image, reference_image=None):
        self.transform_calls.append((prompt, source_image, reference_image))
        if self.error is not None:
            raise self.error
        return self.outcome


class GeminiStub:
    """Records requests and replays canned generateContent responses."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.responses: List[httpx.Response] = []

    def queue(self, body: Any = None, status_code: int = 200, headers: dict = None):
        self.responses.append(httpx.Response(status_code, json=body, headers=headers))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            return httpx.Response(500, json={"error": {"message": "no canned response"}})
        return self.responses.pop(0)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def last_payload(self) -> dict:
        return json.loads(self.requests[-1].content)


def image_response(data: str = "XYZ", mime_type: str = "image/png", text: str = None) -> dict:
    parts = []
    if text is not None:
        parts.append({"text": text})
    parts.append({"inlineData": {"mimeType": mime_type, "data": data}})
    return {"candidates": [{"content": {"role": "model", "parts": parts}}]}


def text_response(text: str) -> dict:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


