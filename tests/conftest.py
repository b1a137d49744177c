"""Shared test fixtures and configuration."""

import base64
import shutil
import tempfile
from pathlib import Path

import httpx
import pytest

from core.gemini import GeminiClient
from core.retry import RetryPolicy

# =============================================================================
# DIRECTORY FIXTURES
# =============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    yield path
    # Cleanup after test
    if path.exists():
        shutil.rmtree(path)


@pytest.fixture
def temp_output_dir(temp_dir):
    """Create a temporary output directory."""
    output_dir = temp_dir / "output"
    output_dir.mkdir(parents=True)
    return output_dir


# =============================================================================
# FAKE TIME / TRANSPORT
# =============================================================================


class SleepRecorder:
    """Stand-in for asyncio.sleep that records requested delays."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class ScriptedTransport:
    """Replays a list of responses (or exceptions) and records requests."""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.outcomes:
            raise AssertionError(f"Unexpected extra request: {request.url}")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()


@pytest.fixture
def make_client(sleep_recorder):
    """Factory: GeminiClient whose HTTP calls replay `outcomes`."""

    def _make(outcomes, rng=lambda: 0.5, max_attempts=5, **kwargs):
        transport = ScriptedTransport(outcomes)
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(transport))
        policy = RetryPolicy(max_attempts=max_attempts, sleep=sleep_recorder, rng=rng)
        client = GeminiClient(
            api_key="test_api_key",
            retry_policy=policy,
            http_client=http_client,
            **kwargs,
        )
        return client, transport

    return _make


# =============================================================================
# SAMPLE API PAYLOADS
# =============================================================================


def text_response(text: str, finish_reason: str = "STOP") -> httpx.Response:
    """A successful generateContent body with one text candidate."""
    return httpx.Response(
        200,
        json={
            "candidates": [
                {
                    "content": {"role": "model", "parts": [{"text": text}]},
                    "finishReason": finish_reason,
                }
            ]
        },
    )


def error_response(status_code: int, message: str = "boom") -> httpx.Response:
    return httpx.Response(
        status_code, json={"error": {"code": status_code, "message": message}}
    )


def audio_response(pcm: bytes, mime_type: str = "audio/L16;codec=pcm;rate=24000") -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "candidates": [
                {
                    "content": {
                        "parts": [
                            {
                                "inlineData": {
                                    "mimeType": mime_type,
                                    "data": base64.b64encode(pcm).decode("ascii"),
                                }
                            }
                        ]
                    },
                    "finishReason": "STOP",
                }
            ]
        },
    )


def image_response(data: bytes, mime_type: str = "image/png") -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "predictions": [
                {
                    "bytesBase64Encoded": base64.b64encode(data).decode("ascii"),
                    "mimeType": mime_type,
                }
            ]
        },
    )
