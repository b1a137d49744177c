"""Tests for core.gemini module."""

import asyncio
import base64
import json
from types import SimpleNamespace

import httpx
import pytest

from conftest import audio_response, error_response, image_response, text_response
from core.errors import (
    ConfigurationError,
    ContentBlockedError,
    MalformedResponseError,
    RetriesExhaustedError,
    StructuredOutputError,
    TerminalClientError,
    TransientNetworkError,
)
from core.gemini import TRUNCATION_NOTICE, GeminiClient
from core.wav import decode_wav


class TestClientLifecycle:
    """Construction and lifecycle of GeminiClient."""

    def test_missing_api_key_raises(self):
        with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
            GeminiClient(api_key="")

    def test_from_settings(self):
        app_settings = SimpleNamespace(
            GEMINI_API_KEY="k",
            GEMINI_API_BASE_URL="https://example.test/v1beta/",
            TEXT_MODEL="text-model",
            VISION_MODEL="vision-model",
            IMAGE_MODEL="image-model",
            TTS_MODEL="tts-model",
            DEFAULT_VOICE="Puck",
            DEFAULT_SAMPLE_RATE=16000,
            REQUEST_TIMEOUT_SECONDS=5.0,
            MAX_RETRIES=3,
            RETRY_BASE_DELAY_MS=500,
            RETRY_JITTER_MS=250,
        )
        client = GeminiClient.from_settings(app_settings)
        try:
            assert client.base_url == "https://example.test/v1beta"
            assert client.text_model == "text-model"
            assert client.default_voice == "Puck"
            assert client.retry_policy.max_attempts == 3
            assert client.retry_policy.base_delay_ms == 500
            assert client.retry_policy.jitter_ms == 250
        finally:
            asyncio.run(client.aclose())

    def test_injected_http_client_not_closed(self, make_client):
        client, _ = make_client([])
        asyncio.run(client.aclose())
        assert not client._http.is_closed

    def test_owned_http_client_closed_on_exit(self):
        async def scenario():
            async with GeminiClient(api_key="k") as client:
                pass
            return client

        client = asyncio.run(scenario())
        assert client._http.is_closed


class TestGenerateText:
    """Tests for generate_text."""

    def test_success_returns_text(self, make_client):
        client, transport = make_client([text_response("Hello from Gemini")])
        assert asyncio.run(client.generate_text("Say hello")) == "Hello from Gemini"

        request = transport.requests[0]
        assert request.method == "POST"
        assert request.url.path.endswith("/models/gemini-2.5-flash-preview-05-20:generateContent")
        assert request.url.params["key"] == "test_api_key"
        body = json.loads(request.content)
        assert body["contents"][0]["parts"][0]["text"] == "Say hello"
        assert body["generationConfig"]["maxOutputTokens"] == 8192
        assert "responseMimeType" not in body["generationConfig"]

    def test_429_four_times_then_success(self, make_client, sleep_recorder):
        client, transport = make_client(
            [error_response(429) for _ in range(4)] + [text_response("fifth")]
        )
        assert asyncio.run(client.generate_text("p")) == "fifth"
        assert len(transport.requests) == 5
        assert sleep_recorder.delays == [1.5, 2.5, 4.5, 8.5]

    def test_429_five_times_exhausts(self, make_client):
        client, transport = make_client([error_response(429, "quota") for _ in range(5)])
        with pytest.raises(RetriesExhaustedError) as exc_info:
            asyncio.run(client.generate_text("p"))
        assert len(transport.requests) == 5
        assert exc_info.value.last_error.status_code == 429

    def test_429_five_times_backs_off_full_schedule(self, make_client, sleep_recorder):
        client, _ = make_client([error_response(429) for _ in range(5)], rng=lambda: 0.0)
        with pytest.raises(RetriesExhaustedError):
            asyncio.run(client.generate_text("p"))
        assert sleep_recorder.delays == [1.0, 2.0, 4.0, 8.0, 16.0]

    def test_server_errors_retried(self, make_client):
        client, transport = make_client(
            [error_response(500), error_response(503), text_response("ok")]
        )
        assert asyncio.run(client.generate_text("p")) == "ok"
        assert len(transport.requests) == 3

    def test_404_fails_immediately(self, make_client, sleep_recorder):
        client, transport = make_client([error_response(404, "models/x is not found")])
        with pytest.raises(TerminalClientError) as exc_info:
            asyncio.run(client.generate_text("p"))
        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "models/x is not found"
        assert len(transport.requests) == 1
        assert sleep_recorder.delays == []

    def test_client_error_without_json_body(self, make_client):
        client, _ = make_client([httpx.Response(400, text="bad request")])
        with pytest.raises(TerminalClientError, match="Gemini request failed with status 400"):
            asyncio.run(client.generate_text("p"))

    def test_network_error_retried(self, make_client):
        client, transport = make_client(
            [httpx.ConnectError("connection refused"), text_response("recovered")]
        )
        assert asyncio.run(client.generate_text("p")) == "recovered"
        assert len(transport.requests) == 2

    def test_undecodable_body_is_malformed(self, make_client, sleep_recorder):
        client, transport = make_client([httpx.DecodingError("invalid gzip stream")])
        with pytest.raises(MalformedResponseError, match="could not be read"):
            asyncio.run(client.generate_text("p"))
        assert len(transport.requests) == 1
        assert sleep_recorder.delays == []

    def test_network_and_http_failures_share_budget(self, make_client):
        client, transport = make_client(
            [
                httpx.ConnectError("refused"),
                error_response(503),
                httpx.ReadTimeout("timeout"),
                error_response(429),
                httpx.ConnectError("refused"),
            ]
        )
        with pytest.raises(RetriesExhaustedError) as exc_info:
            asyncio.run(client.generate_text("p"))
        assert len(transport.requests) == 5
        assert isinstance(exc_info.value.last_error, TransientNetworkError)

    def test_max_tokens_returns_partial_with_notice(self, make_client):
        client, _ = make_client([text_response("Partial text", finish_reason="MAX_TOKENS")])
        result = asyncio.run(client.generate_text("p"))
        assert result == "Partial text" + TRUNCATION_NOTICE

    def test_block_reason_raises_content_blocked(self, make_client):
        client, transport = make_client(
            [httpx.Response(200, json={"promptFeedback": {"blockReason": "SAFETY"}})]
        )
        with pytest.raises(ContentBlockedError) as exc_info:
            asyncio.run(client.generate_text("p"))
        assert exc_info.value.reason == "SAFETY"
        assert len(transport.requests) == 1

    def test_no_candidates_is_malformed(self, make_client):
        client, _ = make_client([httpx.Response(200, json={})])
        with pytest.raises(MalformedResponseError, match="no candidates"):
            asyncio.run(client.generate_text("p"))

    def test_safety_finish_without_text_is_blocked(self, make_client):
        client, _ = make_client(
            [httpx.Response(200, json={"candidates": [{"finishReason": "SAFETY"}]})]
        )
        with pytest.raises(ContentBlockedError):
            asyncio.run(client.generate_text("p"))

    def test_other_finish_without_text_is_malformed(self, make_client):
        client, _ = make_client(
            [httpx.Response(200, json={"candidates": [{"finishReason": "OTHER"}]})]
        )
        with pytest.raises(MalformedResponseError, match="Reason: OTHER"):
            asyncio.run(client.generate_text("p"))

    def test_wrong_shape_is_malformed(self, make_client):
        client, _ = make_client([httpx.Response(200, json={"candidates": "nope"})])
        with pytest.raises(MalformedResponseError):
            asyncio.run(client.generate_text("p"))

    def test_non_json_success_body_is_malformed(self, make_client):
        client, _ = make_client([httpx.Response(200, text="<html>")])
        with pytest.raises(MalformedResponseError):
            asyncio.run(client.generate_text("p"))

    def test_structured_output_parsed(self, make_client):
        schema = {"type": "OBJECT", "properties": {"ideas": {"type": "ARRAY"}}}
        client, transport = make_client([text_response('{"ideas": [{"title": "A"}]}')])
        result = asyncio.run(client.generate_text("p", response_schema=schema))

        assert result == {"ideas": [{"title": "A"}]}
        config = json.loads(transport.requests[0].content)["generationConfig"]
        assert config["responseMimeType"] == "application/json"
        assert config["responseSchema"] == schema

    def test_structured_output_parse_failure(self, make_client):
        client, _ = make_client([text_response("not json")])
        with pytest.raises(StructuredOutputError) as exc_info:
            asyncio.run(client.generate_text("p", response_schema={"type": "OBJECT"}))
        assert exc_info.value.raw_text == "not json"
        assert not isinstance(exc_info.value, TerminalClientError)

    def test_structured_output_truncated(self, make_client):
        client, _ = make_client([text_response('{"ideas": [', finish_reason="MAX_TOKENS")])
        with pytest.raises(StructuredOutputError, match="truncated"):
            asyncio.run(client.generate_text("p", response_schema={"type": "OBJECT"}))


class TestAnalyzeImage:
    """Tests for analyze_image."""

    def test_sends_inline_image(self, make_client):
        client, transport = make_client([text_response("An icon of St. George")])
        result = asyncio.run(client.analyze_image("Describe", b"\x89PNG", "image/png"))

        assert result == "An icon of St. George"
        body = json.loads(transport.requests[0].content)
        inline = body["contents"][0]["parts"][1]["inlineData"]
        assert inline["mimeType"] == "image/png"
        assert base64.b64decode(inline["data"]) == b"\x89PNG"
        assert body["generationConfig"]["temperature"] == 0.4

    def test_missing_text_is_malformed(self, make_client):
        client, _ = make_client(
            [httpx.Response(200, json={"candidates": [{"content": {"parts": []}}]})]
        )
        with pytest.raises(MalformedResponseError):
            asyncio.run(client.analyze_image("Describe", b"x", "image/png"))


class TestGenerateImage:
    """Tests for generate_image."""

    def test_returns_decoded_bytes(self, make_client):
        client, transport = make_client([image_response(b"png-bytes")])
        image = asyncio.run(client.generate_image("A cross at sunrise", "16:9"))

        assert image.data == b"png-bytes"
        assert image.mime_type == "image/png"
        request = transport.requests[0]
        assert request.url.path.endswith("/models/imagen-3.0-generate-002:predict")
        body = json.loads(request.content)
        assert body == {
            "instances": [{"prompt": "A cross at sunrise"}],
            "parameters": {"sampleCount": 1, "aspectRatio": "16:9"},
        }

    def test_filtered_prediction_is_blocked(self, make_client):
        client, _ = make_client(
            [httpx.Response(200, json={"predictions": [{"raiFilteredReason": "filtered"}]})]
        )
        with pytest.raises(ContentBlockedError):
            asyncio.run(client.generate_image("p"))

    def test_no_predictions_is_malformed(self, make_client):
        client, _ = make_client([httpx.Response(200, json={"predictions": []})])
        with pytest.raises(MalformedResponseError):
            asyncio.run(client.generate_image("p"))

    def test_retries_on_server_error(self, make_client):
        client, transport = make_client([error_response(502), image_response(b"img")])
        assert asyncio.run(client.generate_image("p")).data == b"img"
        assert len(transport.requests) == 2


class TestSynthesizeSpeech:
    """Tests for synthesize_speech."""

    def test_returns_wav_with_declared_rate(self, make_client):
        pcm = b"\x01\x00\xff\xff\x00\x10"
        client, transport = make_client([audio_response(pcm, "audio/L16;codec=pcm;rate=16000")])
        audio = asyncio.run(client.synthesize_speech("Blessed are the peacemakers", "Puck"))

        header, samples = decode_wav(audio.wav)
        assert header.sample_rate == 16000
        assert samples == [1, -1, 4096]
        assert audio.sample_count == 3
        assert audio.voice == "Puck"

        body = json.loads(transport.requests[0].content)
        voice = body["generationConfig"]["speechConfig"]["voiceConfig"]["prebuiltVoiceConfig"]
        assert voice["voiceName"] == "Puck"
        assert body["generationConfig"]["responseModalities"] == ["AUDIO"]

    def test_default_voice_and_rate(self, make_client):
        client, transport = make_client([audio_response(b"\x00\x00", "audio/L16;codec=pcm")])
        audio = asyncio.run(client.synthesize_speech("Amen"))
        assert audio.sample_rate == 24000
        assert audio.voice == "Kore"

    def test_non_audio_mime_is_malformed(self, make_client):
        client, _ = make_client([audio_response(b"\x00\x00", "text/plain")])
        with pytest.raises(MalformedResponseError, match="Invalid audio data"):
            asyncio.run(client.synthesize_speech("Amen"))

    def test_429_then_success(self, make_client):
        client, transport = make_client([error_response(429), audio_response(b"\x00\x00")])
        audio = asyncio.run(client.synthesize_speech("Amen"))
        assert audio.sample_count == 1
        assert len(transport.requests) == 2
