"""Async client for the Generative Language REST API (Gemini + Imagen).

Four operations share one retry policy:

- generate_text:      prompt -> text (or parsed JSON with a response schema)
- analyze_image:      prompt + image bytes -> text
- generate_image:     prompt + aspect ratio -> image bytes
- synthesize_speech:  text + voice -> WAV bytes

Every call is a single HTTPS POST with a JSON body, authenticated with a
``?key=`` query parameter. The client is built explicitly (see
`GeminiClient.from_settings`) and passed to whoever needs it; it owns its
`httpx.AsyncClient` unless one is injected.
"""

import base64
import binascii
import json
import logging
from typing import Any

import httpx

from core.errors import (
    ConfigurationError,
    ContentBlockedError,
    MalformedResponseError,
    StructuredOutputError,
    TerminalClientError,
    TransientNetworkError,
    TransientServerError,
)
from core.models import (
    Candidate,
    GeneratedImage,
    GenerateContentResponse,
    PredictResponse,
    SpeechAudio,
    decode_response,
)
from core.retry import RetryPolicy, call_with_retry
from core.wav import DEFAULT_SAMPLE_RATE, parse_sample_rate, pcm_bytes_to_samples, pcm_to_wav

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_TEXT_MODEL = "gemini-2.5-flash-preview-05-20"
DEFAULT_IMAGE_MODEL = "imagen-3.0-generate-002"
DEFAULT_TTS_MODEL = "gemini-2.5-flash-preview-tts"
DEFAULT_VOICE = "Kore"

TRUNCATION_NOTICE = "\n\n[WARNING: The generated content was too long and has been cut short.]"

TEXT_GENERATION_CONFIG = {"temperature": 0.7, "topK": 1, "topP": 1, "maxOutputTokens": 8192}
VISION_GENERATION_CONFIG = {"temperature": 0.4, "topK": 32, "topP": 1, "maxOutputTokens": 4096}

# Finish reasons that mean moderation stopped the output
BLOCKING_FINISH_REASONS = frozenset(
    {"SAFETY", "RECITATION", "BLOCKLIST", "PROHIBITED_CONTENT", "SPII", "IMAGE_SAFETY"}
)


def _status_is_retryable(status_code: int) -> bool:
    return status_code == 429 or status_code >= 500


def _error_message(response: httpx.Response, label: str) -> str:
    """Server-reported ``error.message`` when present, generic text otherwise."""
    fallback = f"{label} request failed with status {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return fallback


def _decode_base64(data: str, what: str) -> bytes:
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedResponseError(f"Invalid base64 {what} in response") from e


class GeminiClient:
    """Client for text, vision, image and speech generation.

    Usage:
        async with GeminiClient.from_settings() as client:
            text = await client.generate_text("...")
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        text_model: str = DEFAULT_TEXT_MODEL,
        vision_model: str = DEFAULT_TEXT_MODEL,
        image_model: str = DEFAULT_IMAGE_MODEL,
        tts_model: str = DEFAULT_TTS_MODEL,
        default_voice: str = DEFAULT_VOICE,
        default_sample_rate: int = DEFAULT_SAMPLE_RATE,
        retry_policy: RetryPolicy | None = None,
        timeout: float = 120.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        if not api_key:
            raise ConfigurationError(
                "GEMINI_API_KEY not configured. Set the environment variable to use Gemini models."
            )
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.text_model = text_model
        self.vision_model = vision_model
        self.image_model = image_model
        self.tts_model = tts_model
        self.default_voice = default_voice
        self.default_sample_rate = default_sample_rate
        self.retry_policy = retry_policy or RetryPolicy()
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, app_settings=None, **overrides) -> "GeminiClient":
        """Build a client from `AppSettings` (the global instance by default)."""
        if app_settings is None:
            from core.settings import settings as app_settings

        kwargs: dict[str, Any] = {
            "api_key": app_settings.GEMINI_API_KEY,
            "base_url": app_settings.GEMINI_API_BASE_URL,
            "text_model": app_settings.TEXT_MODEL,
            "vision_model": app_settings.VISION_MODEL,
            "image_model": app_settings.IMAGE_MODEL,
            "tts_model": app_settings.TTS_MODEL,
            "default_voice": app_settings.DEFAULT_VOICE,
            "default_sample_rate": app_settings.DEFAULT_SAMPLE_RATE,
            "timeout": app_settings.REQUEST_TIMEOUT_SECONDS,
            "retry_policy": RetryPolicy(
                max_attempts=app_settings.MAX_RETRIES,
                base_delay_ms=app_settings.RETRY_BASE_DELAY_MS,
                jitter_ms=app_settings.RETRY_JITTER_MS,
            ),
        }
        kwargs.update(overrides)
        return cls(**kwargs)

    async def __aenter__(self) -> "GeminiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._http.aclose()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _url(self, model: str, method: str) -> str:
        return f"{self.base_url}/models/{model}:{method}"

    async def _post_once(self, url: str, payload: dict, label: str) -> Any:
        """Single attempt: classify the outcome into the error taxonomy."""
        try:
            response = await self._http.post(url, params={"key": self.api_key}, json=payload)
        except httpx.TransportError as e:
            raise TransientNetworkError(f"{label} network error: {e}") from e
        except httpx.RequestError as e:
            raise MalformedResponseError(f"{label} response could not be read: {e}") from e

        if response.is_success:
            try:
                return response.json()
            except ValueError as e:
                raise MalformedResponseError(f"{label} response is not valid JSON") from e

        message = _error_message(response, label)
        if _status_is_retryable(response.status_code):
            raise TransientServerError(response.status_code, message)
        logger.error(f"{label} failed with HTTP {response.status_code}: {message}")
        raise TerminalClientError(response.status_code, message)

    async def _post(self, model: str, method: str, payload: dict, label: str) -> Any:
        url = self._url(model, method)
        logger.debug(f"Calling {label} ({model}:{method})")
        return await call_with_retry(
            lambda: self._post_once(url, payload, label),
            policy=self.retry_policy,
            description=f"{label} API call",
        )

    # ------------------------------------------------------------------
    # Response helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _first_candidate(response: GenerateContentResponse, label: str) -> Candidate:
        if not response.candidates:
            feedback = response.prompt_feedback
            if feedback and feedback.block_reason:
                raise ContentBlockedError(feedback.block_reason)
            raise MalformedResponseError(f"{label} API returned no candidates.")
        return response.candidates[0]

    @staticmethod
    def _candidate_text(candidate: Candidate, label: str) -> str:
        part = candidate.first_part
        if part is not None and part.text:
            return part.text
        reason = candidate.finish_reason
        if reason in BLOCKING_FINISH_REASONS:
            raise ContentBlockedError(reason)
        if reason:
            raise MalformedResponseError(
                f"{label} generation stopped unexpectedly. Reason: {reason}."
            )
        raise MalformedResponseError(f"An unknown issue occurred with the {label} API response.")

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def generate_text(self, prompt: str, response_schema: dict | None = None) -> Any:
        """Generate text for `prompt`.

        Args:
            prompt: Full prompt text
            response_schema: Optional OpenAPI-style schema. When given, the model
                is asked for ``application/json`` and the parsed JSON is returned.

        Returns:
            The generated text (with `TRUNCATION_NOTICE` appended when the
            output hit the token limit) or the parsed JSON value.
        """
        generation_config: dict[str, Any] = dict(TEXT_GENERATION_CONFIG)
        if response_schema is not None:
            generation_config["responseMimeType"] = "application/json"
            generation_config["responseSchema"] = response_schema

        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
        }
        body = await self._post(self.text_model, "generateContent", payload, "Gemini")
        response = decode_response(GenerateContentResponse, body, "Gemini")
        candidate = self._first_candidate(response, "Gemini")
        text = self._candidate_text(candidate, "Gemini")
        truncated = candidate.finish_reason == "MAX_TOKENS"

        if response_schema is None:
            if truncated:
                logger.warning("Gemini output hit MAX_TOKENS; returning partial text")
                text += TRUNCATION_NOTICE
            return text

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            hint = " (output was truncated at the token limit)" if truncated else ""
            raise StructuredOutputError(
                f"Could not parse structured output as JSON{hint}: {e}", raw_text=text
            ) from e

    async def analyze_image(self, prompt: str, image: bytes, mime_type: str) -> str:
        """Describe or interpret `image` according to `prompt`."""
        payload = {
            "contents": [
                {
                    "role": "user",
                    "parts": [
                        {"text": prompt},
                        {
                            "inlineData": {
                                "mimeType": mime_type,
                                "data": base64.b64encode(image).decode("ascii"),
                            }
                        },
                    ],
                }
            ],
            "generationConfig": dict(VISION_GENERATION_CONFIG),
        }
        body = await self._post(self.vision_model, "generateContent", payload, "Vision")
        response = decode_response(GenerateContentResponse, body, "Vision")
        candidate = self._first_candidate(response, "Vision")
        text = self._candidate_text(candidate, "Vision")
        if candidate.finish_reason == "MAX_TOKENS":
            text += TRUNCATION_NOTICE
        return text

    async def generate_image(self, prompt: str, aspect_ratio: str = "1:1") -> GeneratedImage:
        """Generate one image for `prompt`."""
        payload = {
            "instances": [{"prompt": prompt}],
            "parameters": {"sampleCount": 1, "aspectRatio": aspect_ratio},
        }
        body = await self._post(self.image_model, "predict", payload, "Image Generation")
        response = decode_response(PredictResponse, body, "Image Generation")

        if not response.predictions:
            raise MalformedResponseError("Image Generation API returned no predictions.")
        prediction = response.predictions[0]
        if prediction.rai_filtered_reason:
            raise ContentBlockedError(prediction.rai_filtered_reason)
        if not prediction.bytes_base64_encoded:
            raise MalformedResponseError("Unexpected response from Image Generation API.")

        data = _decode_base64(prediction.bytes_base64_encoded, "image")
        return GeneratedImage(data=data, mime_type=prediction.mime_type or "image/png")

    async def synthesize_speech(self, text: str, voice_name: str | None = None) -> SpeechAudio:
        """Convert `text` to speech and frame the PCM samples as WAV."""
        voice = voice_name or self.default_voice
        payload = {
            "contents": [{"parts": [{"text": text}]}],
            "generationConfig": {
                "responseModalities": ["AUDIO"],
                "speechConfig": {"voiceConfig": {"prebuiltVoiceConfig": {"voiceName": voice}}},
            },
            "model": self.tts_model,
        }
        body = await self._post(self.tts_model, "generateContent", payload, "TTS")
        response = decode_response(GenerateContentResponse, body, "TTS")
        candidate = self._first_candidate(response, "TTS")

        part = candidate.first_part
        inline = part.inline_data if part is not None else None
        if inline is None or not inline.data or not inline.mime_type.startswith("audio/"):
            if candidate.finish_reason in BLOCKING_FINISH_REASONS:
                raise ContentBlockedError(candidate.finish_reason)
            raise MalformedResponseError("Invalid audio data from TTS API.")

        sample_rate = parse_sample_rate(inline.mime_type, self.default_sample_rate)
        samples = pcm_bytes_to_samples(_decode_base64(inline.data, "audio"))
        logger.info(
            f"Synthesized {len(samples):,} samples at {sample_rate} Hz with voice '{voice}'"
        )
        return SpeechAudio(
            wav=pcm_to_wav(samples, sample_rate),
            sample_rate=sample_rate,
            sample_count=len(samples),
            voice=voice,
        )


__all__ = [
    "BLOCKING_FINISH_REASONS",
    "GeminiClient",
    "TRUNCATION_NOTICE",
]
