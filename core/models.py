"""Shared data models for the ATMT Creator Hub.

Two families live here:

- Wire schemas (Pydantic) for each Generative Language endpoint. Responses are
  decoded into these up front so the client never walks raw dicts.
- Result dataclasses handed back to callers (images, synthesized speech).
"""

from dataclasses import dataclass
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from core.errors import MalformedResponseError

M = TypeVar("M", bound=BaseModel)


class _WireModel(BaseModel):
    """Base for API payloads: camelCase on the wire, unknown fields ignored."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


# =============================================================================
# generateContent (text, vision, TTS)
# =============================================================================


class InlineData(_WireModel):
    mime_type: str = ""
    data: str = ""  # base64


class Part(_WireModel):
    text: str | None = None
    inline_data: InlineData | None = None


class Content(_WireModel):
    role: str | None = None
    parts: list[Part] = Field(default_factory=list)


class Candidate(_WireModel):
    content: Content | None = None
    finish_reason: str | None = None

    @property
    def first_part(self) -> Part | None:
        if self.content and self.content.parts:
            return self.content.parts[0]
        return None


class PromptFeedback(_WireModel):
    block_reason: str | None = None


class GenerateContentResponse(_WireModel):
    candidates: list[Candidate] = Field(default_factory=list)
    prompt_feedback: PromptFeedback | None = None


# =============================================================================
# predict (Imagen)
# =============================================================================


class Prediction(_WireModel):
    bytes_base64_encoded: str | None = None
    mime_type: str | None = None
    rai_filtered_reason: str | None = None


class PredictResponse(_WireModel):
    predictions: list[Prediction] = Field(default_factory=list)


def decode_response(schema: type[M], payload: object, endpoint: str) -> M:
    """Validate a decoded JSON body against `schema`.

    Raises:
        MalformedResponseError: if the payload does not match the schema
    """
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        raise MalformedResponseError(
            f"Unexpected {endpoint} response shape: {e.error_count()} validation error(s)"
        ) from e


# =============================================================================
# RESULTS
# =============================================================================


@dataclass
class GeneratedImage:
    """Image returned by the image generation endpoint."""

    data: bytes
    mime_type: str = "image/png"

    @property
    def extension(self) -> str:
        subtype = self.mime_type.split("/", 1)[-1].split(";", 1)[0].strip()
        return "jpg" if subtype == "jpeg" else subtype or "png"


@dataclass
class SpeechAudio:
    """Synthesized speech, already framed as WAV."""

    wav: bytes
    sample_rate: int
    sample_count: int
    voice: str

    @property
    def duration_seconds(self) -> float:
        return self.sample_count / self.sample_rate if self.sample_rate else 0.0


__all__ = [
    "Candidate",
    "Content",
    "GenerateContentResponse",
    "GeneratedImage",
    "InlineData",
    "Part",
    "PredictResponse",
    "Prediction",
    "PromptFeedback",
    "SpeechAudio",
    "decode_response",
]
