"""Shared application settings for the ATMT Creator Hub.

This module contains the validated Pydantic settings used across all modules
(Gemini client, retry policy, content studio, CLI).

All environment variables, API keys, model names, and directory paths are
centralized here to provide a single source of truth for configuration.
"""

import contextlib
import os
import sys
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from a .env file if present
load_dotenv()


class AppSettings(BaseSettings):
    """
    Application settings, validated with Pydantic.
    Reads environment variables and applies defaults.
    """

    model_config = SettingsConfigDict(case_sensitive=False)

    # ========== GEMINI API ==========

    GEMINI_API_KEY: str = Field(
        default="",
        description="API key for the Generative Language API (sent as ?key=)",
    )
    GEMINI_API_BASE_URL: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the Generative Language REST API",
    )
    REQUEST_TIMEOUT_SECONDS: float = Field(
        default=120.0,
        description="Per-attempt HTTP timeout in seconds",
    )

    # ========== MODEL SELECTION ==========

    TEXT_MODEL: str = Field(
        default="gemini-2.5-flash-preview-05-20",
        description="Model for text and structured (JSON) generation",
    )
    VISION_MODEL: str = Field(
        default="gemini-2.5-flash-preview-05-20",
        description="Model for image analysis",
    )
    IMAGE_MODEL: str = Field(
        default="imagen-3.0-generate-002",
        description="Imagen model for image generation",
    )
    TTS_MODEL: str = Field(
        default="gemini-2.5-flash-preview-tts",
        description="Model for text-to-speech",
    )
    DEFAULT_VOICE: str = Field(
        default="Kore",
        description="Prebuilt TTS voice name",
    )
    DEFAULT_SAMPLE_RATE: int = Field(
        default=24000,
        description="Sample rate used when the TTS MIME type does not declare one",
    )

    # ========== RETRY POLICY ==========

    MAX_RETRIES: int = Field(
        default=5,
        description="Total attempts per request (HTTP and network failures share the budget)",
    )
    RETRY_BASE_DELAY_MS: int = Field(
        default=1000,
        description="Base delay in ms, doubled on every attempt",
    )
    RETRY_JITTER_MS: int = Field(
        default=1000,
        description="Upper bound (exclusive) of the uniform random jitter in ms",
    )

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    # ========== DIRECTORY CONFIGURATION ==========

    DRAFTS_OUTPUT_DIR: Path = Field(
        default=Path("output/drafts/"),
        description="Directory for generated drafts, ideas and analyses",
    )
    IMAGES_OUTPUT_DIR: Path = Field(
        default=Path("output/images/"),
        description="Directory for generated images",
    )
    AUDIO_OUTPUT_DIR: Path = Field(
        default=Path("output/audio/"),
        description="Directory for synthesized speech (.wav)",
    )


# Global validated settings instance
try:
    settings = AppSettings()

    # GOOGLE_API_KEY is accepted as a fallback name for the API key
    google_alias = os.getenv("GOOGLE_API_KEY")
    if google_alias and not settings.GEMINI_API_KEY:
        with contextlib.suppress(Exception):
            settings.GEMINI_API_KEY = google_alias

except Exception as e:
    sys.stderr.write(f"CRITICAL: Error loading or validating configuration: {e}\n")
    sys.exit(1)


__all__ = ["AppSettings", "settings"]
