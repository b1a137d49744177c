"""Utilities for writing studio output to disk.

Core functions (normalize_title_for_filename, ensure_dir_exists) are re-exported
from core.utils.
"""

import json
import logging
from datetime import datetime
from pathlib import Path

from core.models import GeneratedImage, SpeechAudio
from core.utils import ensure_dir_exists, normalize_title_for_filename
from creator_hub.models import ContentDraft


logger = logging.getLogger(__name__)

__all__ = [
    "normalize_title_for_filename",
    "ensure_dir_exists",
    "build_output_stem",
    "save_draft",
    "save_images",
    "save_speech",
    "save_text",
]


def build_output_stem(title: str, now: datetime | None = None) -> str:
    """Filename stem: normalized title plus a timestamp to avoid collisions."""
    stamp = (now or datetime.now()).strftime("%Y%m%d%H%M%S")
    return f"{normalize_title_for_filename(title)}_{stamp}"


def save_text(text: str, output_stem: str, output_dir: Path, suffix: str = ".md") -> Path:
    """Write `text` to ``output_dir/output_stem + suffix``."""
    ensure_dir_exists(output_dir)
    file_path = output_dir / f"{output_stem}{suffix}"
    file_path.write_text(text, encoding="utf-8")
    logger.info(f"Saved: {file_path}")
    return file_path


def save_draft(draft: ContentDraft, output_dir: Path, as_json: bool = False) -> Path:
    """Save a draft as markdown (default) or JSON."""
    stem = build_output_stem(draft.title, draft.generated_at)
    if as_json:
        text = json.dumps(draft.to_dict(), indent=2, ensure_ascii=False)
        return save_text(text, stem, output_dir, suffix=".json")
    return save_text(draft.to_markdown(), stem, output_dir)


def save_images(images: list[GeneratedImage], title: str, output_dir: Path) -> list[Path]:
    """Write each image variation to its own numbered file."""
    ensure_dir_exists(output_dir)
    stem = build_output_stem(title)
    paths = []
    for i, image in enumerate(images, 1):
        path = output_dir / f"{stem}_{i:02d}.{image.extension}"
        path.write_bytes(image.data)
        logger.info(f"Image saved: {path} ({len(image.data):,} bytes)")
        paths.append(path)
    return paths


def save_speech(audio: SpeechAudio, title: str, output_dir: Path) -> Path:
    """Write synthesized speech as a .wav file."""
    ensure_dir_exists(output_dir)
    path = output_dir / f"{build_output_stem(title)}.wav"
    path.write_bytes(audio.wav)
    logger.info(f"Audio saved: {path} ({audio.duration_seconds:.1f}s, voice {audio.voice})")
    return path
