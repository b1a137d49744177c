"""Core utilities for file and path operations.

Used by the content studio and the CLI when naming and writing generated
drafts, images and audio.
"""

import logging
import re
from pathlib import Path


logger = logging.getLogger(__name__)

MAX_FILENAME_STEM = 80


def normalize_title_for_filename(text: str, max_length: int = MAX_FILENAME_STEM) -> str:
    """
    Turn a content title into a safe filename stem.
    - Keeps letters, digits, spaces and hyphens; drops punctuation and emojis.
    - Collapses whitespace into single underscores.
    - Trims leading/trailing underscores and caps the length.
    """
    if not text:
        return "untitled"

    text = re.sub(r"[^\w\s-]", "", text, flags=re.UNICODE)
    text = re.sub(r"\s+", " ", text).strip()
    text = text.replace(" ", "_")
    text = text[:max_length].strip("_")

    return text or "untitled"


def ensure_dir_exists(dir_path: Path) -> None:
    """Create `dir_path` (and parents) if missing."""
    if dir_path.exists():
        return
    try:
        dir_path.mkdir(parents=True, exist_ok=True)
        logger.info(f"Created directory: {dir_path}")
    except OSError as e:
        logger.error(f"Could not create directory {dir_path}: {e}")
        raise


__all__ = ["ensure_dir_exists", "normalize_title_for_filename"]
