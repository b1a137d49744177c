"""Core package for shared components of the ATMT Creator Hub.

This package provides stable import paths for cross-cutting concerns:
configuration, the Gemini REST client, the retry policy, WAV framing and the
shared data models. The `creator_hub` package builds its content workflows on
top of these.
"""

# Re-export convenience imports for users of `core`
from core.settings import AppSettings, settings  # noqa: F401
