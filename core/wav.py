"""Minimal WAV (RIFF) framing for 16-bit mono PCM.

The TTS endpoint returns raw little-endian signed 16-bit samples with the
sample rate declared in the MIME type (e.g. ``audio/L16;codec=pcm;rate=24000``).
`pcm_to_wav` wraps those samples in the canonical 44-byte header so the
result plays in any standard audio player.
"""

import logging
import re
import struct
import sys
from array import array
from collections.abc import Sequence
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_RATE = 24000
HEADER_SIZE = 44

_CHANNELS = 1
_BITS_PER_SAMPLE = 16
_BYTES_PER_SAMPLE = _BITS_PER_SAMPLE // 8
_PCM_FORMAT = 1

# RIFF id, RIFF size, WAVE id, fmt id, fmt size, format, channels,
# sample rate, byte rate, block align, bits per sample, data id, data size
_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")

_RATE_PATTERN = re.compile(r"rate=(\d+)")


class WavFormatError(ValueError):
    """Raised when bytes cannot be read back as a 16-bit mono PCM WAV."""


@dataclass(frozen=True)
class WavHeader:
    """Fields of the canonical 44-byte header."""

    riff_size: int
    channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int
    data_size: int

    @property
    def sample_count(self) -> int:
        return self.data_size // self.block_align if self.block_align else 0


def parse_sample_rate(mime_type: str | None, default: int = DEFAULT_SAMPLE_RATE) -> int:
    """Extract ``rate=NNN`` from a MIME type, falling back to `default`."""
    if not mime_type:
        return default
    match = _RATE_PATTERN.search(mime_type)
    if not match:
        logger.debug(f"No sample rate in MIME type '{mime_type}', using {default} Hz")
        return default
    rate = int(match.group(1))
    return rate or default


def pcm_bytes_to_samples(data: bytes) -> list[int]:
    """Interpret little-endian int16 bytes as samples (an odd trailing byte is dropped)."""
    usable = len(data) - (len(data) % _BYTES_PER_SAMPLE)
    samples = array("h")
    samples.frombytes(data[:usable])
    if sys.byteorder == "big":
        samples.byteswap()
    return samples.tolist()


def _samples_to_bytes(samples: Sequence[int]) -> bytes:
    buf = array("h", samples)
    if sys.byteorder == "big":
        buf.byteswap()
    return buf.tobytes()


def pcm_to_wav(samples: Sequence[int], sample_rate: int = DEFAULT_SAMPLE_RATE) -> bytes:
    """Wrap signed 16-bit mono samples in a RIFF/WAVE container.

    Args:
        samples: Signed 16-bit sample values
        sample_rate: Samples per second (not validated)

    Returns:
        44-byte header followed by the samples in little-endian order
    """
    data = _samples_to_bytes(samples)
    block_align = _CHANNELS * _BYTES_PER_SAMPLE
    header = _HEADER.pack(
        b"RIFF",
        36 + len(data),
        b"WAVE",
        b"fmt ",
        16,
        _PCM_FORMAT,
        _CHANNELS,
        sample_rate,
        sample_rate * block_align,
        block_align,
        _BITS_PER_SAMPLE,
        b"data",
        len(data),
    )
    return header + data


def read_wav_header(data: bytes) -> WavHeader:
    """Parse the canonical 44-byte header produced by `pcm_to_wav`."""
    if len(data) < HEADER_SIZE:
        raise WavFormatError(f"WAV data too short: {len(data)} bytes")

    (
        riff_id,
        riff_size,
        wave_id,
        fmt_id,
        fmt_size,
        audio_format,
        channels,
        sample_rate,
        byte_rate,
        block_align,
        bits_per_sample,
        data_id,
        data_size,
    ) = _HEADER.unpack_from(data)

    if riff_id != b"RIFF" or wave_id != b"WAVE":
        raise WavFormatError("Missing RIFF/WAVE signature")
    if fmt_id != b"fmt " or fmt_size != 16 or audio_format != _PCM_FORMAT:
        raise WavFormatError("Unsupported fmt chunk (expected 16-byte PCM)")
    if data_id != b"data":
        raise WavFormatError("Missing data chunk")

    return WavHeader(
        riff_size=riff_size,
        channels=channels,
        sample_rate=sample_rate,
        byte_rate=byte_rate,
        block_align=block_align,
        bits_per_sample=bits_per_sample,
        data_size=data_size,
    )


def decode_wav(data: bytes) -> tuple[WavHeader, list[int]]:
    """Read back header and samples from a container built by `pcm_to_wav`."""
    header = read_wav_header(data)
    if header.channels != _CHANNELS or header.bits_per_sample != _BITS_PER_SAMPLE:
        raise WavFormatError(
            f"Expected 16-bit mono, got {header.bits_per_sample}-bit x{header.channels}"
        )
    payload = data[HEADER_SIZE : HEADER_SIZE + header.data_size]
    if len(payload) != header.data_size:
        raise WavFormatError(
            f"Truncated data chunk: declared {header.data_size}, found {len(payload)} bytes"
        )
    return header, pcm_bytes_to_samples(payload)


__all__ = [
    "DEFAULT_SAMPLE_RATE",
    "HEADER_SIZE",
    "WavFormatError",
    "WavHeader",
    "decode_wav",
    "parse_sample_rate",
    "pcm_bytes_to_samples",
    "pcm_to_wav",
    "read_wav_header",
]
