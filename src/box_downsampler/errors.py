"""Exceptions raised by the downsampling pipeline.

All errors are raised synchronously while validating a request, before any
buffer is allocated. Every class derives from ``ValueError`` so callers that
already guard parameter errors keep working.
"""

from __future__ import annotations


class DownsampleError(ValueError):
    """Base class for invalid downsample requests."""


class InvalidScaleFactor(DownsampleError):
    """Scale factor is not a whole number, or is less than 1."""


class UnsupportedPixelDepth(DownsampleError):
    """Bytes per sample is not 1 or 2."""

    def __init__(self, bytes_per_pixel: int) -> None:
        super().__init__(
            f"Cannot handle pixel type with {bytes_per_pixel} bytes per pixel"
        )
        self.bytes_per_pixel = bytes_per_pixel


class UnsupportedSampleFormat(DownsampleError):
    """Floating-point samples were requested but are not averaged."""


class InvalidGeometry(DownsampleError):
    """Width, height or channel count is out of range."""


class BufferSizeMismatch(DownsampleError):
    """Source buffer is shorter than the geometry requires."""
