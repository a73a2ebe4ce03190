"""Image geometry, pixel layout and scale-factor helpers.

Conventions
-----------
- Interleaved buffers are laid out (Y, X, C, B): all channel samples of one
  pixel are adjacent.
- Planar buffers are laid out (C, Y, X, B): each channel is a full plane.
- B is ``bytes_per_pixel``, the size of one channel sample.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from numbers import Real
from typing import List, Tuple

from box_downsampler.errors import InvalidGeometry, InvalidScaleFactor

__all__ = [
    "Layout",
    "ImageGeometry",
    "normalize_scale_factor",
    "shift_set",
]


class Layout(enum.Enum):
    """Channel arrangement of a raster buffer."""

    INTERLEAVED = "interleaved"
    PLANAR = "planar"

    @classmethod
    def from_flag(cls, interleaved: bool) -> "Layout":
        return cls.INTERLEAVED if interleaved else cls.PLANAR

    def plane_count(self, channels: int) -> int:
        """Number of separately stored planes."""
        return 1 if self is Layout.INTERLEAVED else channels

    def pixel_channels(self, channels: int) -> int:
        """Number of channel samples stored together for one pixel."""
        return channels if self is Layout.INTERLEAVED else 1


@dataclass(frozen=True)
class ImageGeometry:
    """Shape and sample format of a raster buffer.

    ``bytes_per_pixel`` is validated by the averaging stage, not here, so a
    geometry can describe depths the pipeline rejects.
    """

    width: int
    height: int
    bytes_per_pixel: int = 1
    channels: int = 1
    layout: Layout = Layout.INTERLEAVED
    little_endian: bool = False
    floating_point: bool = False

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise InvalidGeometry(f"Invalid image size {self.width}x{self.height}")
        if self.channels < 1:
            raise InvalidGeometry(f"Channel count must be >= 1, got {self.channels}")

    @property
    def interleaved(self) -> bool:
        return self.layout is Layout.INTERLEAVED

    @property
    def sample_count(self) -> int:
        """Channel samples in one frame."""
        return self.width * self.height * self.channels

    @property
    def frame_bytes(self) -> int:
        return self.sample_count * self.bytes_per_pixel

    def scaled(self, factor: int) -> Tuple[int, int]:
        """Return (new_width, new_height); remainder rows and columns are dropped."""
        return self.width // factor, self.height // factor


def normalize_scale_factor(value: object) -> int:
    """Validate a scale factor and return it as an int.

    Real values are accepted only so that non-integer requests can be
    rejected; ``2.0`` is fine, ``1.5`` is not.
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidScaleFactor(f"Unsupported scale factor {value!r}")
    if not math.isfinite(float(value)) or value != int(value):
        raise InvalidScaleFactor(f"Unsupported non integer scale factor {value!r}")
    factor = int(value)
    if factor < 1:
        raise InvalidScaleFactor(f"Scale factor cannot be less than 1, got {value!r}")
    return factor


def shift_set(factor: int) -> List[Tuple[int, int]]:
    """Return the ``factor**2`` phase offsets as (shift_x, shift_y), row-major."""
    return [(xs, ys) for ys in range(factor) for xs in range(factor)]
