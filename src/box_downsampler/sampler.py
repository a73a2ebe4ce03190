"""Phase-shifted nearest-neighbour downsampling.

Each call picks one source pixel per output pixel, offset by a phase
``(shift_x, shift_y)`` inside the source block. Source positions come from an
error-accumulation stepping (as in a digital line) so that when the source
size is not a multiple of the output size the leftover columns and rows are
spread across the image instead of all being skipped at one edge.

Sample values are copied byte for byte; no arithmetic happens here.
"""

from __future__ import annotations

from typing import List, Union

import numpy as np

from box_downsampler.errors import BufferSizeMismatch, InvalidScaleFactor
from box_downsampler.geometry import ImageGeometry

__all__ = ["BufferLike", "step_positions", "sample"]

BufferLike = Union[bytes, bytearray, memoryview]


def step_positions(length: int, new_length: int, shift: int = 0) -> List[int]:
    """Return the source index for each of ``new_length`` output positions.

    Parameters
    ----------
    length : int
        Source extent along one axis.
    new_length : int
        Output extent along the same axis, ``1 <= new_length <= length``.
    shift : int
        Phase offset added to the first position.

    Returns
    -------
    list[int]
        Source indices, non-decreasing, all below ``length`` when
        ``shift < length // new_length``.
    """
    step = length // new_length
    remainder = length % new_length
    positions = []
    pos = shift
    err = 0
    for _ in range(new_length):
        positions.append(pos)
        pos += step
        err += remainder
        if err >= new_length:
            err -= new_length
            pos += 1
    return positions


def sample(
    source: BufferLike,
    geometry: ImageGeometry,
    factor: int,
    shift_x: int = 0,
    shift_y: int = 0,
) -> BufferLike:
    """Downsample ``source`` by ``factor`` picking the pixel at the given phase.

    Returns the source object itself when the reduction is a no-op, and
    ``b""`` when either reduced dimension is empty. Otherwise the result is a
    new ``bytes`` of ``new_width * new_height * channels * bytes_per_pixel``.
    """
    if not (0 <= shift_x < factor and 0 <= shift_y < factor):
        raise InvalidScaleFactor(
            f"Phase ({shift_x}, {shift_y}) outside [0, {factor}) for scale factor {factor}"
        )
    new_w, new_h = geometry.scaled(factor)
    if new_w == geometry.width and new_h == geometry.height:
        return source
    if new_w == 0 or new_h == 0:
        return b""
    if len(source) < geometry.frame_bytes:
        raise BufferSizeMismatch(
            f"Buffer holds {len(source)} bytes, geometry needs {geometry.frame_bytes}"
        )

    planes = geometry.layout.plane_count(geometry.channels)
    pixel_bytes = geometry.layout.pixel_channels(geometry.channels) * geometry.bytes_per_pixel
    src = np.frombuffer(source, dtype=np.uint8, count=geometry.frame_bytes).reshape(
        planes, geometry.height, geometry.width, pixel_bytes
    )
    rows = np.asarray(step_positions(geometry.height, new_h, shift_y), dtype=np.intp)
    cols = np.asarray(step_positions(geometry.width, new_w, shift_x), dtype=np.intp)
    picked = src[:, rows[:, np.newaxis], cols[np.newaxis, :]]
    return picked.tobytes()
