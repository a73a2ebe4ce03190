"""Per-sample averaging of phase-shifted buffers.

16-bit samples are decoded big-endian (``(hi << 8) | lo``) and the result is
encoded big-endian, independent of the byte-order flag on the image. Callers
that want the flag to drive both directions pass ``byte_order`` explicitly
(see ``ScalerConfig.honor_byte_order``).
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from box_downsampler.errors import UnsupportedPixelDepth
from box_downsampler.sampler import BufferLike

__all__ = ["SUPPORTED_DEPTHS", "check_depth", "average"]

SUPPORTED_DEPTHS = (1, 2)

_BYTE_ORDER_CODES = {"big": ">", "little": "<"}


def check_depth(bytes_per_pixel: int) -> None:
    """Raise ``UnsupportedPixelDepth`` unless the depth is 8 or 16 bit."""
    if bytes_per_pixel not in SUPPORTED_DEPTHS:
        raise UnsupportedPixelDepth(bytes_per_pixel)


def average(
    shifted: Sequence[BufferLike],
    pixel_count: int,
    bytes_per_pixel: int,
    byte_order: str = "big",
) -> bytes:
    """Average ``pixel_count`` samples across all shifted buffers.

    Parameters
    ----------
    shifted : sequence of bytes-like
        Same-size buffers, one per phase shift.
    pixel_count : int
        Channel samples per buffer (``new_width * new_height * channels``).
    bytes_per_pixel : {1, 2}
        Bytes per sample.
    byte_order : {"big", "little"}
        Byte order for decoding and encoding 16-bit samples.

    Returns
    -------
    bytes
        ``pixel_count * bytes_per_pixel`` bytes. Each sample is the sum over
        buffers divided by the buffer count, truncated.
    """
    check_depth(bytes_per_pixel)
    if not shifted:
        raise ValueError("average() needs at least one buffer")
    if byte_order not in _BYTE_ORDER_CODES:
        raise ValueError(f"Invalid byte_order: {byte_order}")
    if pixel_count == 0:
        return b""

    if bytes_per_pixel == 1:
        dtype = np.dtype(np.uint8)
    else:
        dtype = np.dtype(f"{_BYTE_ORDER_CODES[byte_order]}u2")
    # uint64 accumulation keeps the sum exact for any realistic shift count.
    total = np.zeros(pixel_count, dtype=np.uint64)
    for buf in shifted:
        total += np.frombuffer(buf, dtype=dtype, count=pixel_count)
    mean = total // np.uint64(len(shifted))
    return mean.astype(dtype).tobytes()
