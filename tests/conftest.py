import numpy as np
import pytest


@pytest.fixture
def ramp_u8():
    """Return a builder for row-major 8-bit ramps ``start, start+1, ...``."""

    def _build(width: int, height: int, start: int = 0) -> bytes:
        return (np.arange(width * height, dtype=np.int64) + start).astype(np.uint8).tobytes()

    return _build


@pytest.fixture
def constant_image():
    """Return a builder for images filled with one value per channel."""

    def _build(width: int, height: int, values, bytes_per_pixel: int = 1, interleaved: bool = True,
               byte_order: str = "big") -> bytes:
        dtype = np.uint8 if bytes_per_pixel == 1 else np.dtype(">u2" if byte_order == "big" else "<u2")
        values = np.asarray(values, dtype=np.int64)
        if interleaved:
            arr = np.broadcast_to(values, (height, width, values.size))
        else:
            arr = np.broadcast_to(values[:, np.newaxis, np.newaxis], (values.size, height, width))
        return np.ascontiguousarray(arr).astype(dtype).tobytes()

    return _build
