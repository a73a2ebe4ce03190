"""Multi-resolution pyramid helpers for numpy frames.

Levels are produced with the phase-shift box filter from ``downsampler``,
which keeps intensity statistics closer to the source than plain
nearest-neighbour subsampling.
"""

from __future__ import annotations

from typing import List, Optional

import numpy as np

from box_downsampler.config import DEFAULT_CONFIG, ScalerConfig
from box_downsampler.downsampler import downsample_geometry
from box_downsampler.errors import UnsupportedPixelDepth, UnsupportedSampleFormat
from box_downsampler.geometry import ImageGeometry, Layout, normalize_scale_factor

# 16-bit samples travel big-endian, the order the averaging path decodes.
_WIRE_DTYPES = {
    1: np.dtype(np.uint8),
    2: np.dtype(">u2"),
}


def pyramid_level_factor(level: int) -> int:
    """Return the integer downsample factor for a pyramid level."""
    if level <= 0:
        return 1
    return 2 ** int(level)


def downsample_array(
    frame: np.ndarray,
    factor: int,
    *,
    planar: bool = False,
    config: Optional[ScalerConfig] = None,
) -> np.ndarray:
    """Downsample a uint8/uint16 frame with the phase-shift box filter.

    Parameters
    ----------
    frame : numpy.ndarray
        2D (Y, X), interleaved (Y, X, C) or, with ``planar=True``, (C, Y, X).
    factor : int
        Downsample factor (e.g., 2, 4, 8).
    planar : bool
        Interpret a 3D frame as channel-first.
    config : ScalerConfig, optional
        Passed through to ``downsample_geometry``.

    Returns
    -------
    numpy.ndarray
        Frame of the same dtype and axis order, reduced by ``factor`` along Y
        and X. ``frame`` itself when ``factor == 1``.
    """
    cfg = config or DEFAULT_CONFIG
    factor = normalize_scale_factor(factor)
    if frame.dtype.kind != "u":
        raise UnsupportedSampleFormat(f"Only unsigned integer frames are supported, got {frame.dtype}")
    if frame.dtype.itemsize not in _WIRE_DTYPES:
        raise UnsupportedPixelDepth(frame.dtype.itemsize)
    wire = _WIRE_DTYPES[frame.dtype.itemsize]
    if frame.ndim == 2:
        height, width = frame.shape
        channels = 1
    elif frame.ndim == 3 and planar:
        channels, height, width = frame.shape
    elif frame.ndim == 3:
        height, width, channels = frame.shape
    else:
        raise ValueError(f"Unsupported frame ndim={frame.ndim}, shape={frame.shape}")
    if factor == 1:
        return frame.copy() if cfg.copy_identity else frame

    geometry = ImageGeometry(
        width=width,
        height=height,
        bytes_per_pixel=wire.itemsize,
        channels=channels,
        layout=Layout.PLANAR if planar else Layout.INTERLEAVED,
        little_endian=False,
    )
    new_w, new_h = geometry.scaled(factor)
    if frame.ndim == 2:
        shape = (new_h, new_w)
    elif planar:
        shape = (channels, new_h, new_w)
    else:
        shape = (new_h, new_w, channels)
    if new_w == 0 or new_h == 0:
        return np.empty(shape, dtype=frame.dtype)

    data = np.ascontiguousarray(frame, dtype=wire).tobytes()
    out = downsample_geometry(data, geometry, factor, config=cfg)
    return np.frombuffer(out, dtype=wire).astype(frame.dtype).reshape(shape)


def build_pyramid(
    frame: np.ndarray,
    levels: int,
    *,
    factor: int = 2,
    planar: bool = False,
    config: Optional[ScalerConfig] = None,
) -> List[np.ndarray]:
    """Return ``[frame, level1, level2, ...]`` with up to ``levels`` reductions.

    Each level is computed from the previous one. Stops early when the next
    level would have a zero-sized axis.
    """
    factor = normalize_scale_factor(factor)
    pyramid = [frame]
    if factor == 1:
        return pyramid
    yx_axes = (1, 2) if planar and frame.ndim == 3 else (0, 1)
    current = frame
    for _ in range(max(0, int(levels))):
        if min(current.shape[ax] for ax in yx_axes) < factor:
            break
        current = downsample_array(current, factor, planar=planar, config=config)
        pyramid.append(current)
    return pyramid
