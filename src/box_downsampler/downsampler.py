"""Box-filter downsampling by averaging phase-shifted nearest-neighbour samples.

A reduction by ``n`` takes ``n * n`` nearest-neighbour downsamples, each
shifted by a different ``(shift_x, shift_y)`` inside the source block, and
averages them. For ``n = 2`` the four samples are: unshifted, shifted by one
in X, shifted by one in Y, and shifted by one in both.

Only integer factors and 8/16-bit samples are supported. When no reduction
happens the source buffer itself is returned, so callers must not mutate the
result in place unless ``ScalerConfig.copy_identity`` is set.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from box_downsampler.averager import average, check_depth
from box_downsampler.config import DEFAULT_CONFIG, ScalerConfig
from box_downsampler.errors import BufferSizeMismatch, UnsupportedSampleFormat
from box_downsampler.geometry import ImageGeometry, Layout, normalize_scale_factor, shift_set
from box_downsampler.logger import get_logger
from box_downsampler.sampler import BufferLike, sample

__all__ = ["downsample", "downsample_geometry", "check_sample_format"]

LOGGER = get_logger(__name__)


def check_sample_format(geometry: ImageGeometry, config: ScalerConfig, factor: int) -> None:
    """Apply the floating-point policy: raise or warn when samples are floats."""
    if not geometry.floating_point:
        return
    if config.reject_floating_point:
        raise UnsupportedSampleFormat("Floating-point samples cannot be averaged")
    LOGGER.warning(
        "Floating-point flag ignored; treating samples as unsigned integers",
        extra={"scale": factor},
    )


def downsample(
    source: BufferLike,
    width: int,
    height: int,
    scale_factor: float,
    bytes_per_pixel: int,
    little_endian: bool,
    floating_point: bool,
    channels: int,
    interleaved: bool,
    *,
    config: Optional[ScalerConfig] = None,
) -> BufferLike:
    """Downsample a raw raster buffer by an integer factor.

    Parameters
    ----------
    source : bytes-like
        Pixel data, interleaved (Y, X, C) or planar (C, Y, X).
    width, height : int
        Source size in pixels.
    scale_factor : float
        Reduction factor; must be a whole number >= 1.
    bytes_per_pixel : {1, 2}
        Bytes per channel sample.
    little_endian : bool
        Byte order of 16-bit samples. Ignored unless
        ``config.honor_byte_order`` is set.
    floating_point : bool
        Whether samples are floats. Ignored (with a warning) unless
        ``config.reject_floating_point`` is set.
    channels : int
        Channel count, >= 1.
    interleaved : bool
        Channel layout flag.
    config : ScalerConfig, optional
        Behaviour switches; defaults to ``DEFAULT_CONFIG``.

    Returns
    -------
    bytes-like
        ``(width // n) * (height // n) * channels * bytes_per_pixel`` bytes,
        or ``source`` itself when ``n == 1``.

    Raises
    ------
    InvalidScaleFactor
        ``scale_factor`` is not a whole number >= 1.
    UnsupportedPixelDepth
        ``bytes_per_pixel`` is not 1 or 2. Checked up front, so this is
        raised even when ``scale_factor == 1``.
    UnsupportedSampleFormat
        ``floating_point`` is set and ``config.reject_floating_point`` is on.
    BufferSizeMismatch
        ``source`` is shorter than the frame.
    """
    geometry = ImageGeometry(
        width=width,
        height=height,
        bytes_per_pixel=bytes_per_pixel,
        channels=channels,
        layout=Layout.from_flag(interleaved),
        little_endian=little_endian,
        floating_point=floating_point,
    )
    return downsample_geometry(source, geometry, scale_factor, config=config)


def downsample_geometry(
    source: BufferLike,
    geometry: ImageGeometry,
    scale_factor: float,
    *,
    config: Optional[ScalerConfig] = None,
) -> BufferLike:
    """Same as ``downsample`` with the image described by an ``ImageGeometry``."""
    cfg = config or DEFAULT_CONFIG
    factor = normalize_scale_factor(scale_factor)
    check_depth(geometry.bytes_per_pixel)
    check_sample_format(geometry, cfg, factor)

    if factor == 1:
        LOGGER.debug("Scale factor 1, returning source", extra={"scale": factor})
        return bytes(source) if cfg.copy_identity else source

    if len(source) < geometry.frame_bytes:
        raise BufferSizeMismatch(
            f"Buffer holds {len(source)} bytes, geometry needs {geometry.frame_bytes}"
        )
    new_w, new_h = geometry.scaled(factor)
    if new_w == 0 or new_h == 0:
        LOGGER.debug(
            "Image %dx%d smaller than scale factor, nothing to sample",
            geometry.width,
            geometry.height,
            extra={"scale": factor},
        )
        return b""

    shifted = _sample_all_shifts(source, geometry, factor, cfg.max_workers)
    byte_order = "big"
    if cfg.honor_byte_order and geometry.little_endian:
        byte_order = "little"
    return average(shifted, new_w * new_h * geometry.channels, geometry.bytes_per_pixel, byte_order)


def _sample_all_shifts(
    source: BufferLike, geometry: ImageGeometry, factor: int, max_workers: int
) -> List[BufferLike]:
    shifts = shift_set(factor)
    LOGGER.debug(
        "Sampling %d phase shifts of %dx%d image",
        len(shifts),
        geometry.width,
        geometry.height,
        extra={"scale": factor},
    )
    if max_workers <= 1:
        return [sample(source, geometry, factor, xs, ys) for xs, ys in shifts]
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = [pool.submit(sample, source, geometry, factor, xs, ys) for xs, ys in shifts]
        return [fut.result() for fut in futures]
