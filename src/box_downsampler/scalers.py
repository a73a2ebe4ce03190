"""Interchangeable image scalers sharing the ``downsample`` signature."""

from __future__ import annotations

from typing import Dict, Optional, Protocol, Type

from box_downsampler.averager import check_depth
from box_downsampler.config import DEFAULT_CONFIG, ScalerConfig
from box_downsampler.downsampler import check_sample_format, downsample
from box_downsampler.geometry import ImageGeometry, Layout, normalize_scale_factor
from box_downsampler.sampler import BufferLike, sample

__all__ = [
    "ImageScaler",
    "SimpleImageScaler",
    "AverageImageScaler",
    "get_scaler",
]


class ImageScaler(Protocol):
    """Anything that reduces a raw raster buffer by an integer factor."""

    def downsample(
        self,
        source: BufferLike,
        width: int,
        height: int,
        scale_factor: float,
        bytes_per_pixel: int,
        little_endian: bool,
        floating_point: bool,
        channels: int,
        interleaved: bool,
    ) -> BufferLike:
        ...


class SimpleImageScaler:
    """Nearest-neighbour scaler: keeps the upper-left pixel of every block."""

    def __init__(self, config: Optional[ScalerConfig] = None) -> None:
        self.config = config or DEFAULT_CONFIG

    def downsample(
        self,
        source: BufferLike,
        width: int,
        height: int,
        scale_factor: float,
        bytes_per_pixel: int,
        little_endian: bool,
        floating_point: bool,
        channels: int,
        interleaved: bool,
    ) -> BufferLike:
        factor = normalize_scale_factor(scale_factor)
        check_depth(bytes_per_pixel)
        geometry = ImageGeometry(
            width=width,
            height=height,
            bytes_per_pixel=bytes_per_pixel,
            channels=channels,
            layout=Layout.from_flag(interleaved),
            little_endian=little_endian,
            floating_point=floating_point,
        )
        check_sample_format(geometry, self.config, factor)
        if factor == 1:
            return bytes(source) if self.config.copy_identity else source
        return sample(source, geometry, factor)


class AverageImageScaler:
    """Box-filter scaler averaging every phase-shifted nearest-neighbour sample."""

    def __init__(self, config: Optional[ScalerConfig] = None) -> None:
        self.config = config or DEFAULT_CONFIG

    def downsample(
        self,
        source: BufferLike,
        width: int,
        height: int,
        scale_factor: float,
        bytes_per_pixel: int,
        little_endian: bool,
        floating_point: bool,
        channels: int,
        interleaved: bool,
    ) -> BufferLike:
        return downsample(
            source,
            width,
            height,
            scale_factor,
            bytes_per_pixel,
            little_endian,
            floating_point,
            channels,
            interleaved,
            config=self.config,
        )


_SCALERS: Dict[str, Type] = {
    "simple": SimpleImageScaler,
    "average": AverageImageScaler,
}


def get_scaler(name: str, config: Optional[ScalerConfig] = None) -> ImageScaler:
    """Return a scaler by name (``"simple"`` or ``"average"``)."""
    try:
        cls = _SCALERS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown scaler: {name}") from None
    return cls(config)
