"""Box-filter image downsampler."""

from box_downsampler.config import DEFAULT_CONFIG, ScalerConfig
from box_downsampler.downsampler import downsample, downsample_geometry
from box_downsampler.errors import (
    BufferSizeMismatch,
    DownsampleError,
    InvalidGeometry,
    InvalidScaleFactor,
    UnsupportedPixelDepth,
    UnsupportedSampleFormat,
)
from box_downsampler.geometry import ImageGeometry, Layout
from box_downsampler.pyramid import build_pyramid, downsample_array
from box_downsampler.scalers import AverageImageScaler, SimpleImageScaler, get_scaler

__all__ = [
    "__version__",
    "downsample",
    "downsample_geometry",
    "downsample_array",
    "build_pyramid",
    "ImageGeometry",
    "Layout",
    "ScalerConfig",
    "DEFAULT_CONFIG",
    "AverageImageScaler",
    "SimpleImageScaler",
    "get_scaler",
    "DownsampleError",
    "InvalidScaleFactor",
    "UnsupportedPixelDepth",
    "UnsupportedSampleFormat",
    "InvalidGeometry",
    "BufferSizeMismatch",
]

__version__ = "1.0.0"
