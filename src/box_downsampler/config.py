"""Configuration dataclasses for the downsampling pipeline."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScalerConfig:
    """Behaviour switches for ``downsample``.

    The defaults reproduce the reference behaviour: identity requests return
    the source buffer itself, 16-bit samples are decoded and encoded
    big-endian whatever the caller's byte-order flag says, and the
    floating-point flag is ignored.

    Notes
    -----
    ``max_workers > 1`` samples the phase shifts on a thread pool. The result
    does not depend on it because averaging is order independent.
    """

    copy_identity: bool = False
    honor_byte_order: bool = False
    reject_floating_point: bool = False
    max_workers: int = 1


DEFAULT_CONFIG = ScalerConfig()
