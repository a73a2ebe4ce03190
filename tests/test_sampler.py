import numpy as np
import pytest

from box_downsampler.errors import BufferSizeMismatch, InvalidScaleFactor
from box_downsampler.geometry import ImageGeometry, Layout
from box_downsampler.sampler import sample, step_positions


def test_step_positions_exact_multiple() -> None:
    assert step_positions(4, 2) == [0, 2]
    assert step_positions(4, 2, shift=1) == [1, 3]
    assert step_positions(8, 2, shift=2) == [2, 6]


def test_step_positions_spreads_remainder() -> None:
    # 11 columns into 3: step 3, one extra column taken before the last pick.
    assert step_positions(11, 3) == [0, 3, 7]
    assert step_positions(11, 3, shift=2) == [2, 5, 9]


@pytest.mark.parametrize("length", range(1, 40))
@pytest.mark.parametrize("factor", [1, 2, 3, 4, 5])
def test_step_positions_stay_in_bounds(length, factor) -> None:
    new_length = length // factor
    if new_length == 0:
        return
    for shift in range(factor):
        positions = step_positions(length, new_length, shift)
        assert len(positions) == new_length
        assert positions == sorted(positions)
        assert max(positions) < length


def test_sample_picks_phase_pixels(ramp_u8) -> None:
    src = ramp_u8(4, 4, start=1)
    geom = ImageGeometry(width=4, height=4)
    assert list(sample(src, geom, 2, 0, 0)) == [1, 3, 9, 11]
    assert list(sample(src, geom, 2, 1, 0)) == [2, 4, 10, 12]
    assert list(sample(src, geom, 2, 0, 1)) == [5, 7, 13, 15]
    assert list(sample(src, geom, 2, 1, 1)) == [6, 8, 14, 16]


def test_sample_interleaved_copies_all_channel_bytes() -> None:
    # 2x2 pixels, 2 channels, 16-bit: each sample is unique.
    arr = np.arange(16, dtype=np.uint8).reshape(2, 2, 2, 2)
    geom = ImageGeometry(width=2, height=2, bytes_per_pixel=2, channels=2)
    out = sample(arr.tobytes(), geom, 2, 1, 1)
    assert out == arr[1, 1].tobytes()


def test_sample_planar_keeps_planes_separate() -> None:
    planes = np.stack([np.full((4, 4), 7, np.uint8), np.arange(16, dtype=np.uint8).reshape(4, 4)])
    geom = ImageGeometry(width=4, height=4, channels=2, layout=Layout.PLANAR)
    out = np.frombuffer(sample(planes.tobytes(), geom, 2, 1, 0), dtype=np.uint8)
    assert list(out[:4]) == [7, 7, 7, 7]
    assert list(out[4:]) == [1, 3, 9, 11]


def test_sample_identity_returns_same_object(ramp_u8) -> None:
    src = ramp_u8(3, 3)
    geom = ImageGeometry(width=3, height=3)
    assert sample(src, geom, 1) is src


def test_sample_too_small_image_is_empty(ramp_u8) -> None:
    geom = ImageGeometry(width=3, height=5)
    assert sample(ramp_u8(3, 5), geom, 4) == b""


def test_sample_rejects_out_of_range_phase(ramp_u8) -> None:
    geom = ImageGeometry(width=4, height=4)
    with pytest.raises(InvalidScaleFactor):
        sample(ramp_u8(4, 4), geom, 2, 2, 0)
    with pytest.raises(InvalidScaleFactor):
        sample(ramp_u8(4, 4), geom, 2, 0, -1)


def test_sample_short_buffer(ramp_u8) -> None:
    geom = ImageGeometry(width=4, height=4)
    with pytest.raises(BufferSizeMismatch):
        sample(ramp_u8(4, 3), geom, 2)


def test_sample_ignores_trailing_bytes(ramp_u8) -> None:
    geom = ImageGeometry(width=4, height=4)
    src = ramp_u8(4, 4, start=1)
    assert sample(src + b"\xff\xff", geom, 2) == sample(src, geom, 2)


def test_sample_accepts_bytearray_and_memoryview(ramp_u8) -> None:
    geom = ImageGeometry(width=4, height=4)
    src = ramp_u8(4, 4)
    expected = sample(src, geom, 2, 1, 1)
    assert sample(bytearray(src), geom, 2, 1, 1) == expected
    assert sample(memoryview(src), geom, 2, 1, 1) == expected
