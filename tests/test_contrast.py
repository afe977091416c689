"""Tests for the whole-image CLAHE pipeline (depth + layout handling)."""

import cv2
import numpy as np
import pytest

from clahe_batch.config import ClaheParams
from clahe_batch.errors import UnsupportedChannelLayout, UnsupportedSampleDepth
from clahe_batch.filters import clahe_image, clahe_u8, equalize


def test_gray_u8_matches_equalize(noisy_u8):
    params = ClaheParams.square(2.0, 4)
    res = clahe_image(noisy_u8, params)
    np.testing.assert_array_equal(res.image, equalize(noisy_u8, 2.0, (4, 4)))
    assert res.lum_in is noisy_u8
    np.testing.assert_array_equal(res.lum_out, res.image)


def test_gray_single_channel_keeps_shape(noisy_u8):
    res = clahe_image(noisy_u8[:, :, None])
    assert res.image.shape == noisy_u8.shape + (1,)


def test_gray_u16_is_scaled_then_equalized(rng):
    img = rng.integers(0, 4096, size=(64, 64)).astype(np.uint16)
    res = clahe_image(img, ClaheParams.square(2.0, 4))
    assert res.image.dtype == np.uint8 and res.image.shape == img.shape
    assert res.lum_in.max() == 255


def test_color_output_layout(color_u8):
    res = clahe_image(color_u8, ClaheParams.square(3.0, 4))
    assert res.image.shape == color_u8.shape
    assert res.image.dtype == np.uint8
    assert res.lum_out.shape == color_u8.shape[:2]


def test_color_u16(rng):
    img = rng.integers(0, 65535, size=(32, 32, 3)).astype(np.uint16)
    res = clahe_image(img)
    assert res.image.shape == (32, 32, 3) and res.image.dtype == np.uint8


def test_alpha_passes_through(color_u8):
    alpha = np.linspace(0, 255, color_u8.shape[1]).astype(np.uint8)[None, :].repeat(color_u8.shape[0], 0)
    res = clahe_image(np.dstack([color_u8, alpha]))
    assert res.image.shape == color_u8.shape[:2] + (4,)
    np.testing.assert_array_equal(res.image[:, :, 3], alpha)


def test_flat_color_image_is_stable():
    img = np.full((32, 32, 3), (90, 120, 150), dtype=np.uint8)
    res = clahe_image(img, ClaheParams.square(2.0, 4))
    np.testing.assert_array_equal(res.lum_out, res.lum_in)
    assert np.abs(res.image.astype(int) - img.astype(int)).max() <= 4


def test_clahe_u8_wrapper(noisy_u8):
    np.testing.assert_array_equal(clahe_u8(noisy_u8, 2.0, 4), equalize(noisy_u8, 2.0, (4, 4)))


def test_equalization_spreads_low_contrast(rng):
    img = rng.integers(100, 140, size=(64, 64)).astype(np.uint8)
    res = clahe_image(img, ClaheParams.square(4.0, 2))
    assert res.lum_out.std() > res.lum_in.std()


def test_rejects_unsupported(rng):
    with pytest.raises(UnsupportedSampleDepth):
        clahe_image(rng.random((8, 8)).astype(np.float32))
    with pytest.raises(UnsupportedChannelLayout):
        clahe_image(np.zeros((8, 8, 2), np.uint8))


def test_color_keeps_chroma(color_u8):
    res = clahe_image(color_u8, ClaheParams.square(2.0, 4))
    ab_in = cv2.cvtColor(color_u8, cv2.COLOR_BGR2LAB)[:, :, 1:].astype(int)
    ab_out = cv2.cvtColor(res.image, cv2.COLOR_BGR2LAB)[:, :, 1:].astype(int)
    diff = np.abs(ab_out - ab_in)
    assert diff.mean() < 0.5
    assert diff.max() <= 8


@pytest.mark.parametrize("shape", [(0, 7), (0, 7, 1), (0, 7, 3), (5, 0, 4)])
def test_empty_image_gives_empty_u8(shape):
    res = clahe_image(np.zeros(shape, np.uint16))
    assert res.image.shape == shape and res.image.dtype == np.uint8
    assert res.lum_out.shape == shape[:2]


def test_empty_image_still_checks_depth():
    with pytest.raises(UnsupportedSampleDepth):
        clahe_image(np.zeros((0, 7, 3), np.float32))
