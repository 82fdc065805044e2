"""Tests for fingerprint computation and dimension probing."""

import pytest
from PIL import Image
import imagehash

from burstpick.grouping.hash import (
    FINGERPRINT_BITS,
    HashComputationError,
    compute_fingerprint,
    probe_dimensions,
)
from tests.helpers.photo_factory import LEFT_HALF, TOP_HALF, save_pattern_image


class TestComputeFingerprint:
    def test_fingerprint_is_64_bits(self, tmp_path):
        path = save_pattern_image(tmp_path / "left.png", LEFT_HALF)

        fingerprint = compute_fingerprint(path)

        assert isinstance(fingerprint, imagehash.ImageHash)
        assert fingerprint.hash.size == FINGERPRINT_BITS

    def test_bits_follow_bright_cells(self, tmp_path):
        """A cell brighter than the mean sets its bit."""
        path = save_pattern_image(tmp_path / "left.png", LEFT_HALF)

        fingerprint = compute_fingerprint(path)

        assert (fingerprint.hash == LEFT_HALF).all()

    def test_uniform_image_has_no_bits_set(self, tmp_path):
        """No sample is strictly greater than the mean of a flat image."""
        path = tmp_path / "flat.png"
        Image.new('RGB', (40, 30), color=(90, 90, 90)).save(path)

        fingerprint = compute_fingerprint(path)

        assert not fingerprint.hash.any()

    def test_brightness_change_keeps_fingerprint(self, tmp_path):
        bright = save_pattern_image(tmp_path / "bright.png", LEFT_HALF, white=255)
        dim = save_pattern_image(tmp_path / "dim.png", LEFT_HALF, white=180)

        assert compute_fingerprint(bright) == compute_fingerprint(dim)

    def test_different_scenes_differ(self, tmp_path):
        left = save_pattern_image(tmp_path / "left.png", LEFT_HALF)
        top = save_pattern_image(tmp_path / "top.png", TOP_HALF)

        assert compute_fingerprint(left) - compute_fingerprint(top) == 32

    def test_different_modes(self, tmp_path):
        rgba_path = tmp_path / "rgba.png"
        Image.new('RGBA', (50, 50), color=(255, 0, 0, 128)).save(rgba_path)
        gray_path = tmp_path / "gray.png"
        Image.new('L', (50, 50), color=128).save(gray_path)

        assert compute_fingerprint(rgba_path).hash.size == FINGERPRINT_BITS
        assert compute_fingerprint(gray_path).hash.size == FINGERPRINT_BITS

    def test_deterministic(self, tmp_path):
        path = save_pattern_image(tmp_path / "left.png", LEFT_HALF)
        assert compute_fingerprint(path) == compute_fingerprint(path)

    def test_nonexistent_file(self, tmp_path):
        with pytest.raises(HashComputationError):
            compute_fingerprint(tmp_path / "missing.png")

    def test_corrupted_file(self, tmp_path):
        corrupted = tmp_path / "corrupted.jpg"
        corrupted.write_bytes(b"not an image")

        with pytest.raises(HashComputationError):
            compute_fingerprint(corrupted)


class TestProbeDimensions:
    def test_reads_width_and_height(self, tmp_path):
        path = tmp_path / "wide.png"
        Image.new('RGB', (120, 80), 'white').save(path)

        assert probe_dimensions(path) == (120, 80)

    def test_unreadable_file_returns_none(self, tmp_path):
        corrupted = tmp_path / "corrupted.png"
        corrupted.write_bytes(b"\x89PNG broken")

        assert probe_dimensions(corrupted) is None

    def test_missing_file_returns_none(self, tmp_path):
        assert probe_dimensions(tmp_path / "missing.png") is None
