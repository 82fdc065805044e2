"""Tests for the photo quality score."""

import pytest
from hypothesis import given, strategies as st

from burstpick.grouping.quality import (
    naming_term,
    quality_score,
    resolution_term,
    size_term,
)

MB = 1024 * 1024


class TestTerms:
    def test_resolution_caps_at_24_megapixels(self):
        assert resolution_term((6000, 4000)) == 40
        assert resolution_term((12000, 8000)) == 40

    def test_resolution_scales_linearly(self):
        assert resolution_term((4000, 3000)) == pytest.approx(20.0)

    def test_resolution_without_dimensions(self):
        assert resolution_term(None) == 0

    def test_size_caps_at_10_mb(self):
        assert size_term(10 * MB) == 30
        assert size_term(50 * MB) == 30
        assert size_term(5 * MB) == pytest.approx(15.0)
        assert size_term(0) == 0

    @pytest.mark.parametrize("name", [
        "IMG_0001-edit.jpg",
        "IMG_0001 copy.jpg",
        "Duplicate of beach.png",
        "IMG_0001 (1).jpg",
        "IMG_0001 (2).JPG",
        "EDITED.JPG",
    ])
    def test_derived_names_penalized(self, name):
        assert naming_term(name) == 10

    @pytest.mark.parametrize("name", ["IMG_0001.jpg", "DSC00042.ARW.jpg", "beach (3).png"])
    def test_original_names_full_score(self, name):
        assert naming_term(name) == 30


class TestQualityScore:
    def test_maximum_is_100(self):
        assert quality_score("IMG_0001.jpg", 12 * MB, (6000, 4000)) == 100

    def test_defined_without_dimensions(self):
        assert quality_score("IMG_0001.jpg", 0, None) == 30

    def test_combines_terms(self):
        # 20 (12 MP) + 15 (5 MB) + 10 (copy)
        assert quality_score("IMG_0001 copy.jpg", 5 * MB, (4000, 3000)) == 45

    def test_rounds_to_nearest(self):
        # 0.5 MB -> 1.5 points; total 31.5 rounds up
        assert quality_score("a.jpg", MB // 2, None) == 32

    @given(
        name=st.text(max_size=40),
        size=st.integers(min_value=0, max_value=10**12),
        dimensions=st.one_of(
            st.none(),
            st.tuples(st.integers(min_value=0, max_value=100_000), st.integers(min_value=0, max_value=100_000)),
        ),
    )
    def test_always_within_bounds(self, name, size, dimensions):
        score = quality_score(name, size, dimensions)
        assert isinstance(score, int)
        assert 0 <= score <= 100
