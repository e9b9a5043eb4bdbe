"""Tests for the temperature -> background color ladder."""

import math

import pytest

from weatherscene.core.palette import ColorBucket, color_for, rgb


class TestColorFor:
    @pytest.mark.parametrize("temp,bucket", [
        (50.0, ColorBucket.BLACK),
        (40.0, ColorBucket.DARK_RED),
        (30.0, ColorBucket.CRIMSON),
        (25.0, ColorBucket.ORANGE_RED),
        (20.0, ColorBucket.ORANGE),
        (15.0, ColorBucket.GOLD),
        (5.0, ColorBucket.LIGHT_YELLOW),
        (0.0, ColorBucket.PALE_GREEN),
        (-5.0, ColorBucket.POWDER_BLUE),
        (-15.0, ColorBucket.ROYAL_BLUE),
        (-20.0, ColorBucket.SLATE_BLUE),
        (-25.0, ColorBucket.REBECCA_PURPLE),
        (-30.0, ColorBucket.INDIGO),
    ])
    def test_band_representatives(self, temp, bucket):
        assert color_for(temp) is bucket

    @pytest.mark.parametrize("threshold,above,at", [
        (46.0, ColorBucket.BLACK, ColorBucket.DARK_RED),
        (38.0, ColorBucket.DARK_RED, ColorBucket.CRIMSON),
        (29.0, ColorBucket.CRIMSON, ColorBucket.ORANGE_RED),
        (24.0, ColorBucket.ORANGE_RED, ColorBucket.ORANGE),
        (16.0, ColorBucket.ORANGE, ColorBucket.GOLD),
        (10.0, ColorBucket.GOLD, ColorBucket.LIGHT_YELLOW),
        (4.0, ColorBucket.LIGHT_YELLOW, ColorBucket.PALE_GREEN),
        (-1.0, ColorBucket.PALE_GREEN, ColorBucket.POWDER_BLUE),
        (-9.0, ColorBucket.POWDER_BLUE, ColorBucket.ROYAL_BLUE),
        (-18.0, ColorBucket.ROYAL_BLUE, ColorBucket.SLATE_BLUE),
        (-23.0, ColorBucket.SLATE_BLUE, ColorBucket.REBECCA_PURPLE),
    ])
    def test_strict_thresholds(self, threshold, above, at):
        assert color_for(threshold + 0.01) is above
        assert color_for(threshold) is at

    def test_lowest_band_is_inclusive(self):
        assert color_for(-29.0) is ColorBucket.REBECCA_PURPLE
        assert color_for(-29.01) is ColorBucket.INDIGO

    def test_non_finite(self):
        assert color_for(math.nan) is ColorBucket.INDIGO
        assert color_for(math.inf) is ColorBucket.BLACK
        assert color_for(-math.inf) is ColorBucket.INDIGO

    def test_accepts_ints(self):
        assert color_for(20) is ColorBucket.ORANGE

    def test_every_bucket_reachable(self):
        temps = [50, 40, 30, 25, 20, 15, 5, 0, -5, -15, -20, -25, -30]
        assert {color_for(t) for t in temps} == set(ColorBucket)


class TestColors:
    def test_bucket_rgb(self):
        assert ColorBucket.ORANGE.rgb == (255, 165, 0)
        assert ColorBucket.REBECCA_PURPLE.rgb == (102, 51, 153)
        assert ColorBucket.PALE_GREEN.rgb == (152, 251, 152)

    def test_rgb_lookup_is_case_insensitive(self):
        assert rgb("DimGray") == (105, 105, 105)
