"""Tests for the condition code -> effect variant table."""

import numpy as np
import pytest

from weatherscene.core.effects import (
    AtmosphericParticles,
    ClearSky,
    NoEffect,
    Overcast,
    Rain,
    Sleet,
    Snow,
    Squalls,
    Thunderstorm,
    Tornado,
    build_table,
    classify,
    known_codes,
)

EXPECTED = {}
for _codes, _variant in (
    ((200, 201, 210, 230, 231, 232), Thunderstorm(50)),
    ((202, 211, 212, 221), Thunderstorm(100)),
    ((300, 301, 302, 310, 311, 312, 313, 314, 321), Rain(10)),
    ((500, 501, 511, 520, 521, 531), Rain(50)),
    ((502, 503, 504, 522), Rain(100)),
    ((600, 601, 602, 612, 615, 616, 620, 621, 622), Snow()),
    ((611, 613), Sleet()),
    ((701, 721), AtmosphericParticles("lightgray")),
    ((711,), AtmosphericParticles("darkgray")),
    ((731, 761), AtmosphericParticles("burlywood")),
    ((751,), AtmosphericParticles("sandybrown")),
    ((762,), AtmosphericParticles("gray")),
    ((771,), Squalls()),
    ((781,), Tornado()),
    ((800,), ClearSky()),
    ((801,), Overcast(10)),
    ((802,), Overcast(50)),
    ((803,), Overcast(75)),
    ((804,), Overcast(100)),
):
    for _code in _codes:
        EXPECTED[_code] = _variant


class TestClassify:
    @pytest.mark.parametrize("code,variant", sorted(EXPECTED.items()))
    def test_known_codes(self, code, variant):
        assert classify(code) == variant

    def test_table_covers_exactly_the_known_codes(self):
        assert set(known_codes()) == set(EXPECTED)

    @pytest.mark.parametrize("code", [0, -1, 199, 203, 233, 303, 505, 623, 700, 782, 799, 805, 999, 10**9])
    def test_unknown_codes_have_no_effect(self, code):
        assert classify(code) == NoEffect()

    def test_double_listed_codes_keep_first_row(self):
        # 612 is listed under snow and sleet; 622 under light and heavy snow.
        assert classify(612) == Snow()
        assert classify(622) == Snow()

    def test_non_integer_codes_have_no_effect(self):
        assert classify(True) == NoEffect()
        assert classify(None) == NoEffect()
        assert classify("800") == NoEffect()

    def test_numpy_integer_codes(self):
        assert classify(np.int64(800)) == ClearSky()
        assert classify(np.int32(502)) == Rain(100)
        assert classify(np.bool_(True)) == NoEffect()
        assert classify(np.float64(800.0)) == NoEffect()

    def test_overcast_defaults_to_dry_clouds(self):
        assert classify(801).rain_layer is False


class TestBuildTable:
    def test_first_match_wins(self):
        table = build_table([((1, 2), Rain(10)), ((2, 3), Snow())])
        assert table == {1: Rain(10), 2: Rain(10), 3: Snow()}
