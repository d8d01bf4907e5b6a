import numpy as np
import pytest

from scatterexplorer.analysis.scales import (
    CATEGORY10, LinearScale, OrdinalColorScale, build_color_domain, build_linear, tick_increment, ticks,
)


def test_linear_scale_maps_and_inverts():
    scale = LinearScale(domain=(0.0, 10.0), range=(450.0, 0.0))
    assert scale(0.0) == 450.0
    assert scale(10.0) == 0.0
    assert scale(5.0) == 225.0
    assert scale.invert(225.0) == pytest.approx(5.0)
    np.testing.assert_allclose(scale(np.array([0.0, 2.5])), [450.0, 337.5])


def test_linear_scale_zero_width_domain_maps_to_middle():
    scale = LinearScale(domain=(3.0, 3.0), range=(0.0, 100.0))
    assert scale(3.0) == 50.0


@pytest.mark.parametrize(
    "domain, expected",
    [
        ((0.13, 9.7), (0.0, 10.0)),
        ((14.0, 25.0), (14.0, 25.0)),
        ((13.55, 24.45), (13.0, 25.0)),
        ((-2.4, 6.4), (-3.0, 7.0)),
        ((0.001, 0.0093), (0.001, 0.01)),
    ],
)
def test_nice(domain, expected):
    assert LinearScale(domain=domain).nice().domain == pytest.approx(expected)


def test_ticks_are_round_values():
    assert ticks(0.0, 1.0, 5) == pytest.approx([0.0, 0.2, 0.4, 0.6, 0.8, 1.0])
    assert ticks(0.0, 100.0, 10) == pytest.approx([float(v) for v in range(0, 101, 10)])
    assert ticks(5.0, 5.0) == [5.0]
    assert ticks(10.0, 0.0, 2) == pytest.approx([10.0, 5.0, 0.0])


def test_tick_increment_negative_for_sub_unit_steps():
    assert tick_increment(0.0, 1.0, 10) == -10.0
    assert tick_increment(0.0, 100.0, 10) == 10.0
    assert tick_increment(1.0, 1.0, 10) == 0.0


def test_build_linear_pads_range():
    records = [{"v": 0}, {"v": 100}]
    lo, hi = build_linear(records, "v")
    assert lo <= -5.0
    assert hi >= 105.0


def test_build_linear_constant_field_gets_unit_padding():
    records = [{"v": 7.3}] * 4
    lo, hi = build_linear(records, "v")
    assert hi - lo >= 2.0
    assert lo < 7.3 < hi
    assert abs((lo + hi) / 2 - 7.3) <= 0.5


def test_build_linear_missing_values_count_as_zero():
    lo, hi = build_linear([{"v": None}, {"v": 10}], "v")
    assert lo <= 0.0 <= hi


def test_build_linear_empty_dataset():
    assert build_linear([], "v") == (-1.0, 1.0)


def test_color_domain_first_seen_order():
    records = [{"g": "B"}, {"g": "A"}, {"g": None}, {"g": "B"}, {"g": " "}]
    assert build_color_domain(records, "g") == ["B", "A", "Unknown"]


def test_ordinal_color_scale_cycles_palette():
    labels = [f"c{i}" for i in range(12)]
    scale = OrdinalColorScale(labels)
    assert scale("c0") == CATEGORY10[0]
    assert scale("c10") == CATEGORY10[0]
    assert scale("c11") == CATEGORY10[1]


def test_ordinal_color_scale_is_stable_and_extends():
    scale = OrdinalColorScale(["Male", "Female"])
    assert scale("Female") == scale("Female") == CATEGORY10[1]
    assert scale("Other") == CATEGORY10[2]
    assert scale.domain == ["Male", "Female", "Other"]


def test_build_linear_huge_values_stay_finite():
    lo, hi = build_linear([{"v": 1e308}, {"v": -1e308}], "v")
    assert np.isfinite(lo) and np.isfinite(hi)
    assert lo < 0.0 < hi

    scale = LinearScale(domain=(lo, hi), range=(0.0, 770.0))
    assert np.isfinite(scale(1e308))
    assert all(np.isfinite(v) for v in scale.ticks())
