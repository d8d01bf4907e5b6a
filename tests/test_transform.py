import pytest

from scatterexplorer.analysis.scales import LinearScale
from scatterexplorer.analysis.transform import (
    IDENTITY, ViewTransform, clamp_scale, constrain, ease_cubic, interpolate, scale_to,
)
from scatterexplorer.controller.reconcile import reconcile

EXTENT = ((0.0, 0.0), (770.0, 450.0))
TRANSLATE_EXTENT = ((-100.0, -100.0), (870.0, 550.0))


def test_identity_round_trip():
    assert IDENTITY.is_identity
    assert IDENTITY.apply((3.0, 4.0)) == (3.0, 4.0)
    t = ViewTransform(2.0, 10.0, -5.0)
    assert t.invert(t.apply((3.0, 4.0))) == pytest.approx((3.0, 4.0))


def test_scale_to_keeps_anchor_fixed():
    anchor = (100.0, 50.0)
    t = scale_to(IDENTITY, 2.0, anchor)
    assert (t.k, t.x, t.y) == (2.0, -100.0, -50.0)
    assert t.invert(anchor) == pytest.approx(anchor)

    t2 = scale_to(t, 4.0, (300.0, 200.0))
    assert t2.apply(t.invert((300.0, 200.0))) == pytest.approx((300.0, 200.0))


def test_clamp_scale():
    assert clamp_scale(100.0, (0.5, 10.0)) == 10.0
    assert clamp_scale(0.01, (0.5, 10.0)) == 0.5
    assert clamp_scale(3.0, (0.5, 10.0)) == 3.0


def test_constrain_limits_pan_to_margin():
    panned = constrain(ViewTransform(1.0, 500.0, -1000.0), EXTENT, TRANSLATE_EXTENT)
    assert panned.x == pytest.approx(100.0)
    assert panned.y == pytest.approx(-100.0)


def test_constrain_leaves_inner_transform_untouched():
    t = ViewTransform(2.0, -385.0, -225.0)
    assert constrain(t, EXTENT, TRANSLATE_EXTENT) == t


def test_constrain_centers_when_zoomed_out():
    t = constrain(ViewTransform(0.5, 0.0, 0.0), EXTENT, TRANSLATE_EXTENT)
    # plot center stays at the viewport center
    assert t.apply((385.0, 225.0)) == pytest.approx((385.0, 225.0))


def test_rescale_follows_transform():
    scale = LinearScale(domain=(0.0, 10.0), range=(0.0, 770.0))
    assert IDENTITY.rescale_x(scale).domain == pytest.approx((0.0, 10.0))
    assert ViewTransform(2.0, 0.0, 0.0).rescale_x(scale).domain == pytest.approx((0.0, 5.0))

    y_scale = LinearScale(domain=(0.0, 10.0), range=(450.0, 0.0))
    zoomed = ViewTransform(2.0, 0.0, -450.0).rescale_y(y_scale)
    assert zoomed.domain == pytest.approx((0.0, 5.0))


def test_interpolate_and_easing():
    start = ViewTransform(3.0, -300.0, 60.0)
    assert interpolate(start, IDENTITY, 0.0) == start
    assert interpolate(start, IDENTITY, 1.0) == IDENTITY
    assert interpolate(start, IDENTITY, 0.5) == ViewTransform(2.0, -150.0, 30.0)
    assert ease_cubic(0.0) == 0.0
    assert ease_cubic(0.5) == 0.5
    assert ease_cubic(1.0) == 1.0
    assert ease_cubic(0.25) < 0.25


# ------------------------------------------------------------------------------
# Keyed reconciliation
# ------------------------------------------------------------------------------
def test_reconcile_initial_draw():
    diff = reconcile([], [1, 2, 3])
    assert diff.entered == [1, 2, 3]
    assert diff.is_initial


def test_reconcile_partitions_ids():
    diff = reconcile([1, 2, 3, 4], [3, 4, 5])
    assert diff.entered == [5]
    assert diff.exited == [1, 2]
    assert diff.retained == [3, 4]
    assert not diff.is_initial


def test_reconcile_same_ids_retains_everything():
    diff = reconcile([1, 2], [2, 1])
    assert diff.entered == [] and diff.exited == []
    assert diff.retained == [2, 1]
