import numpy as np
import pytest

from scatterexplorer.analysis.scales import LinearScale
from scatterexplorer.controller.pipeline import ViewState, ViewTransformPipeline

CENTER = (385.0, 225.0)


@pytest.fixture
def pipeline(qapp):
    pipe = ViewTransformPipeline()
    records = [{"x": 0.0, "y": 0.0}, {"x": 5.0, "y": 5.0}, {"x": 10.0, "y": 10.0}]
    pipe.bind(
        records, "x", "y",
        LinearScale(domain=(0.0, 10.0), range=(0.0, 770.0)),
        LinearScale(domain=(0.0, 10.0), range=(450.0, 0.0)),
        trend_data=np.array([[0.0, 0.0], [10.0, 10.0]]),
    )
    return pipe


@pytest.fixture
def frames(pipeline):
    received = []
    pipeline.frame_changed.connect(received.append)
    return received


def test_bind_projects_positions(pipeline):
    frame = pipeline.current_frame()
    np.testing.assert_allclose(frame.positions, [[0.0, 450.0], [385.0, 225.0], [770.0, 0.0]])
    np.testing.assert_allclose(frame.trend, [[0.0, 450.0], [770.0, 0.0]])
    assert pipeline.state == ViewState.IDENTITY


def test_zoom_is_clamped(pipeline):
    pipeline.zoom_by(100.0, CENTER)
    assert pipeline.transform.k == 10.0
    pipeline.zoom_by(1e-6, CENTER)
    assert pipeline.transform.k == 0.5


def test_wheel_zooms_about_pointer(pipeline, frames):
    pipeline.wheel(5.0, CENTER)
    assert pipeline.transform.k == pytest.approx(2.0)
    frame = frames[-1]
    # the point under the pointer does not move
    np.testing.assert_allclose(frame.positions[1], CENTER)
    assert frame.x_scale.domain == pytest.approx((2.5, 7.5))
    assert frame.y_scale.domain == pytest.approx((2.5, 7.5))


def test_pan_is_bounded(pipeline):
    pipeline.pan_by(10_000.0, -10_000.0)
    assert pipeline.transform.x == pytest.approx(100.0)
    assert pipeline.transform.y == pytest.approx(-100.0)


def test_trend_is_reprojected_not_refit(pipeline, frames):
    pipeline.zoom_by(2.0, CENTER)
    frame = frames[-1]
    expected = np.column_stack([frame.x_scale(np.array([0.0, 10.0])), frame.y_scale(np.array([0.0, 10.0]))])
    np.testing.assert_allclose(frame.trend, expected)


def test_state_transitions(pipeline):
    states = []
    pipeline.state_changed.connect(states.append)

    pipeline.zoom_by(2.0, CENTER)
    pipeline.pan_by(10.0, 0.0)
    assert pipeline.state == ViewState.TRANSFORMED

    pipeline.reset(animate=False)
    assert pipeline.state == ViewState.IDENTITY
    assert states == [ViewState.TRANSFORMED, ViewState.IDENTITY]


def test_reset_restores_identity_frame(pipeline, frames):
    initial = pipeline.current_frame()
    finished = []
    pipeline.reset_finished.connect(lambda: finished.append(True))

    pipeline.zoom_by(3.0, (100.0, 300.0))
    pipeline.pan_by(-40.0, 20.0)
    pipeline.reset(animate=False)

    frame = frames[-1]
    assert frame.transform.is_identity
    np.testing.assert_allclose(frame.positions, initial.positions)
    assert frame.x_scale.domain == pytest.approx(initial.x_scale.domain)
    assert finished == [True]


def test_animated_reset_starts_timer(pipeline):
    pipeline.zoom_by(2.0, CENTER)
    pipeline.reset(animate=True)
    assert pipeline.is_animating

    # a user gesture interrupts the animation
    pipeline.pan_by(1.0, 0.0)
    assert not pipeline.is_animating


def test_reset_at_identity_finishes_immediately(pipeline):
    finished = []
    pipeline.reset_finished.connect(lambda: finished.append(True))
    pipeline.reset(animate=True)
    assert not pipeline.is_animating
    assert finished == [True]


def test_rebind_goes_back_to_identity(pipeline):
    pipeline.zoom_by(2.0, CENTER)
    frame = pipeline.bind(
        [{"x": 1.0, "y": 1.0}], "x", "y",
        LinearScale(domain=(0.0, 2.0), range=(0.0, 770.0)),
        LinearScale(domain=(0.0, 2.0), range=(450.0, 0.0)),
    )
    assert pipeline.state == ViewState.IDENTITY
    assert frame.trend is None
    np.testing.assert_allclose(frame.positions, [[385.0, 225.0]])
