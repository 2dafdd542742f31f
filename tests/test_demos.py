import numpy as np
import pytest
from matplotlib.backend_bases import MouseEvent
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from mousemanager.demos import (
    DEMOS,
    build_camera_demo,
    build_hovering_demo,
    build_panning_demo,
    build_windowing_demo,
    sample_image,
)


@pytest.fixture
def fig():
    figure = Figure(figsize=(4, 3), dpi=100)
    FigureCanvasAgg(figure)
    return figure


def _fire(fig, name, x, y, **kwargs):
    fig.canvas.callbacks.process(name, MouseEvent(name, fig.canvas, x, y, **kwargs))


def _center(ax):
    bbox = ax.bbox
    return (bbox.x0 + bbox.x1) / 2.0, (bbox.y0 + bbox.y1) / 2.0


def test_demo_table_lists_every_builder():
    assert set(DEMOS) == {"panning", "hovering", "windowing", "camera"}


def test_panning_demo_pans_zooms_and_resets(fig):
    manager = build_panning_demo(fig, image=sample_image(40, 60))
    ax = manager.items[0]
    fig.canvas.draw()
    initial_x, initial_y = ax.get_xlim(), ax.get_ylim()
    x, y = _center(ax)

    _fire(fig, "button_press_event", x, y, button=1)
    _fire(fig, "motion_notify_event", x + 20, y)
    _fire(fig, "button_release_event", x + 20, y, button=1)

    panned = ax.get_xlim()
    assert panned[0] < initial_x[0]
    assert panned[1] - panned[0] == pytest.approx(initial_x[1] - initial_x[0])
    assert ax.get_ylim() == pytest.approx(initial_y)

    _fire(fig, "scroll_event", x, y, button="up", step=1)
    zoomed = ax.get_xlim()
    assert zoomed[1] - zoomed[0] == pytest.approx((initial_x[1] - initial_x[0]) / 1.25)

    _fire(fig, "button_press_event", x, y, button=1, dblclick=True)
    _fire(fig, "button_release_event", x, y, button=1)
    assert ax.get_xlim() == pytest.approx(initial_x)
    assert ax.get_ylim() == pytest.approx(initial_y)


def test_hovering_demo_shows_and_clears_readout(fig):
    image = sample_image(40, 60)
    manager = build_hovering_demo(fig, image=image)
    ax = manager.items[0]
    fig.canvas.draw()
    (readout,) = ax.texts
    x, y = _center(ax)

    _fire(fig, "motion_notify_event", x, y)
    col, row = ax.transData.inverted().transform((x, y))
    col, row = int(round(col)), int(round(row))
    expected = "({},{},{})".format(*(int(v) for v in image[row, col]))
    assert readout.get_text() == expected

    _fire(fig, "motion_notify_event", 1, 1)
    assert readout.get_text() == ""


def test_windowing_demo_drags_the_lower_line(fig):
    data = np.linspace(0.0, 1.0, 100)
    manager = build_windowing_demo(fig, data=data)
    lower, upper = manager.items
    ax = lower.axes
    fig.canvas.draw()

    start = ax.transData.transform((1.2, 0.5))
    target = ax.transData.transform((30.4, 0.5))
    _fire(fig, "button_press_event", *start, button=1)
    _fire(fig, "motion_notify_event", *target)
    _fire(fig, "button_release_event", *target, button=1)

    assert list(lower.get_xdata()) == [31, 31]
    assert list(upper.get_xdata()) == [100, 100]
    assert ax.get_title() == f"Mean = {data[30:].mean():f}"


def test_windowing_demo_clamps_the_upper_line_to_the_lower_one(fig):
    manager = build_windowing_demo(fig, data=np.ones(20))
    lower, upper = manager.items
    ax = upper.axes
    fig.canvas.draw()

    _fire(fig, "button_press_event", *ax.transData.transform((19.9, 0.5)), button=1)
    _fire(fig, "motion_notify_event", *ax.transData.transform((-5, 0.5)))

    assert list(upper.get_xdata()) == [1, 1]
    assert ax.get_title() == "Mean = 1.000000"


def test_camera_demo_orbits_and_resets(fig):
    manager = build_camera_demo(fig)
    ax = manager.items[0]
    fig.canvas.draw()
    x, y = _center(ax)

    _fire(fig, "button_press_event", x, y, button=1)
    _fire(fig, "motion_notify_event", x + 40, y)
    _fire(fig, "button_release_event", x + 40, y, button=1)
    assert ax.azim != pytest.approx(-135.0)

    _fire(fig, "button_press_event", x, y, button=1, dblclick=True)
    _fire(fig, "button_release_event", x, y, button=1)
    assert ax.azim == pytest.approx(-135.0)
    assert ax.elev == pytest.approx(30.0)
