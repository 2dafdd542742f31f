# MouseManager
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Demo gallery showing typical mouse interactions built on :class:`MouseManager`.

Each ``build_*_demo`` function draws into an existing figure, wires up a
manager, enables it and returns it. The figure can come from pyplot, from a
Qt canvas or from a headless Agg canvas.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import numpy as np
from matplotlib.figure import Figure

from mousemanager.core.manager import MouseManager
from mousemanager.core.types import MouseEventData, Operation

__all__ = [
    "DEMOS",
    "build_camera_demo",
    "build_hovering_demo",
    "build_panning_demo",
    "build_windowing_demo",
    "peaks",
    "sample_image",
]


def sample_image(rows: int = 240, cols: int = 320) -> np.ndarray:
    """Return a synthetic RGB image (uint8) with smooth colour gradients."""
    y, x = np.mgrid[0:rows, 0:cols]
    red = x / max(cols - 1, 1)
    green = y / max(rows - 1, 1)
    blue = 0.5 + 0.5 * np.sin(x / 18.0) * np.cos(y / 14.0)
    return (np.dstack([red, green, blue]) * 255).astype(np.uint8)


def peaks(n: int = 49) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Sample surface with a few peaks and valleys on [-3, 3]^2."""
    axis = np.linspace(-3.0, 3.0, n)
    X, Y = np.meshgrid(axis, axis)
    Z = (
        3 * (1 - X) ** 2 * np.exp(-(X**2) - (Y + 1) ** 2)
        - 10 * (X / 5 - X**3 - Y**5) * np.exp(-(X**2) - Y**2)
        - np.exp(-((X + 1) ** 2) - Y**2) / 3
    )
    return X, Y, Z


# ---------------------------------------------------------------------------
# Panning / zooming / resetting an image
# ---------------------------------------------------------------------------
def build_panning_demo(fig: Figure, image: np.ndarray | None = None) -> MouseManager:
    """Left-drag pans, the wheel zooms and a double-click resets the view."""
    image = sample_image() if image is None else image
    rows, cols = image.shape[:2]
    x_limits = (-0.5, cols - 0.5)
    y_limits = (rows - 0.5, -0.5)

    ax = fig.add_subplot(1, 1, 1)
    ax.imshow(image, interpolation="nearest")
    ax.set_axis_off()
    ax.set_xlim(*x_limits)
    ax.set_ylim(*y_limits)

    pan: dict[str, Any] = {}

    def pan_image(axes, event_data: MouseEventData) -> None:
        if event_data.operation is Operation.CLICK:
            region = event_data.target_region
            xlim, ylim = axes.get_xlim(), axes.get_ylim()
            pan.update(
                origin=event_data.pointer_position,
                xlim=xlim,
                ylim=ylim,
                scale=(
                    (xlim[1] - xlim[0]) / region.width,
                    (ylim[1] - ylim[0]) / region.height,
                ),
            )
        elif event_data.operation is Operation.DRAG and pan:
            x_scale, y_scale = pan["scale"]
            dx = (event_data.pointer_position[0] - pan["origin"][0]) * x_scale
            dy = (event_data.pointer_position[1] - pan["origin"][1]) * y_scale
            xlim, ylim = pan["xlim"], pan["ylim"]
            axes.set_xlim(xlim[0] - dx, xlim[1] - dx)
            axes.set_ylim(ylim[0] - dy, ylim[1] - dy)

    def zoom_image(axes, event_data: MouseEventData) -> None:
        fraction = (1.0 - 1.25 ** (-event_data.scroll_data.delta_y)) / 2.0
        for get_lim, set_lim in (
            (axes.get_xlim, axes.set_xlim),
            (axes.get_ylim, axes.set_ylim),
        ):
            low, high = get_lim()
            span = high - low
            set_lim(low + fraction * span, high - fraction * span)

    def reset_image(axes, _event_data: MouseEventData) -> None:
        axes.set_xlim(*x_limits)
        axes.set_ylim(*y_limits)

    manager = MouseManager(fig)
    manager.add_item(
        ax,
        "normal", pan_image,
        "scroll", zoom_image,
        "click", "open", reset_image,
    )
    manager.enable(True)
    return manager


# ---------------------------------------------------------------------------
# Displaying pixel values while hovering
# ---------------------------------------------------------------------------
def build_hovering_demo(fig: Figure, image: np.ndarray | None = None) -> MouseManager:
    """Show the RGB value under the cursor; clear it when leaving the image."""
    image = sample_image() if image is None else image
    rows, cols = image.shape[:2]

    ax = fig.add_subplot(1, 1, 1)
    ax.set_facecolor("k")
    ax.imshow(image, interpolation="nearest")
    ax.set_axis_off()
    readout = ax.text(
        0, 0, "", color=(0.0, 0.8, 0.8), horizontalalignment="center", verticalalignment="bottom"
    )

    def display_rgb(axes, event_data: MouseEventData) -> None:
        col, row = axes.transData.inverted().transform(event_data.pointer_position)
        col, row = int(round(col)), int(round(row))
        if not (0 <= col < cols and 0 <= row < rows):
            readout.set_text("")
            return
        red, green, blue = (int(v) for v in image[row, col, :3])
        readout.set_position((col, row))
        readout.set_text(f"({red},{green},{blue})")

    def clear_display(_item, _event_data: MouseEventData) -> None:
        readout.set_text("")

    manager = MouseManager(fig)
    manager.add_item(ax, "hover", display_rgb)
    manager.set_default_hover(clear_display)
    manager.enable(True)
    return manager


# ---------------------------------------------------------------------------
# Windowing data with two sliding lines
# ---------------------------------------------------------------------------
def _move_line(line, event_data: MouseEventData, handles: dict[str, Any]) -> None:
    ax = handles["axes"]
    data = handles["values"]
    count = data.size
    x_value = ax.transData.inverted().transform(event_data.pointer_position)[0]

    if line is handles["lower"]:
        max_limit = int(handles["upper"].get_xdata()[0])
        new_value = int(min(max(np.ceil(x_value), 1), max_limit))
        xdata = np.arange(new_value, max_limit + 1)
    else:
        min_limit = int(handles["lower"].get_xdata()[0])
        new_value = int(min(max(np.floor(x_value), min_limit), count))
        xdata = np.arange(min_limit, new_value + 1)

    line.set_xdata([new_value, new_value])
    ydata = data[xdata - 1]
    handles["overlay"].set_data(xdata, ydata)
    ax.set_title(f"Mean = {ydata.mean():f}")


def build_windowing_demo(fig: Figure, data: np.ndarray | None = None) -> MouseManager:
    """Drag the two blue lines to choose a window; the title shows its mean."""
    data = np.random.default_rng(0).random(100) if data is None else np.asarray(data, dtype=float)
    count = data.size
    x = np.arange(1, count + 1)

    ax = fig.add_subplot(1, 1, 1)
    ax.set_xlim(1, count)
    ax.set_ylim(0, 1)
    (data_line,) = ax.plot(x, data, color="k")
    (overlay,) = ax.plot(x, data, color="r")
    (lower,) = ax.plot([1, 1], [0, 1], color="b", linewidth=2, label="lower")
    (upper,) = ax.plot([count, count], [0, 1], color="b", linewidth=2, label="upper")

    handles = {
        "axes": ax,
        "data": data_line,
        "overlay": overlay,
        "lower": lower,
        "upper": upper,
        "values": data,
    }

    manager = MouseManager(fig)
    manager.add_item(lower, "drag", "normal", (_move_line, handles))
    manager.add_item(upper, "drag", "normal", (_move_line, handles))
    manager.enable(True)
    return manager


# ---------------------------------------------------------------------------
# 3D camera orbit / dolly / zoom
# ---------------------------------------------------------------------------
def build_camera_demo(fig: Figure) -> MouseManager:
    """Left-drag orbits, right-drag dollies, the wheel zooms, double-click resets."""
    from mpl_toolkits.mplot3d import Axes3D  # noqa: F401  (registers the 3d projection)

    X, Y, Z = peaks()
    default_view = (30.0, -135.0)
    default_limits = ((-3.0, 3.0), (-3.0, 3.0), (-7.0, 9.0))

    ax = fig.add_axes((0.0, 0.0, 1.0, 1.0), projection="3d")
    ax.plot_surface(X, Y, Z, cmap="viridis", linewidth=0, antialiased=False)
    ax.set_axis_off()
    ax.disable_mouse_rotation()

    def _apply_limits(limits) -> None:
        ax.set_xlim3d(*limits[0])
        ax.set_ylim3d(*limits[1])
        ax.set_zlim3d(*limits[2])

    def _current_limits():
        return (ax.get_xlim3d(), ax.get_ylim3d(), ax.get_zlim3d())

    ax.view_init(*default_view)
    _apply_limits(default_limits)

    orbit: dict[str, Any] = {}
    dolly: dict[str, Any] = {}

    def orbit_camera(axes, event_data: MouseEventData) -> None:
        if event_data.operation is Operation.CLICK:
            region = event_data.target_region
            orbit["origin"] = event_data.pointer_position
            orbit["scale"] = (360.0 / region.width, 180.0 / region.height)
        elif event_data.operation is Operation.DRAG and orbit:
            pos = event_data.pointer_position
            d_azim = orbit["scale"][0] * (orbit["origin"][0] - pos[0])
            d_elev = orbit["scale"][1] * (orbit["origin"][1] - pos[1])
            orbit["origin"] = pos
            axes.view_init(elev=axes.elev + d_elev, azim=axes.azim + d_azim)

    def dolly_camera(axes, event_data: MouseEventData) -> None:
        if event_data.operation is Operation.CLICK:
            dolly["origin"] = event_data.pointer_position
        elif event_data.operation is Operation.DRAG and dolly:
            pos = event_data.pointer_position
            dx = (dolly["origin"][0] - pos[0]) / 200.0
            dy = (dolly["origin"][1] - pos[1]) / 200.0
            dolly["origin"] = pos
            (x0, x1), (y0, y1), z_limits = _current_limits()
            _apply_limits(((x0 + dx, x1 + dx), (y0 + dy, y1 + dy), z_limits))

    def zoom_camera(axes, event_data: MouseEventData) -> None:
        factor = 1.0 + 0.1 * event_data.scroll_data.delta_y
        if factor <= 0:
            return
        zoomed = []
        for low, high in _current_limits():
            center = (low + high) / 2.0
            half = (high - low) / (2.0 * factor)
            zoomed.append((center - half, center + half))
        _apply_limits(zoomed)

    def reset_camera(axes, _event_data: MouseEventData) -> None:
        axes.view_init(*default_view)
        _apply_limits(default_limits)

    manager = MouseManager(fig)
    manager.add_item(
        ax,
        ("click", "drag"), "normal", orbit_camera,
        ("click", "drag"), "alt", dolly_camera,
        "click", "open", reset_camera,
        "scroll", zoom_camera,
    )
    manager.enable(True)
    return manager


DEMOS: dict[str, Callable[[Figure], MouseManager]] = {
    "panning": build_panning_demo,
    "hovering": build_hovering_demo,
    "windowing": build_windowing_demo,
    "camera": build_camera_demo,
}
