import logging

import pytest

from mousemanager import MouseManager
from mousemanager.core.errors import (
    AmbiguousOrInvalidArgumentError,
    InvalidCallbackError,
    InvalidTargetError,
    ManagerDeletedError,
)
from mousemanager.core.registry import CallbackSpec
from mousemanager.core.types import Operation, Selection


def test_new_manager_starts_disabled(host):
    mgr = MouseManager(host)

    assert not mgr.enabled
    assert host.handlers is None
    assert mgr.items == ()


def test_enable_accepts_on_off_strings(host):
    mgr = MouseManager(host)

    mgr.enable("on")
    assert mgr.enabled
    assert host.handlers is not None

    mgr.enable("OFF")
    assert not mgr.enabled
    assert host.handlers is None


def test_enable_rejects_unknown_strings(host):
    mgr = MouseManager(host)
    with pytest.raises(AmbiguousOrInvalidArgumentError):
        mgr.enable("maybe")
    assert not mgr.enabled


def test_enable_is_idempotent(host):
    mgr = MouseManager(host)
    mgr.enable(True)
    mgr.enable(True)

    assert host.install_count == 1


def test_disabled_manager_dispatches_nothing(host, manager, make_recorder):
    rec = make_recorder()
    line = host.item("line", (0, 0, 10, 10))
    manager.add_item(line, rec)
    handlers = host.handlers
    manager.enable(False)

    # Events already queued by the window still reach the stale handlers.
    host.handlers = handlers
    host.press(1, 1, current=line)
    host.move(2, 2)
    host.scroll(2, 2)

    assert rec.calls == []


def test_disable_mid_drag_resets_to_idle(host, manager, make_recorder):
    line = host.item("line", (0, 0, 10, 10))
    manager.add_item(line, make_recorder())

    host.press(1, 1, current=line)
    assert manager.is_active
    manager.enable(False)

    assert not manager.is_active
    assert host.handlers is None


def test_add_item_rejects_objects_outside_the_window(host, manager):
    stranger = type(host)().item("stranger", (0, 0, 1, 1))
    with pytest.raises(InvalidTargetError):
        manager.add_item(stranger, lambda target, data: None)
    assert manager.items == ()


def test_add_specs_and_items_order(host, manager, make_recorder):
    a, b = host.item("a", (0, 0, 1, 1)), host.item("b", (0, 0, 1, 1))
    manager.add_specs(a, [CallbackSpec.of("hover", callback=make_recorder())])
    manager.add_item(b, "scroll", make_recorder())

    assert manager.items == (a, b)
    assert manager.remove_item(a) is True
    assert manager.remove_item(a) is False
    assert manager.items == (b,)


def test_external_slot_change_disables_manager(host, manager, make_recorder, caplog):
    rec = make_recorder()
    line = host.item("line", (0, 0, 10, 10))
    manager.add_item(line, rec)
    host.press(1, 1, current=line)

    with caplog.at_level(logging.WARNING, logger="mousemanager"):
        host.tamper_slots()

    assert not manager.enabled
    assert not manager.is_active
    assert "disabling mouse manager" in caplog.text

    manager.enable(True)
    assert manager.enabled
    assert host.install_count == 2


def test_destroyed_item_is_purged(host, manager, make_recorder):
    keep, gone = host.item("keep", (0, 0, 5, 5)), host.item("gone", (0, 0, 5, 5))
    manager.add_item(keep, make_recorder())
    manager.add_item(gone, make_recorder())

    host.destroy_item(gone)

    assert manager.items == (keep,)


def test_item_destroyed_notification(host, manager, make_recorder):
    line = host.item("line", (0, 0, 5, 5))
    manager.add_item(line, make_recorder())

    manager.item_destroyed(line)
    manager.item_destroyed(line)

    assert manager.items == ()


def test_window_destruction_deletes_the_manager(host, manager, make_recorder):
    line = host.item("line", (0, 0, 5, 5))
    manager.add_item(line, make_recorder())

    host.destroy()

    assert manager.deleted
    assert not manager.enabled
    assert manager.items == ()
    assert host.handlers is None
    with pytest.raises(ManagerDeletedError):
        manager.add_item(line, make_recorder())
    with pytest.raises(ManagerDeletedError):
        manager.enable(True)

    # Deleting twice is harmless.
    manager.delete()
    assert repr(manager) == "<MouseManager deleted items=0>"


def test_describe_lists_items_and_callbacks(host, manager):
    def pan_image(target, data):
        pass

    def zoom_image(target, data):
        pass

    def clear_display(target, data):
        pass

    image = host.item("image", (0, 0, 10, 10))
    manager.add_item(image, "click", "normal", pan_image, "scroll", zoom_image)
    manager.set_default_hover(clear_display)

    text = manager.describe()

    assert "enabled: True, items: 1" in text
    assert "FakeItem('image')  [hover]" in text
    assert "click    normal  " in text
    assert "pan_image" in text
    assert "scroll   -       " in text
    assert "default hover: " in text and "clear_display" in text
    assert repr(manager) == "<MouseManager enabled items=1>"


def test_invalid_window_is_rejected():
    with pytest.raises(InvalidTargetError):
        MouseManager(object())


def test_manager_accepts_a_matplotlib_figure():
    from matplotlib.backends.backend_agg import FigureCanvasAgg
    from matplotlib.figure import Figure

    from mousemanager.ui.hosts.mpl_host import MplFigureHost

    fig = Figure()
    FigureCanvasAgg(fig)
    mgr = MouseManager(fig)

    assert isinstance(mgr.host, MplFigureHost)
    assert mgr.figure is fig


def test_add_specs_validates_and_wraps_callbacks(host, manager, make_recorder):
    line = host.item("line", (0, 0, 10, 10))

    with pytest.raises(InvalidCallbackError):
        manager.add_specs(line, [CallbackSpec((Operation.CLICK,), (Selection.NORMAL,), 42)])
    assert manager.items == ()

    rec = make_recorder("on_click")
    manager.add_specs(line, [CallbackSpec(("click",), ("normal",), rec)])
    host.press(1, 1, current=line)

    assert rec.operations == ["click"]
    assert "click    normal  on_click" in manager.describe()
