import logging

import pytest

from mousemanager import cli
from mousemanager.app import flags


@pytest.fixture(autouse=True)
def _restore_package_logger():
    logger = logging.getLogger("mousemanager")
    level, handlers, propagate = logger.level, list(logger.handlers), logger.propagate
    yield
    logger.setLevel(level)
    logger.handlers[:] = handlers
    logger.propagate = propagate


def test_list_prints_every_demo(capsys):
    assert cli.main(["--list"]) == 0
    out = capsys.readouterr().out
    for name in ("panning", "hovering", "windowing", "camera"):
        assert name in out


def test_missing_demo_is_a_usage_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([])
    assert excinfo.value.code == 2
    assert "a demo name is required" in capsys.readouterr().err


def test_unknown_demo_is_rejected():
    with pytest.raises(SystemExit):
        cli.main(["juggling"])


def test_pyplot_run_prints_manager_table(monkeypatch, capsys):
    import matplotlib.pyplot as plt

    monkeypatch.setenv(flags.ENV_VAR, "")
    monkeypatch.setattr(plt, "show", lambda: None)
    try:
        assert cli.main(["hovering", "--features", "trace_dispatch"]) == 0
    finally:
        plt.close("all")

    assert flags.is_enabled("trace_dispatch")
    out = capsys.readouterr().out
    assert "MouseManager for" in out
    assert "display_rgb" in out
    assert "default hover:" in out


def test_setup_logging_writes_a_rotating_file(tmp_path):
    from mousemanager.core.logging_config import setup_logging

    directory = setup_logging(log_to_file=True, log_dir=tmp_path)
    logging.getLogger("mousemanager.core.manager").debug("probe record")
    package_logger = logging.getLogger("mousemanager")
    for handler in package_logger.handlers:
        handler.flush()
        handler.close()

    assert directory == tmp_path
    assert "probe record" in (tmp_path / "mousemanager.log").read_text(encoding="utf-8")
