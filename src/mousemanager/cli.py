from __future__ import annotations

import argparse
import logging
import os
import sys

from mousemanager.app.flags import ENV_VAR, FLAGS, all_enabled
from mousemanager.app.flags import reload as reload_flags
from mousemanager.core.logging_config import setup_logging
from mousemanager.demos import DEMOS

log = logging.getLogger(__name__)


def _apply_feature_overrides(raw: str | None) -> None:
    if raw is None:
        return
    os.environ[ENV_VAR] = raw
    reload_flags()


def _run_pyplot(name: str) -> int:
    import matplotlib.pyplot as plt

    fig = plt.figure(num=f"{name.capitalize()} Demo")
    manager = DEMOS[name](fig)
    print(manager.describe())
    plt.show()
    return 0


def _run_qt(name: str) -> int:
    from mousemanager.app.launcher import DemoLauncher

    return DemoLauncher(name).run()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        "mousemanager-demo", description="Run an interactive MouseManager demo."
    )
    parser.add_argument("demo", nargs="?", choices=sorted(DEMOS), help="Demo to run.")
    parser.add_argument("--list", action="store_true", help="List available demos and exit.")
    parser.add_argument("--qt", action="store_true", help="Host the figure in a PyQt5 window.")
    parser.add_argument(
        "--features",
        "-f",
        metavar="FLAGS",
        help=f"Comma-separated feature flags ({ENV_VAR} syntax). Known: "
        + "; ".join(f"{flag.name} ({flag.help})" for flag in FLAGS),
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console log level.",
    )
    parser.add_argument("--log-file", action="store_true", help="Also write a rotating log file.")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.list:
        for name, builder in DEMOS.items():
            summary = (builder.__doc__ or "").strip().splitlines()
            print(f"{name:<10} {summary[0] if summary else ''}")
        return 0
    if args.demo is None:
        parser.error("a demo name is required (see --list)")

    setup_logging(console_level=getattr(logging, args.log_level), log_to_file=args.log_file)
    _apply_feature_overrides(args.features)
    log.info("Feature flags: %s", all_enabled())

    try:
        return _run_qt(args.demo) if args.qt else _run_pyplot(args.demo)
    except Exception as e:
        log.critical(f"Demo {args.demo} crashed: {e}", exc_info=True)
        raise


if __name__ == "__main__":  # pragma: no cover - import guard
    sys.exit(main())
