"""Feature flags for the mouse manager, read from the ``MM_FEATURES`` environment variable.

The variable holds comma-separated tokens: ``name`` turns a flag on,
``!name`` or ``-name`` turns it off and ``name=on|off`` sets it explicitly.
Names are case-insensitive and ``-``/``_`` are interchangeable.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache

ENV_VAR = "MM_FEATURES"


@dataclass(frozen=True)
class Flag:
    name: str
    default: bool
    help: str


FLAGS: tuple[Flag, ...] = (
    Flag("refresh", True, "redraw the canvas after each dispatched event"),
    Flag("trace_dispatch", False, "log every dispatched callback at DEBUG level"),
)

KNOWN_FLAGS: dict[str, bool] = {flag.name: flag.default for flag in FLAGS}

_WORDS: dict[str, bool] = {
    **dict.fromkeys(("1", "true", "on", "yes", "enable", "enabled"), True),
    **dict.fromkeys(("0", "false", "off", "no", "disable", "disabled"), False),
}

_TOKEN = re.compile(r"(?P<negate>[!-])?\s*(?P<name>[\w.-]+?)\s*(?:=\s*(?P<value>.*))?")


def flag_key(name: str) -> str:
    return name.strip().lower().replace("-", "_")


def parse_tokens(raw: str) -> dict[str, bool]:
    """Parse an ``MM_FEATURES`` string; tokens with an unknown ``=value`` are skipped."""
    features: dict[str, bool] = {}
    for token in raw.split(","):
        match = _TOKEN.fullmatch(token.strip())
        if match is None:
            continue
        key = flag_key(match["name"])
        if match["negate"]:
            features[key] = False
        elif match["value"] is None:
            features[key] = True
        else:
            state = _WORDS.get(match["value"].strip().lower())
            if state is not None:
                features[key] = state
    return features


@lru_cache(maxsize=1)
def _environment_flags() -> Mapping[str, bool]:
    return parse_tokens(os.environ.get(ENV_VAR, ""))


def reload() -> None:
    """Forget the cached environment snapshot (tests and ``--features`` use this)."""
    _environment_flags.cache_clear()


def all_enabled() -> dict[str, bool]:
    """Effective flag map: defaults from :data:`FLAGS` overridden by the environment."""
    return {**KNOWN_FLAGS, **_environment_flags()}


def is_enabled(flag: str, *, default: bool | None = None) -> bool:
    """Return whether ``flag`` is on.

    Unset flags fall back to ``default``, then to the declared default.
    """
    if not flag:
        raise ValueError("Flag name must be a non-empty string")
    key = flag_key(flag)
    overrides = _environment_flags()
    if key in overrides:
        return overrides[key]
    if default is not None:
        return default
    return KNOWN_FLAGS.get(key, False)
