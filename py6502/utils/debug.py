"""Category-gated debug output for the 6502 emulator.

``PY6502_DEBUG`` holds a comma separated list of categories such as ``cpu``,
``irq``, ``loader``, ``machine``, ``ui`` and ``trace``, or ``all``. The value
is read once and cached until :func:`reload_categories` is called.
"""

from __future__ import annotations

import os

ENV_VARIABLE = "PY6502_DEBUG"
ALL_CATEGORIES = "all"

_active: frozenset[str] | None = None


def parse_categories(value: str) -> frozenset[str]:
    return frozenset(part.strip().lower() for part in value.split(",") if part.strip())


def active_categories() -> frozenset[str]:
    global _active
    if _active is None:
        _active = parse_categories(os.environ.get(ENV_VARIABLE, ""))
    return _active


def reload_categories() -> None:
    """Forget the cached categories so the environment is read again."""

    global _active
    _active = None


def debug_enabled(category: str | None = None) -> bool:
    """True when ``category`` is selected; with no category, when any is."""

    categories = active_categories()
    if category is None or ALL_CATEGORIES in categories:
        return bool(categories)
    return category.lower() in categories


def _render(message: str, args: tuple) -> str:
    if not args:
        return message
    try:
        return message % args
    except (TypeError, ValueError):
        return f"{message} {args!r}"


def debug_log(category: str, message: str, *args) -> None:
    if debug_enabled(category):
        print(f"[6502][{category}] {_render(message, args)}")
