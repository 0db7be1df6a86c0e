from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from mockwright.matchers import Matcher, is_scalar

MAX_TEXT = 50


def format_arg(arg: Any) -> str:
    if isinstance(arg, Matcher):
        return str(arg)
    if isinstance(arg, (str, bytes)) and len(arg) > MAX_TEXT:
        return repr(arg[:MAX_TEXT]) + "..."
    if is_scalar(arg):
        return repr(arg)
    if isinstance(arg, (list, tuple, dict, set, frozenset)):
        return f"{type(arg).__name__}({len(arg)} items)"
    if callable(getattr(arg, "matches", None)):
        return str(arg)
    return f"<object {type(arg).__name__}>"


def format_args(name: str, args: Sequence[Any] | None) -> str:
    """Render a call signature like ``charge(100, 'EUR')``."""
    return f"{name}({', '.join(format_arg(a) for a in args or ())})"
