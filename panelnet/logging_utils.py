"""DEBUG tracing helpers for engine modules.

``apply_debug_logging(globals(), logger=logger)`` at the bottom of a module
wraps its public and private functions so that, with DEBUG enabled, every call
logs its arguments and result.  Arrays, panels and meshes are summarized
instead of dumped.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import reprlib
from functools import wraps
from typing import Any, Callable, Iterable, MutableMapping, Optional, Set, TypeVar, cast

import numpy as np

F = TypeVar("F", bound=Callable[..., Any])

_repr = reprlib.Repr()
_repr.maxother = 120
_repr.maxlist = 6
_repr.maxtuple = 6
_repr.maxdict = 6

_MAX_ITEMS = 4


def _summarize_array(value: np.ndarray) -> str:
    head = f"ndarray{tuple(value.shape)}"
    if value.size == 0:
        return head
    if value.size <= 3:
        return f"{head}={np.array2string(value, precision=4, separator=',')}"
    return f"{head}[min={float(value.min()):.4g}, max={float(value.max()):.4g}]"


def _summarize_dataclass(value: Any) -> str:
    parts = []
    for item in dataclasses.fields(value)[:_MAX_ITEMS]:
        parts.append(f"{item.name}={summarize(getattr(value, item.name))}")
    return f"{type(value).__name__}({', '.join(parts)})"


def summarize(value: Any) -> str:
    """Short, bounded description of ``value`` for log lines."""

    if isinstance(value, np.ndarray):
        return _summarize_array(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _summarize_dataclass(value)
    if isinstance(value, dict):
        shown = [f"{summarize(k)}: {summarize(v)}" for k, v in list(value.items())[:_MAX_ITEMS]]
        if len(value) > _MAX_ITEMS:
            shown.append(f"... ({len(value)} items)")
        return "{" + ", ".join(shown) + "}"
    if isinstance(value, (list, tuple)):
        shown = [summarize(item) for item in list(value)[:_MAX_ITEMS]]
        if len(value) > _MAX_ITEMS:
            shown.append(f"... ({len(value)} items)")
        open_br, close_br = ("(", ")") if isinstance(value, tuple) else ("[", "]")
        return open_br + ", ".join(shown) + close_br
    return _repr.repr(value)


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Decorator logging entry, exit and exceptions of a call at DEBUG."""

    def decorator(func: F) -> F:
        if getattr(func, "_panelnet_traced", False):
            return func
        label = name or getattr(func, "__qualname__", getattr(func, "__name__", "<callable>"))

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)
            logger.debug(
                "-> %s args=%s kwargs=%s", label, summarize(list(args)), summarize(kwargs)
            )
            try:
                result = func(*args, **kwargs)
            except Exception:
                logger.exception("!! %s raised", label)
                raise
            if log_result:
                logger.debug("<- %s = %s", label, summarize(result))
            else:
                logger.debug("<- %s", label)
            return result

        setattr(wrapper, "_panelnet_traced", True)
        return cast(F, wrapper)

    return decorator


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *,
    logger: Optional[logging.Logger] = None,
    skip: Optional[Iterable[str]] = None,
) -> None:
    """Wrap every function defined in ``namespace``'s module with tracing."""

    module_name = namespace.get("__name__")
    logger = logger or logging.getLogger(str(module_name))
    skipped: Set[str] = set(skip or [])

    for attr, value in list(namespace.items()):
        if attr in skipped or attr.startswith("__"):
            continue
        if inspect.isfunction(value) and value.__module__ == module_name:
            namespace[attr] = debug_log_call(logger, name=attr)(value)


__all__ = ["summarize", "debug_log_call", "apply_debug_logging"]
