"""Observability helpers for instrumenting repository and engine operations."""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Callable, ParamSpec, TypeVar

from wardrobe_app.logging_config import (
    ensure_correlation_id,
    get_logger,
    log_event,
    redact_for_log,
)

LOGGER = get_logger(__name__)
P = ParamSpec("P")
R = TypeVar("R")


def _preview_kwargs(kwargs: dict, max_keys: int = 6) -> dict:
    preview: dict = {}
    for idx, (key, value) in enumerate(kwargs.items()):
        if idx >= max_keys:
            preview["truncated"] = True
            break
        preview[key] = value
    return redact_for_log(preview)


def _preview_args(args: tuple, max_args: int = 3) -> list:
    preview: list = []
    for arg in args:
        if isinstance(arg, (str, int, float, bool)) or arg is None:
            preview.append(arg)
        elif isinstance(arg, dict):
            preview.append(arg)
        elif isinstance(arg, (list, tuple, set)):
            preview.append(f"<{len(arg)} entries>")
        # other objects, including the bound ``self``, are left out
    return redact_for_log(preview[:max_args])


def instrument_operation(operation: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Wrap a callable to emit structured start, completion and failure logs."""

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            correlation_id = ensure_correlation_id()
            start = time.perf_counter()

            log_event(
                LOGGER,
                logging.DEBUG,
                "operation_started",
                operation=operation,
                correlation_id=correlation_id,
                call_args=_preview_args(args),
                call_kwargs=_preview_kwargs(kwargs),
            )
            try:
                result = func(*args, **kwargs)
            except Exception:
                duration_ms = round((time.perf_counter() - start) * 1000, 2)
                log_event(
                    LOGGER,
                    logging.ERROR,
                    "operation_failed",
                    operation=operation,
                    correlation_id=correlation_id,
                    duration_ms=duration_ms,
                    exc_info=True,
                )
                raise
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            log_event(
                LOGGER,
                logging.INFO,
                "operation_completed",
                operation=operation,
                correlation_id=correlation_id,
                duration_ms=duration_ms,
            )
            return result

        return wrapper

    return decorator


__all__ = ["instrument_operation"]
