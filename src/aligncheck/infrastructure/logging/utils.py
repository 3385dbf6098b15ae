#!/usr/bin/env python3

"""Logger lookup and a timing decorator."""

import logging
from collections.abc import Callable
from functools import wraps
from time import perf_counter
from typing import Any, TypeVar, cast

F = TypeVar("F", bound=Callable[..., Any])


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (pass __name__)."""
    return logging.getLogger(name)


def log_timing(func: F) -> F:
    """
    Log how long each call of a function takes at DEBUG level.

    Failures are logged at ERROR level with the elapsed time and re-raised.
    SystemExit passes through untouched.

    Args:
        func: Function to wrap

    Returns:
        The wrapped function
    """
    logger = get_logger(func.__module__)
    label = func.__qualname__

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        started = perf_counter()
        logger.debug(f"{label} started")
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"{label} failed after {perf_counter() - started:.3f}s: {e}")
            raise
        logger.debug(f"{label} finished in {perf_counter() - started:.3f}s")
        return result

    return cast("F", wrapper)
