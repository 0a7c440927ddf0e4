# -*- coding: utf-8 -*-
"""
Logging Decorators and Context Managers
=======================================

Reusable decorators (``log_execution``, ``log_exceptions``) and context
managers (``log_context``, ``timed_stage``) shared by the weighting
stages.
"""

from __future__ import annotations

import time
import logging
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, Optional, TYPE_CHECKING

from .context import LogContext, StageMetrics

if TYPE_CHECKING:
    from .diagnostics import Diagnostics


# =============================================================================
# Decorators
# =============================================================================

def log_execution(
    logger: Optional[logging.Logger] = None,
    level: int = logging.DEBUG,
    show_args: bool = False,
    show_result: bool = False,
) -> Callable:
    """Decorator that logs function entry, exit, and timing."""

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            log = logger if logger is not None else logging.getLogger('merec')
            func_name = func.__qualname__

            if show_args:
                args_str = ', '.join(
                    [repr(a)[:50] for a in args]
                    + [f'{k}={repr(v)[:50]}' for k, v in kwargs.items()]
                )
                log.log(level, f'Calling {func_name}({args_str})')
            else:
                log.log(level, f'Calling {func_name}')

            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                elapsed = time.perf_counter() - start
                log.log(level, f'{func_name} failed after {elapsed:.3f}s: {exc}')
                raise
            elapsed = time.perf_counter() - start
            if show_result:
                log.log(level, f'{func_name} returned {repr(result)[:100]} ({elapsed:.3f}s)')
            else:
                log.log(level, f'{func_name} completed ({elapsed:.3f}s)')
            return result

        return wrapper
    return decorator


def log_exceptions(
    logger: Optional[logging.Logger] = None,
    level: int = logging.ERROR,
    reraise: bool = True,
) -> Callable:
    """Decorator that captures and logs unhandled exceptions."""

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            log = logger if logger is not None else logging.getLogger('merec')
            try:
                return func(*args, **kwargs)
            except Exception as exc:
                log.log(level, f'Exception in {func.__qualname__}: '
                               f'{type(exc).__name__}: {exc}')
                if reraise:
                    raise
                return None
        return wrapper
    return decorator


# =============================================================================
# Context Managers
# =============================================================================

@contextmanager
def log_context(**kwargs: Any) -> Generator[None, None, None]:
    """Temporarily inject key/value pairs into the thread-local log context."""
    previous = {k: LogContext.get()[k] for k in kwargs if k in LogContext.get()}
    for key, value in kwargs.items():
        LogContext.set(key, value)
    try:
        yield
    finally:
        for key in kwargs:
            if key in previous:
                LogContext.set(key, previous[key])
            else:
                LogContext.remove(key)


@contextmanager
def timed_stage(
    stage: str,
    diagnostics: Optional['Diagnostics'] = None,
    logger: Optional[logging.Logger] = None,
    level: int = logging.DEBUG,
) -> Generator[StageMetrics, None, None]:
    """Run one pipeline stage under a stage label, timing it.

    Diagnostics emitted inside the block are tagged with *stage*; the
    resulting :class:`StageMetrics` is recorded on *diagnostics* when one
    is supplied.
    """
    log = logger if logger is not None else logging.getLogger('merec')
    metrics = StageMetrics(name=stage, start_time=time.perf_counter())
    log.log(level, f'Starting: {stage}')
    with log_context(stage=stage):
        try:
            yield metrics
        except Exception:
            metrics.status = 'failed'
            raise
        else:
            metrics.status = 'completed'
        finally:
            metrics.end_time = time.perf_counter()
            log.log(level, f'Finished: {stage} [{metrics.status}] '
                           f'({metrics.elapsed * 1000.0:.3f}ms)')
            if diagnostics is not None:
                diagnostics.record_stage(metrics)


__all__ = [
    'log_execution',
    'log_exceptions',
    'log_context',
    'timed_stage',
]
