# -*- coding: utf-8 -*-
"""
Shared Context and Stage Metrics for MEREC Logging
==================================================

Thread-local context tracking and stage-timing metrics used by the
decorators and by :class:`loggers.diagnostics.Diagnostics`.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


# =============================================================================
# Thread-Local Log Context
# =============================================================================

class LogContext:
    """Thread-local key/value store for contextual log annotations."""

    _local = threading.local()

    @classmethod
    def get(cls) -> Dict[str, Any]:
        if not hasattr(cls._local, 'context'):
            cls._local.context = {}
        return cls._local.context

    @classmethod
    def set(cls, key: str, value: Any) -> None:
        cls.get()[key] = value

    @classmethod
    def remove(cls, key: str) -> None:
        cls.get().pop(key, None)

    @classmethod
    def clear(cls) -> None:
        cls._local.context = {}


# =============================================================================
# Stage Metrics
# =============================================================================

@dataclass
class StageMetrics:
    """Timing and outcome for a single pipeline stage."""

    name: str
    start_time: float
    end_time: Optional[float] = None
    status: str = "running"
    sub_metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def elapsed(self) -> float:
        end = self.end_time or time.perf_counter()
        return end - self.start_time

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'status': self.status,
            'elapsed_ms': round(self.elapsed * 1000.0, 3),
            **self.sub_metrics,
        }


__all__ = [
    'LogContext',
    'StageMetrics',
]
