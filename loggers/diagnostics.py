# -*- coding: utf-8 -*-
"""
Per-Call Diagnostics Sink
=========================

Collects the warnings and notes a single weighting call produces as
structured records, so that callers never need to silence or redirect
process-wide output.  One ``Diagnostics`` instance belongs to one call;
nothing in here is shared between calls.

Each entry carries: timestamp, level, stage, message and an optional
structured *data* payload.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Union

from .context import LogContext, StageMetrics


class Diagnostics:
    """Accumulates structured diagnostic entries for one pipeline run.

    Parameters
    ----------
    callback : callable, optional
        Invoked with every entry dict as soon as it is recorded.
    """

    def __init__(self, callback: Optional[Callable[[Dict[str, Any]], None]] = None):
        self._entries: List[Dict[str, Any]] = []
        self._stages: List[StageMetrics] = []
        self._callback = callback

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def debug(self, message: str, *, data: Any = None,
              stage: Optional[str] = None) -> None:
        self._add('DEBUG', message, data=data, stage=stage)

    def info(self, message: str, *, data: Any = None,
             stage: Optional[str] = None) -> None:
        self._add('INFO', message, data=data, stage=stage)

    def warning(self, message: str, *, data: Any = None,
                stage: Optional[str] = None) -> None:
        self._add('WARNING', message, data=data, stage=stage)

    def error(self, message: str, *, data: Any = None,
              stage: Optional[str] = None) -> None:
        self._add('ERROR', message, data=data, stage=stage)

    def log(self, level: Union[int, str], message: str, data: Any = None,
            *, stage: Optional[str] = None) -> None:
        """Record *message* at *level* (a ``logging`` level number or name)."""
        if isinstance(level, int):
            level = logging.getLevelName(level)
        self._add(level, message, data=data, stage=stage)

    def record_stage(self, metrics: StageMetrics) -> None:
        self._stages.append(metrics)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def entries(self) -> List[Dict[str, Any]]:
        return list(self._entries)

    @property
    def warnings(self) -> List[str]:
        """Messages of every WARNING entry, in order of emission."""
        return [e['message'] for e in self._entries if e['level'] == 'WARNING']

    @property
    def stages(self) -> List[StageMetrics]:
        return list(self._stages)

    def for_stage(self, stage: str) -> List[Dict[str, Any]]:
        return [e for e in self._entries if e['stage'] == stage]

    def to_records(self) -> List[Dict[str, Any]]:
        """Entries with numpy payloads converted to plain Python values."""
        return json.loads(self.to_json())

    def to_frame(self):
        """Entries as a ``pandas.DataFrame`` (one row per entry)."""
        import pandas as pd
        columns = ['timestamp', 'level', 'stage', 'message', 'data']
        return pd.DataFrame(
            [{c: e.get(c) for c in columns} for e in self._entries],
            columns=columns,
        )

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self._entries, indent=indent, default=_json_default,
                          ensure_ascii=False)

    def __len__(self) -> int:
        return len(self._entries)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _add(self, level: str, message: str, *, data: Any = None,
             stage: Optional[str] = None) -> None:
        entry: Dict[str, Any] = {
            'timestamp': datetime.now().isoformat(),
            'level': level,
            'stage': stage if stage is not None else LogContext.get().get('stage', ''),
            'message': str(message),
        }
        if data is not None:
            entry['data'] = data
        self._entries.append(entry)
        if self._callback is not None:
            self._callback(entry)


def report(logger: logging.Logger, diagnostics: Optional[Diagnostics],
           level: int, message: str, data: Any = None) -> None:
    """Send *message* to the module logger and, if given, to *diagnostics*."""
    logger.log(level, message)
    if diagnostics is not None:
        diagnostics.log(level, message, data)


# ------------------------------------------------------------------
# JSON serialisation helper
# ------------------------------------------------------------------

def _json_default(obj: Any) -> Any:
    """Fallback serialiser for numpy / pandas objects."""
    import numpy as np
    import pandas as pd
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, (np.integer,)):
        return int(obj)
    if isinstance(obj, (np.floating,)):
        return float(obj)
    if isinstance(obj, pd.DataFrame):
        return obj.to_dict(orient='list')
    if isinstance(obj, pd.Series):
        return obj.to_dict()
    return str(obj)


__all__ = ['Diagnostics', 'report']
