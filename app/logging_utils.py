"""
app/logging_utils.py

Structured log lines for calculation and graph events.
"""

from __future__ import annotations

import json
import logging
from typing import Any


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Log *event* and its *fields* as one JSON object with sorted keys.

    Serialisation is skipped when *level* is disabled for *logger*, so
    per-request DEBUG events cost nothing in production.  Values that are
    not JSON-native (dates, numpy scalars) are rendered with ``str``.
    """

    if not logger.isEnabledFor(level):
        return
    payload: dict[str, Any] = {"event": event}
    payload.update(fields)
    logger.log(level, json.dumps(payload, default=str, sort_keys=True, separators=(",", ":")))
