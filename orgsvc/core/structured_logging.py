"""JSON log lines.

Every event is written as one JSON document on a plain ``logging`` logger so
that any collector can ingest it without a formatter plugin.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from orgsvc.core.request_context import get_request_id

# Fields that must never reach a log line, whatever the caller passes.
REDACTED_FIELDS = frozenset({"private_key", "public_key"})


def log_json(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """Emit ``event`` with ``fields`` and the current request id."""

    if not logger.isEnabledFor(level):
        return

    payload: dict[str, Any] = {
        "timestamp": datetime.now(UTC).isoformat(),
        "event": event,
    }
    request_id = get_request_id()
    if request_id:
        payload["request_id"] = request_id

    for key, value in fields.items():
        payload[key] = "[redacted]" if key in REDACTED_FIELDS else value

    logger.log(level, json.dumps(payload, default=str, sort_keys=True))
