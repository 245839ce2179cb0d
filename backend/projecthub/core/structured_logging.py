"""Small structured logging helper.

The codebase logs JSON strings so it can be consumed by any log collector
without introducing new dependencies. Fields whose name looks like a secret
are replaced before serialization, so API key values and bearer tokens never
reach the log stream even when a caller passes them in by mistake.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import SecretStr

from projecthub.core.request_context import get_request_id

REDACTED = "[REDACTED]"

SENSITIVE_FIELDS = frozenset(
    {
        "key",
        "api_key",
        "apikey",
        "secret",
        "token",
        "access_token",
        "authorization",
        "password",
    }
)


def _is_sensitive(name: str) -> bool:
    return name.lower().replace("-", "_") in SENSITIVE_FIELDS


def redact(value: Any) -> Any:
    """Return a copy of ``value`` with secret-looking fields masked.

    Mappings are walked recursively; lists and tuples are walked item by
    item. ``SecretStr`` values are always masked.
    """
    if isinstance(value, SecretStr):
        return REDACTED
    if isinstance(value, Mapping):
        return {
            k: REDACTED if isinstance(k, str) and _is_sensitive(k) else redact(v)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [redact(item) for item in value]
    return value


def log_json(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """Emit a single JSON log line with optional request correlation ID."""

    payload: dict[str, Any] = {
        "timestamp": datetime.now(UTC).isoformat(),
        "event": event,
    }
    request_id = get_request_id()
    if request_id:
        payload["request_id"] = request_id

    payload.update(redact(fields))
    logger.log(level, json.dumps(payload, default=str))
