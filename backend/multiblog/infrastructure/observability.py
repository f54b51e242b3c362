"""Observability — structured JSON logs and per-request access logging.

Invariants:
    - Every record carries timestamp, level, logger, message
    - Known extras (ids, error code, request fields) are emitted only when set
    - Each HTTP response carries an X-Request-ID, echoed from the client or minted
    - Every request gets exactly one access line, including ones that raise
    - setup_logging replaces its own handler on repeat calls (no duplicate lines)

Design Decisions:
    - Formatter on stdlib logging: services only ever call logging.getLogger
    - Access log written by an http middleware, not by each route
"""

import json
import logging
import time
import uuid
from datetime import datetime, timezone

from fastapi import Request

logger = logging.getLogger("multiblog.access")

REQUEST_ID_HEADER = "X-Request-ID"

_EXTRA_KEYS = (
    "request_id", "method", "path", "status_code", "duration_ms",
    "user_id", "project_id", "post_id", "username", "error_code",
)
_HANDLER_NAME = "multiblog"


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update({
            key: record.__dict__[key]
            for key in _EXTRA_KEYS
            if record.__dict__.get(key) is not None
        })
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        # UUID ids and datetimes fall back to str()
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        JSONFormatter() if fmt == "json"
        else logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s"),
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


async def log_requests(request: Request, call_next):
    """HTTP middleware: tag the request with an id and log one access line.

    The line is written even when the handler raises; it then reports 500.
    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    started = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
    finally:
        log = logger.info if status_code < 500 else logger.error
        log(
            f"{request.method} {request.url.path} -> {status_code}",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
