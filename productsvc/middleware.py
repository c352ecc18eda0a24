"""Per-request id, deadline and access logging for the Flask application."""

from __future__ import annotations

import time
import uuid
from datetime import timedelta

from flask import Flask, g, request
from flask.wrappers import Response

from .logger import get_logger

_SUCCESS_STATUSES = (200, 201)


def _format_fields(fields: dict) -> str:
    return " ".join(f"{key}={value}" for key, value in fields.items())


def register_request_logger(app: Flask, timeout: float) -> None:
    """Give each request an id and a deadline ``timeout`` seconds away, and log it.

    The id is available as ``flask.g.request_id`` and the deadline, on the
    ``time.monotonic`` clock, as ``flask.g.request_deadline``.
    """
    timeout_seconds = float(timeout)

    @app.before_request
    def _begin_request() -> None:
        g.request_id = str(uuid.uuid4())
        g.request_started = time.perf_counter()
        g.request_deadline = time.monotonic() + timeout_seconds

    @app.after_request
    def _log_request(response: Response) -> Response:
        started = g.get("request_started")
        elapsed = time.perf_counter() - started if started is not None else 0.0
        fields = {
            "request_id": g.get("request_id", ""),
            "host": request.host,
            "method": request.method,
            "path": request.path,
            "status": response.status_code,
            "latency": timedelta(seconds=elapsed),
        }
        message = (
            "Request success."
            if response.status_code in _SUCCESS_STATUSES
            else "Request Error."
        )
        get_logger().info("%s %s", message, _format_fields(fields), extra={"fields": fields})
        return response