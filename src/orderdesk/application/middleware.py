"""Cross-cutting concerns wrapped around application handlers.

Each middleware exposes the same ``handle`` method as the handler it
wraps, so they stack in any order:

    handler = LoggingMiddleware(InstrumentingMiddleware(inner, "submit_order"), "submit_order")

Handlers and the domain below them stay free of logging and metrics.
"""

from __future__ import annotations

import dataclasses
import time
from typing import Any

import structlog
from prometheus_client import Counter, Histogram

from orderdesk.domain.model.deadline import Deadline


_REDACTED = "[redacted]"
# Payment proofs are customer documents; they never reach the logs.
_SECRET_FIELDS = ("proof",)


def _redact(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        secrets = {
            f.name: _REDACTED for f in dataclasses.fields(value) if f.name in _SECRET_FIELDS
        }
        if secrets:
            return dataclasses.replace(value, **secrets)
    return value


def _loggable(args: tuple[Any, ...], kwargs: dict[str, Any]) -> dict[str, Any]:
    params: dict[str, Any] = {}
    for i, value in enumerate(args):
        if not isinstance(value, Deadline):
            params[f"arg{i}"] = _redact(value)
    for key, value in kwargs.items():
        if key in _SECRET_FIELDS:
            params[key] = _REDACTED
        elif not isinstance(value, Deadline):
            params[key] = _redact(value)
    return params


class LoggingMiddleware:

    def __init__(self, inner: Any, method: str, logger: Any = None) -> None:
        self._inner = inner
        self._method = method
        self._logger = logger or structlog.get_logger("orderdesk.application")

    def handle(self, *args: Any, **kwargs: Any) -> Any:
        begin = time.perf_counter()
        err: Exception | None = None
        try:
            return self._inner.handle(*args, **kwargs)
        except Exception as exc:
            err = exc
            raise
        finally:
            log = self._logger.warning if err is not None else self._logger.info
            log(
                "request_handled",
                method=self._method,
                took=round(time.perf_counter() - begin, 6),
                err=str(err) if err is not None else None,
                **_loggable(args, kwargs),
            )


class InstrumentingMiddleware:

    def __init__(
        self,
        inner: Any,
        method: str,
        request_count: Counter,
        request_latency: Histogram,
    ) -> None:
        self._inner = inner
        self._method = method
        self._request_count = request_count
        self._request_latency = request_latency

    def handle(self, *args: Any, **kwargs: Any) -> Any:
        begin = time.perf_counter()
        failed = False
        try:
            return self._inner.handle(*args, **kwargs)
        except Exception:
            failed = True
            raise
        finally:
            labels = {"method": self._method, "error": str(failed).lower()}
            self._request_count.labels(**labels).inc()
            self._request_latency.labels(**labels).observe(time.perf_counter() - begin)
