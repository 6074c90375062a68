"""Logging transport adapter for requests sessions.

``LoggingTransport`` wraps another transport adapter. Every request body is
buffered before it is sent so that the log callback can read it after the
wrapped adapter has consumed it. Mount it on a session to log all traffic::

    session = requests.Session()
    transport = LoggingTransport(log_func=verbose_log_func)
    session.mount("http://", transport)
    session.mount("https://", transport)
"""

from __future__ import annotations

import math
import time
from typing import Any, Callable, Optional

import requests
from requests.adapters import BaseAdapter, HTTPAdapter

LogFunc = Callable[[requests.Response, requests.PreparedRequest], None]

# Attribute set on each prepared request holding its monotonic start time.
REQUEST_START_ATTR = "_httplog_request_start"


def default_log_func(resp: requests.Response, req: requests.PreparedRequest) -> None:
    """Print a one-line request and response summary."""
    print(f"Request : {req.method} {req.url}")
    print(f"Response : {resp.status_code} {resp.reason or ''}".rstrip())


def read_body(req: requests.PreparedRequest) -> bytes:
    """Return the request body as bytes and leave the request readable again.

    File-like, iterable and other bytes-like bodies are replaced with the
    buffered ``bytes``. ``str`` and ``bytes`` bodies are left untouched.
    """

    body = req.body
    if body is None:
        return b""
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    if isinstance(body, (bytearray, memoryview)):
        data = bytes(body)
    elif hasattr(body, "read"):
        data = body.read()
    else:
        data = b"".join(_chunk_bytes(chunk) for chunk in body)
    if isinstance(data, str):
        data = data.encode("utf-8")
    req.body = data
    return data


def _chunk_bytes(chunk: Any) -> bytes:
    if isinstance(chunk, str):
        return chunk.encode("utf-8")
    if isinstance(chunk, (bytes, bytearray, memoryview)):
        return bytes(chunk)
    raise TypeError(f"request body chunks must be bytes or str, got {type(chunk).__name__}")


def _restore_body(req: requests.PreparedRequest, buffered: bytes) -> None:
    if isinstance(req.body, (bytes, str)) or (req.body is None and not buffered):
        return
    req.body = buffered


def request_duration(req: requests.PreparedRequest) -> Optional[float]:
    """Seconds elapsed since the transport saw ``req``, or None."""
    start = getattr(req, REQUEST_START_ATTR, None)
    if start is None:
        return None
    return time.monotonic() - start


def format_duration(seconds: float, digits: int = 2) -> str:
    """Render a duration rounded to ``digits`` significant digits."""

    if seconds <= 0:
        return "0s"
    # unit is picked from the rounded value: 0.9997 -> 1s
    rounded = round(seconds, digits - 1 - int(math.floor(math.log10(seconds))))
    for unit, scale in (("s", 1.0), ("ms", 1e-3), ("µs", 1e-6)):
        if rounded >= scale:
            break
    else:
        unit, scale = "ns", 1e-9
    value = rounded / scale
    decimals = max(0, digits - 1 - int(math.floor(math.log10(value))))
    text = f"{value:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text}{unit}"


def verbose_log_func(resp: requests.Response, req: requests.PreparedRequest) -> None:
    """Print a banner block with URL, method, body, status and duration."""

    body = read_body(req)
    print("--------- Elasticsearch ---------")
    print("Request URL : ", req.url)
    print("Request Method : ", req.method)
    print("Request Body : ", body.decode("utf-8", errors="replace"))
    print("Response Status : ", resp.status_code)
    duration = request_duration(req)
    if duration is not None:
        print("Response Duration : ", format_duration(duration))
    print("--------------------------------")


class LoggingTransport(BaseAdapter):
    """Transport adapter that logs each completed request/response pair.

    No field is mandatory: ``transport`` defaults to a fresh ``HTTPAdapter``
    and ``log_func`` to ``default_log_func``.
    """

    def __init__(
        self,
        transport: Optional[BaseAdapter] = None,
        log_func: Optional[LogFunc] = None,
    ) -> None:
        super().__init__()
        self.transport = transport
        self.log_func = log_func

    def _transport(self) -> BaseAdapter:
        if self.transport is None:
            self.transport = HTTPAdapter()
        return self.transport

    def _log(self, resp: requests.Response, req: requests.PreparedRequest) -> None:
        if self.log_func is not None:
            self.log_func(resp, req)
        else:
            default_log_func(resp, req)

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        setattr(request, REQUEST_START_ATTR, time.monotonic())
        buffered = read_body(request)

        resp = self._transport().send(request, **kwargs)

        # the wrapped adapter may have swapped or drained the body
        _restore_body(request, buffered)
        self._log(resp, request)
        return resp

    def close(self) -> None:
        if self.transport is not None:
            self.transport.close()


__all__ = [
    "LogFunc",
    "REQUEST_START_ATTR",
    "LoggingTransport",
    "default_log_func",
    "format_duration",
    "read_body",
    "request_duration",
    "verbose_log_func",
]
