"""HTTP request/response logging for requests sessions."""

from .transport import LoggingTransport, default_log_func, read_body, verbose_log_func

__all__ = ["LoggingTransport", "default_log_func", "read_body", "verbose_log_func"]
