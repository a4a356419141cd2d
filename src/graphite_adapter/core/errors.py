"""Error types and HTTP status mapping."""

from __future__ import annotations


class GraphiteAdapterError(Exception):
    """Base exception for this package."""

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        http_status: int | None = None,
        cause: str | None = None,
        operation: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.http_status = http_status
        self.cause = cause
        self.operation = operation

    def __str__(self) -> str:
        if self.operation:
            return f"{self.operation}: {self.message}"
        return self.message


class GraphiteTransportError(GraphiteAdapterError):
    """Network/transport-level failure."""


class GraphiteClientClosedError(GraphiteAdapterError):
    """Raised when client is used after close."""


class GraphiteValidationError(GraphiteAdapterError):
    """Invalid input / request rejected."""


class GraphiteServerError(GraphiteAdapterError):
    """Server-side unexpected error."""


class GraphiteUnavailableError(GraphiteAdapterError):
    """Backend unavailable or behind a failing gateway."""


class GraphiteProtocolError(GraphiteAdapterError):
    """Response body does not have the render JSON shape."""


class GraphiteDecodeError(GraphiteAdapterError):
    """Render response cannot be turned into tagged series."""

    def __init__(self, request_context: str, reason: str) -> None:
        super().__init__(
            f"graphite ParseError ({request_context}): {reason}",
            cause="decode",
        )
        self.request_context = request_context
        self.reason = reason


def classify_http_status(http_status: int | None) -> GraphiteAdapterError | None:
    """Map a render HTTP status to a domain exception."""

    if http_status is None:
        return GraphiteProtocolError("Missing HTTP status")
    if 200 <= http_status < 300:
        return None
    message = f"graphite render request failed with HTTP {http_status}"
    if http_status in {502, 503, 504}:
        return GraphiteUnavailableError(
            message,
            http_status=http_status,
            cause="server_transient",
        )
    if http_status >= 500:
        return GraphiteServerError(
            message,
            http_status=http_status,
            cause="server_transient",
        )
    if http_status >= 400:
        return GraphiteValidationError(message, http_status=http_status)
    return GraphiteProtocolError(
        f"unexpected HTTP status {http_status} from render endpoint",
        http_status=http_status,
    )


def tag_operation(exc: BaseException, operation: str) -> GraphiteAdapterError:
    """Attach the failing operation name, wrapping foreign errors."""

    if isinstance(exc, GraphiteAdapterError):
        if exc.operation is None:
            exc.operation = operation
        return exc
    wrapped = GraphiteTransportError(
        f"{exc.__class__.__name__}: {exc}",
        cause="network",
        operation=operation,
    )
    wrapped.__cause__ = exc
    return wrapped


__all__ = [
    "GraphiteAdapterError",
    "GraphiteTransportError",
    "GraphiteClientClosedError",
    "GraphiteValidationError",
    "GraphiteServerError",
    "GraphiteUnavailableError",
    "GraphiteProtocolError",
    "GraphiteDecodeError",
    "classify_http_status",
    "tag_operation",
]
