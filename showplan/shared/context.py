"""Request context management using contextvars.

Async-safe storage for request-scoped data (request id) so log records
emitted anywhere during a request can carry it.
"""

from contextvars import ContextVar, Token

_current_request_id: ContextVar[str | None] = ContextVar("current_request_id", default=None)


def set_request_id(request_id: str | None) -> Token[str | None]:
    """Set the request id for the current task; returns a token for reset_request_id."""
    return _current_request_id.set(request_id)


def reset_request_id(token: Token[str | None]) -> None:
    _current_request_id.reset(token)


def get_request_id() -> str | None:
    return _current_request_id.get()
