"""ASGI middleware."""

from showplan.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
