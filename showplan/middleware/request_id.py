"""Request id middleware (pure ASGI).

Accepts a caller-supplied id when it is short and made of safe characters,
otherwise mints a UUID4. The id is stored on scope["state"], published to the
logging contextvar and echoed on the response.
"""

import re
import uuid
from typing import Any

from showplan.shared.context import reset_request_id, set_request_id

MAX_REQUEST_ID_LENGTH = 64
_SAFE_REQUEST_ID = re.compile(rf"[A-Za-z0-9_:-]{{1,{MAX_REQUEST_ID_LENGTH}}}")


def sanitize_request_id(raw: str | None) -> str:
    """Return the stripped inbound id if safe to log, else a fresh UUID4."""
    candidate = (raw or "").strip()
    if _SAFE_REQUEST_ID.fullmatch(candidate):
        return candidate
    return str(uuid.uuid4())


class RequestIDMiddleware:
    def __init__(self, app: Any, header_name: str = "X-Request-ID") -> None:
        self.app = app
        self.header_name = header_name
        self._header_key = header_name.lower().encode("latin-1")

    def _inbound(self, scope: dict[str, Any]) -> str | None:
        for key, value in scope.get("headers") or ():
            if key.lower() == self._header_key:
                return value.decode("latin-1")
        return None

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = sanitize_request_id(self._inbound(scope))
        scope.setdefault("state", {})["request_id"] = request_id
        echoed = (self._header_key, request_id.encode("latin-1"))

        async def send_with_id(message: dict[str, Any]) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [*message.get("headers", ()), echoed]
            await send(message)

        token = set_request_id(request_id)
        try:
            await self.app(scope, receive, send_with_id)
        finally:
            reset_request_id(token)
