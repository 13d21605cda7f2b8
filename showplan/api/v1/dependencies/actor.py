"""Acting user dependency.

Authentication happens upstream; the gateway forwards the user id in a
header (ACTOR_HEADER_NAME, default X-User-ID).
"""

from fastapi import HTTPException, Request

from showplan.core.config import get_settings


def get_optional_acting_user_id(request: Request) -> str | None:
    """Return the acting user id from the actor header, or None when absent."""
    value = request.headers.get(get_settings().actor_header_name, "").strip()
    return value or None


def get_acting_user_id(request: Request) -> str:
    """Require the acting user id (write endpoints). 401 when the header is missing."""
    user_id = get_optional_acting_user_id(request)
    if user_id is None:
        raise HTTPException(
            status_code=401,
            detail=f"Missing {get_settings().actor_header_name} header",
        )
    return user_id
