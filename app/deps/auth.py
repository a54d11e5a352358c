from typing import Optional

from fastapi import HTTPException, Request

from app.services.auth_service import verify_token


def _parse_bearer_token(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None

    parts = auth_header.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        raise HTTPException(status_code=401, detail="Invalid Authorization header")

    return parts[1].strip()


def optional_actor(request: Request) -> Optional[str]:
    """
    User id from a bearer token, or None when the request carries no token.
    A token that is present but invalid is rejected.
    """
    token = _parse_bearer_token(request)
    if token is None:
        return None

    try:
        claims = verify_token(token)
    except ValueError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc

    user_id = str(claims["sub"])
    request.state.user_id = user_id
    return user_id
