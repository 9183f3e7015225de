"""Admin session cookie handling."""

from fastapi import HTTPException, Request, Response

from storefront import config
from storefront.admin.session import SessionData, verify_session_token


def current_session(request: Request) -> SessionData | None:
    return verify_session_token(request.cookies.get(config.SESSION_COOKIE_NAME))


def require_admin(request: Request) -> SessionData:
    """Dependency guarding every /admin route."""
    session = current_session(request)
    if session is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return session


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=config.SESSION_COOKIE_NAME,
        value=token,
        max_age=config.SESSION_MAX_AGE_SECONDS,
        path="/",
        httponly=True,
        samesite="lax",
        secure=config.is_production(),
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=config.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        samesite="lax",
        secure=config.is_production(),
    )
