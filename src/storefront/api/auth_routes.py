"""Admin login, logout and session introspection."""

from fastapi import APIRouter, HTTPException, Request, Response
from protean.exceptions import ObjectNotFoundError

from storefront.admin.management import InvalidCredentials, authenticate, get_admin_user
from storefront.admin.session import LEGACY_USER_ID, create_session_token
from storefront.api.schemas import LoginRequest, MeResponse
from storefront.api.security import clear_session_cookie, current_session, set_session_cookie

auth_router = APIRouter(prefix="/auth", tags=["auth"])


@auth_router.post("/login")
async def login(body: LoginRequest, response: Response) -> dict:
    if not body.username or not body.password:
        raise HTTPException(status_code=400, detail="Username and password are required")

    try:
        admin = authenticate(body.username, body.password)
    except InvalidCredentials:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    set_session_cookie(response, create_session_token(str(admin.id), admin.username))
    return {"ok": True, "user": admin.to_public_dict()}


@auth_router.post("/logout")
async def logout(response: Response) -> dict:
    clear_session_cookie(response)
    return {"ok": True}


@auth_router.get("/me", response_model=MeResponse)
async def me(request: Request) -> MeResponse:
    session = current_session(request)
    if session is None:
        raise HTTPException(status_code=401, detail="Unauthorized")

    display_name = session.username
    if session.user_id != LEGACY_USER_ID:
        try:
            display_name = get_admin_user(session.user_id).display_name
        except ObjectNotFoundError:
            raise HTTPException(status_code=401, detail="Unauthorized")

    return MeResponse(user_id=session.user_id, username=session.username, display_name=display_name)
