from fastapi import (
    APIRouter,
    Cookie,
    Depends,
    HTTPException,
    Request,
    Response
)
from fastapi.responses import RedirectResponse
from pydantic import (
    BaseModel,
    StringConstraints
)
from typing import Annotated

from trustpilot_auth.application.services.auth_service import AuthService
from trustpilot_auth.utils.provider import get_auth_service

router = APIRouter(prefix="/auth", tags=["auth"])

STATE_COOKIE = "tp_oauth_state"
STATE_COOKIE_MAX_AGE = 600


class RefreshTokenBody(BaseModel):
    refresh_token: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


@router.get("/login")
def login(request: Request, service: AuthService = Depends(get_auth_service)):
    state = service.new_state()

    response = RedirectResponse(service.authorize_url(state))
    response.set_cookie(
        STATE_COOKIE,
        state,
        max_age=STATE_COOKIE_MAX_AGE,
        path="/auth",
        httponly=True,
        secure=request.url.scheme == "https",
        samesite="lax",
    )

    return response


@router.get("/callback")
def callback(
    response: Response,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    error_description: str | None = None,
    issued_state: Annotated[str | None, Cookie(alias=STATE_COOKIE)] = None,
    service: AuthService = Depends(get_auth_service)
):
    if error:
        raise HTTPException(status_code=400, detail={"oauth_error": error, "description": error_description})

    if not code:
        raise HTTPException(status_code=400, detail="Missing 'code' param.")

    result = service.handle_callback(code, state, issued_state)

    response.delete_cookie(STATE_COOKIE, path="/auth")

    return result


@router.post("/refresh")
def refresh(body: RefreshTokenBody, service: AuthService = Depends(get_auth_service)):
    return service.refresh(body.refresh_token)


@router.post("/revoke")
def revoke(body: RefreshTokenBody, service: AuthService = Depends(get_auth_service)):
    return service.revoke(body.refresh_token)
