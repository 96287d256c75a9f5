import secrets

from fastapi import HTTPException

from trustpilot_auth.config.settings import AppSettings
from trustpilot_auth.domain.exceptions import (
    AuthenticatorError,
    HttpStatusError
)
from trustpilot_auth.domain.models.access_token import AccessToken
from trustpilot_auth.infra.client.authenticator import Authenticator


def to_http_exception(e: AuthenticatorError) -> HTTPException:
    # Upstream client errors are the caller's to fix; everything else is a bad gateway.
    if isinstance(e, HttpStatusError) and 400 <= e.status_code < 500:
        status_code = e.status_code
    else:
        status_code = 502

    return HTTPException(status_code=status_code, detail={"error": e.kind, "message": e.message})


class AuthService:
    def __init__(self, settings: AppSettings, authenticator: Authenticator):
        self.__settings = settings
        self.__authenticator = authenticator

    def new_state(self) -> str:
        return secrets.token_urlsafe(16)

    def authorize_url(self, state: str) -> str:
        return self.__authenticator.build_authorization_url(
            self.__settings.TP_API_KEY,
            self.__settings.TP_REDIRECT_URI,
            state=state,
            scopes=self.__settings.scopes,
        )

    @staticmethod
    def verify_state(received: str | None, issued: str | None) -> None:
        if not received or not issued or not secrets.compare_digest(received.encode(), issued.encode()):
            raise HTTPException(status_code=400, detail="Invalid or missing OAuth 'state'.")

    def handle_callback(self, code: str, state: str | None, issued_state: str | None) -> dict:
        self.verify_state(state, issued_state)

        try:
            token = self.__authenticator.request_authorization_code_access_token(
                self.__settings.TP_API_KEY,
                self.__settings.TP_API_SECRET,
                code,
                self.__settings.TP_REDIRECT_URI,
            )
        except AuthenticatorError as e:
            raise to_http_exception(e) from e

        return {"message": "Trustpilot connected", **self.describe(token)}

    def refresh(self, refresh_token: str) -> dict:
        try:
            token = self.__authenticator.refresh_access_token(
                self.__settings.TP_API_KEY,
                self.__settings.TP_API_SECRET,
                refresh_token,
            )
        except AuthenticatorError as e:
            raise to_http_exception(e) from e

        return self.describe(token)

    def revoke(self, refresh_token: str) -> dict:
        try:
            self.__authenticator.revoke_refresh_token(refresh_token)
        except AuthenticatorError as e:
            raise to_http_exception(e) from e

        return {"revoked": True}

    @staticmethod
    def describe(token: AccessToken) -> dict:
        return {
            "access_token": token.token,
            "expires_at": token.expiry.isoformat(timespec="seconds").replace("+00:00", "Z"),
            "refresh_token": token.refresh_token,
            "has_refresh": token.refresh_token is not None,
        }
