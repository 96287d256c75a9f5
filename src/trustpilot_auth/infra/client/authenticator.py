import httpx
import logging

from collections.abc import (
    Callable,
    Iterable
)
from datetime import (
    datetime,
    timedelta,
    timezone
)
from pydantic import ValidationError
from typing import Any
from urllib.parse import (
    quote,
    urlencode
)

from trustpilot_auth.config.settings import Settings
from trustpilot_auth.domain.exceptions import (
    ConstructionError,
    DecodeError,
    HttpStatusError,
    ProtocolError,
    TransportError
)
from trustpilot_auth.domain.models.access_token import AccessToken
from trustpilot_auth.domain.models.token_response import TokenResponse

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Authenticator:
    """
    OAuth2 client for the Trustpilot business API.

    Every grant performs a single POST and returns an AccessToken, or raises
    one of the AuthenticatorError subclasses. Nothing is cached or retried.

    Args:
        settings: Endpoints and timeouts; read from the environment when omitted
        client: Transport to use; an owned httpx.Client is created when omitted
        clock: Source of the current time, used to compute token expiry
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.Client | None = None,
        clock: Callable[[], datetime] | None = None
    ):
        self.__settings = settings or Settings()
        self.__owns_client = client is None
        self.__client = client if client is not None else httpx.Client(timeout=self.__settings.TP_HTTP_TIMEOUT)
        self.__clock = clock or utc_now

    def __enter__(self) -> "Authenticator":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self.__owns_client:
            self.__client.close()

    def request_password_access_token(self, api_key: str, api_secret: str, username: str, password: str) -> AccessToken:
        data = self.__request_token(self.__settings.TP_TOKEN_URL, api_key, api_secret, {
            "grant_type": "password",
            "username": username,
            "password": password,
        })

        return self.__create_access_token(data)

    def request_client_credentials_access_token(self, api_key: str, api_secret: str) -> AccessToken:
        data = self.__request_token(self.__settings.TP_TOKEN_URL, api_key, api_secret, {
            "grant_type": "client_credentials",
        })

        return self.__create_access_token(data)

    def request_authorization_code_access_token(self, api_key: str, api_secret: str, code: str, redirect_uri: str) -> AccessToken:
        data = self.__request_token(self.__settings.TP_TOKEN_URL, api_key, api_secret, {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": redirect_uri,
        })

        return self.__create_access_token(data)

    def refresh_access_token(self, api_key: str, api_secret: str, refresh_token: str) -> AccessToken:
        data = self.__request_token(self.__settings.TP_REFRESH_URL, api_key, api_secret, {
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
        })

        return self.__create_access_token(data)

    def revoke_refresh_token(self, refresh_token: str) -> None:
        url = self.__settings.TP_REVOKE_URL

        logger.debug(f"Revoking refresh token at {url}")

        self.__ensure_open("Network error while revoking Trustpilot refresh token")

        try:
            r = self.__client.post(url, data={"token": refresh_token})
        except httpx.HTTPError as e:
            logger.warning(f"Transport failure while revoking token at {url}: {e}")
            raise TransportError(
                f"Network error while revoking Trustpilot refresh token: {e}",
                cause=e
            ) from e

        if not r.is_success:
            logger.warning(f"Token revocation at {url} returned HTTP {r.status_code}")
            raise HttpStatusError(
                f"Trustpilot returned HTTP {r.status_code} while attempting to revoke token.",
                status_code=r.status_code
            )

    def build_authorization_url(
        self,
        api_key: str,
        redirect_uri: str,
        state: str | None = None,
        scopes: Iterable[str] | None = None
    ) -> str:
        params = {
            "client_id": api_key,
            "redirect_uri": redirect_uri,
            "response_type": "code",
        }

        if state is not None:
            params["state"] = state

        scope = " ".join(scopes or [])

        if scope:
            params["scope"] = scope

        # quote rather than quote_plus: spaces in scope become %20
        return f"{self.__settings.TP_AUTHORIZE_URL}?{urlencode(params, quote_via=quote)}"

    def __ensure_open(self, prefix: str) -> None:
        # httpx raises a bare RuntimeError when sending on a closed client
        if self.__client.is_closed:
            logger.warning("Authenticator used after its HTTP client was closed")
            raise TransportError(f"{prefix}: the HTTP client has been closed")

    def __request_token(self, url: str, api_key: str, api_secret: str, form: dict[str, str]) -> dict[str, Any]:
        logger.debug(f"Requesting OAuth token from {url} (grant_type={form['grant_type']})")

        self.__ensure_open("Network error while contacting Trustpilot OAuth endpoint")

        request = self.__client.build_request("POST", url, data=form)

        try:
            r = self.__client.send(request, auth=httpx.BasicAuth(api_key, api_secret), stream=True)
        except httpx.HTTPError as e:
            logger.warning(f"Transport failure while contacting {url}: {e}")
            raise TransportError(
                f"Network error while contacting Trustpilot OAuth endpoint: {e}",
                cause=e
            ) from e

        try:
            r.read()
        except (httpx.HTTPError, httpx.StreamError) as e:
            logger.warning(f"Transport failure while reading response from {url}: {e}")
            raise TransportError(f"Network error while streaming content: {e}", cause=e) from e
        finally:
            r.close()

        if r.status_code >= 400:
            logger.warning(f"OAuth request to {url} returned HTTP {r.status_code}")
            raise HttpStatusError(
                f"Trustpilot returned HTTP {r.status_code} during OAuth request.",
                status_code=r.status_code
            )

        try:
            data = r.json()
        except ValueError as e:
            logger.warning(f"Undecodable OAuth response from {url}: {e}")
            raise DecodeError(f"Failed to decode Trustpilot OAuth JSON response: {e}", cause=e) from e

        if not isinstance(data, dict):
            logger.warning(f"OAuth response from {url} is {type(data).__name__}, expected an object")
            raise ProtocolError("Unexpected OAuth response format from Trustpilot.")

        if data.get("access_token") is None:
            logger.warning(f"OAuth response from {url} has no access_token")
            raise ProtocolError("Token response missing required field: access_token")

        return data

    def __create_access_token(self, data: dict[str, Any]) -> AccessToken:
        try:
            payload = TokenResponse.model_validate(data)

            if payload.expires_in:
                lifetime = timedelta(seconds=payload.expires_in)
            else:
                lifetime = timedelta(hours=self.__settings.TP_DEFAULT_TOKEN_LIFETIME_HOURS)

            return AccessToken(
                token=payload.access_token,
                expiry=self.__clock() + lifetime,
                refresh_token=payload.refresh_token
            )
        except (ValidationError, TypeError, OverflowError) as e:
            logger.warning(f"Could not build AccessToken: {e}")
            raise ConstructionError(f"Could not create AccessToken from Trustpilot data: {e}", cause=e) from e
