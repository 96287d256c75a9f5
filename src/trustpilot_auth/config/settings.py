from pathlib import Path
from pydantic import (
    PositiveFloat,
    PositiveInt,
    StringConstraints
)
from pydantic_settings import (
    BaseSettings,
    SettingsConfigDict
)
from typing import Annotated

ROOT = Path(__file__).resolve().parents[3]
ENV_PATH = ROOT / ".env"


class Settings(BaseSettings):
    TP_TOKEN_URL    : str = "https://api.trustpilot.com/v1/oauth/oauth-business-users-for-applications/accesstoken"
    TP_REFRESH_URL  : str = "https://api.trustpilot.com/v1/oauth/oauth-business-users-for-applications/refresh"
    TP_REVOKE_URL   : str = "https://api.trustpilot.com/v1/oauth/oauth-business-users-for-applications/revoke"
    TP_AUTHORIZE_URL: str = "https://authenticate.trustpilot.com"

    TP_HTTP_TIMEOUT: PositiveFloat = 20.0

    # Used when the token endpoint omits expires_in.
    TP_DEFAULT_TOKEN_LIFETIME_HOURS: PositiveInt = 100

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )


class AppSettings(Settings):
    TP_API_KEY   : Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    TP_API_SECRET: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

    TP_REDIRECT_URI: str = "http://localhost:8000/auth/callback"
    TP_SCOPES      : str = ""

    SERVICE_NAME: str = "trustpilot-auth"

    @property
    def scopes(self) -> list[str]:
        return self.TP_SCOPES.split()
