from datetime import (
    datetime,
    timezone
)

from trustpilot_auth.config.settings import AppSettings


class HealthService:
    def __init__(self, settings: AppSettings):
        self.__settings = settings

    def get_health(self) -> dict[str, str]:
        return {
            "status": "ok",
            "service": self.__settings.SERVICE_NAME,
            "ts_utc": datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
        }

    def get_env_check(self) -> dict:
        """Configuration the OAuth flows will use. Secrets are reported as set/unset only."""
        settings = self.__settings

        return {
            "api_key_set": bool(settings.TP_API_KEY),
            "api_secret_set": bool(settings.TP_API_SECRET),
            "redirect_uri": settings.TP_REDIRECT_URI,
            "scopes": settings.scopes,
            "endpoints": {
                "token": settings.TP_TOKEN_URL,
                "refresh": settings.TP_REFRESH_URL,
                "revoke": settings.TP_REVOKE_URL,
                "authorize": settings.TP_AUTHORIZE_URL,
            },
            "http_timeout": settings.TP_HTTP_TIMEOUT,
            "default_token_lifetime_hours": settings.TP_DEFAULT_TOKEN_LIFETIME_HOURS,
        }
