from functools import lru_cache

from trustpilot_auth.application.services.auth_service import AuthService
from trustpilot_auth.application.services.health_service import HealthService
from trustpilot_auth.config.settings import AppSettings
from trustpilot_auth.infra.client.authenticator import Authenticator


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings()


@lru_cache(maxsize=1)
def get_authenticator() -> Authenticator:
    return Authenticator(get_settings())


def get_health_service() -> HealthService:
    return HealthService(get_settings())


def get_auth_service() -> AuthService:
    return AuthService(get_settings(), get_authenticator())
