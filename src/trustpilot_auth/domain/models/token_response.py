from pydantic import (
    BaseModel,
    ConfigDict,
    field_validator
)
from typing import Any


class TokenResponse(BaseModel):
    """Body of a successful token or refresh call."""

    model_config = ConfigDict(extra="ignore")

    access_token : str
    expires_in   : int | None = None
    refresh_token: str | None = None

    @field_validator("access_token", mode="before")
    @classmethod
    def coerce_to_string(cls, v: Any) -> str:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)

        return v

    @field_validator("expires_in", mode="before")
    @classmethod
    def falsy_means_unknown(cls, v: Any) -> Any:
        # 0 or "" carries no lifetime information
        if not v:
            return None

        return v
