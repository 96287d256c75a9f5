from datetime import (
    datetime,
    timezone
)
from pydantic import (
    BaseModel,
    ConfigDict,
    field_validator
)


class AccessToken(BaseModel):
    """
    Bearer token issued by Trustpilot, immutable once built.

    Construct with keyword arguments only, as with any pydantic model:
    AccessToken(token="...", expiry=..., refresh_token=None).
    """

    model_config = ConfigDict(frozen=True)

    token        : str
    expiry       : datetime
    refresh_token: str | None = None

    @field_validator("expiry")
    @classmethod
    def as_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)

        return v.astimezone(timezone.utc)

    def is_expired(self, reference: datetime | None = None) -> bool:
        if reference is None:
            reference = datetime.now(timezone.utc)
        elif reference.tzinfo is None:
            reference = reference.replace(tzinfo=timezone.utc)

        return self.expiry <= reference

    @property
    def authorization_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}
