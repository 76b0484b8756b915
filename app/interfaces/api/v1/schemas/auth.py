from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from app.interfaces.api.v1.schemas.screening import reject_hostile_values
from app.interfaces.api.v1.schemas.user import SCREENED_USER_FIELDS


class AuthRequest(BaseModel):
    """Body accepted by the combined signup/login endpoint.

    A body that names a ``username`` is a registration, anything else is a login.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    username: str | None = None
    email: str | None = None
    password: str | None = None

    @model_validator(mode="before")
    @classmethod
    def reject_injection(cls, data: Any) -> Any:
        return reject_hostile_values(data, SCREENED_USER_FIELDS)

    @property
    def is_registration(self) -> bool:
        return self.username is not None


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class TokenEnvelope(BaseModel):
    message: str
    data: TokenResponse


class LookupEnvelope(BaseModel):
    message: str
    data: TokenResponse | None = None
