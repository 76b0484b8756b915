from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from app.interfaces.api.v1.schemas.screening import reject_hostile_values

SCREENED_USER_FIELDS = ("username", "email")


class UserRegister(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)

    @model_validator(mode="before")
    @classmethod
    def reject_injection(cls, data: Any) -> Any:
        return reject_hostile_values(data, SCREENED_USER_FIELDS)


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: EmailStr


class UserEnvelope(BaseModel):
    message: str
    data: UserResponse
