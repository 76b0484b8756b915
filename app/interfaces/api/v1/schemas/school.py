import re
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from app.interfaces.api.v1.schemas.pagination import PaginationMeta
from app.interfaces.api.v1.schemas.screening import reject_hostile_values

PHONE_PATTERN = re.compile(r"^\+?[0-9](?:[ -]?[0-9]){6,14}$")


def _require_text(value: str | None) -> str | None:
    if value is not None and not value:
        raise PydanticCustomError("blank_value", "value cannot be empty")
    return value


def _require_phone(value: str | None) -> str | None:
    if value is not None and not PHONE_PATTERN.match(value):
        raise PydanticCustomError("phone_format", "must be a valid phone number")
    return value


class SchoolPayload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)

    @model_validator(mode="before")
    @classmethod
    def reject_injection(cls, data: Any) -> Any:
        return reject_hostile_values(data)


class SchoolRegistration(SchoolPayload):
    owner_name: str
    school_name: str
    school_hotline: str
    location: str
    email: EmailStr | None = None

    @field_validator("owner_name", "school_name", "location")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return _require_text(value)  # type: ignore[return-value]

    @field_validator("school_hotline")
    @classmethod
    def valid_hotline(cls, value: str) -> str:
        return _require_phone(value)  # type: ignore[return-value]


class SchoolUpdate(SchoolPayload):
    owner_name: str | None = None
    school_name: str | None = None
    school_hotline: str | None = None
    location: str | None = None
    email: EmailStr | None = None

    @field_validator("owner_name", "school_name", "location")
    @classmethod
    def not_blank(cls, value: str | None) -> str | None:
        return _require_text(value)

    @field_validator("school_hotline")
    @classmethod
    def valid_hotline(cls, value: str | None) -> str | None:
        return _require_phone(value)


class SchoolResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    owner_name: str
    school_name: str
    school_hotline: str
    location: str
    email: str | None = None
    created_at: datetime
    updated_at: datetime


class SchoolEnvelope(BaseModel):
    message: str
    data: SchoolResponse


class SchoolListEnvelope(BaseModel):
    message: str
    data: list[SchoolResponse]
    pagination: PaginationMeta
