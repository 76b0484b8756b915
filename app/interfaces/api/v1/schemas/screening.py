from collections.abc import Iterable
from typing import Any

from pydantic_core import PydanticCustomError

from app.application.services.input_screening_service import screen_value


def reject_hostile_values(data: Any, fields: Iterable[str] | None = None) -> Any:
    if not isinstance(data, dict):
        return data
    keys = data.keys() if fields is None else [key for key in fields if key in data]
    for key in keys:
        value = data[key]
        if not isinstance(value, str):
            continue
        message = screen_value(value)
        if message is not None:
            raise PydanticCustomError("hostile_input", message, {"field": key})
    return data
