"""Declarative validation of product write payloads.

Incoming JSON bodies are untyped maps. They are checked against the
``ProductPayload`` schema and the outcome is returned as a value: either the
validated payload or a ``ValidationFailed`` carrying per-field messages.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from pydantic_core import PydanticCustomError

NAME_MAX_LENGTH = 255

# Signed 64-bit column range
STOCK_MIN = -(2**63)
STOCK_MAX = 2**63 - 1

_REQUIRED = "The {field} field is required."
_STRING = "The {field} field must be a string."
_MAX = "The {field} field must not be greater than {max_length} characters."
_NUMERIC = "The {field} field must be a number."
_INTEGER = "The {field} field must be an integer."

# pydantic error type -> message template
RULE_MESSAGES: dict[str, str] = {
    "missing": _REQUIRED,
    "string_type": _STRING,
    "string_too_long": _MAX,
    "float_type": _NUMERIC,
    "float_parsing": _NUMERIC,
    "finite_number": _NUMERIC,
    "int_type": _INTEGER,
    "int_parsing": _INTEGER,
    "int_parsing_size": _INTEGER,
    "int_from_float": _INTEGER,
    "greater_than_equal": _INTEGER,
    "less_than_equal": _INTEGER,
}


class ProductPayload(BaseModel):
    """Schema for create and update bodies."""

    name: str = Field(max_length=NAME_MAX_LENGTH)
    description: str | None = None
    price: float = Field(allow_inf_nan=False)
    stock: int = Field(ge=STOCK_MIN, le=STOCK_MAX)

    @model_validator(mode="before")
    @classmethod
    def _normalize_input(cls, data: Any) -> Any:
        # Trimmed blank strings and nulls count as absent
        if not isinstance(data, Mapping):
            return data
        normalized = {}
        for key, value in data.items():
            if isinstance(value, str):
                value = value.strip()
                if value == "":
                    continue
            if value is None:
                continue
            normalized[key] = value
        return normalized

    @field_validator("price", mode="before")
    @classmethod
    def _price_not_bool(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise PydanticCustomError("float_type", "Input should be a valid number")
        return value

    @field_validator("stock", mode="before")
    @classmethod
    def _stock_not_bool(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise PydanticCustomError("int_type", "Input should be a valid integer")
        return value


@dataclass(frozen=True)
class ValidationFailed:
    """Structured validation outcome: field name -> list of messages."""

    messages: dict[str, list[str]] = field(default_factory=dict)

    error: str = "Validation failed"


def _message_for(err: Mapping[str, Any]) -> tuple[str, str]:
    loc = err.get("loc") or ()
    field_name = str(loc[0]) if loc else "body"
    template = RULE_MESSAGES.get(err["type"])
    if template is None:
        return field_name, err["msg"]
    ctx = err.get("ctx") or {}
    return field_name, template.format(field=field_name, **ctx)


def collect_messages(exc: ValidationError) -> dict[str, list[str]]:
    """Group pydantic errors into a field -> messages map."""
    messages: dict[str, list[str]] = {}
    for err in exc.errors():
        field_name, message = _message_for(err)
        bucket = messages.setdefault(field_name, [])
        if message not in bucket:
            bucket.append(message)
    return messages


def validate_product_payload(payload: Any) -> ProductPayload | ValidationFailed:
    """Validate an untyped payload against ``ProductPayload``.

    Anything that is not a JSON object is validated as an empty object, so
    each required field reports as missing.
    """
    if not isinstance(payload, Mapping):
        payload = {}
    try:
        return ProductPayload.model_validate(payload)
    except ValidationError as exc:
        return ValidationFailed(messages=collect_messages(exc))
