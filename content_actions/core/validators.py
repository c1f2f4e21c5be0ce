"""
Input validation and normalization shared by every action.

Raw inputs arrive as strings (or None when not provided). Each action declares
a params model derived from ActionParams; the annotated types below turn raw
strings into typed values and raise PydanticCustomError with a stable error
type, which to_input_error() renders into a message naming the input.

Rules:
- required input absent or ""       -> "The <input> can't be null or empty."
- optional input absent or ""       -> field default (usually from settings)
- malformed value                   -> message naming the input and the value
- coupled optional inputs partially given -> group error
"""
# @file purpose: Provide validation helpers and the ActionParams base model.

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Mapping

from pydantic import (
    AfterValidator,
    AnyHttpUrl,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    SecretStr,
    ValidationError,
    model_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from .errors import InputValidationError

NULL_OR_EMPTY = "The {name} can't be null or empty."

# error type -> message template; {name} is the input name, other keys come from the error context
_MESSAGES: dict[str, str] = {
    "missing": NULL_OR_EMPTY,
    "null_or_empty": NULL_OR_EMPTY,
    "invalid_port": "The {name} is not a valid port: {value}",
    "invalid_boolean": "The {name} must be 'true' or 'false', got: {value}",
    "invalid_integer": "The {name} must be an integer, got: {value}",
    "negative_integer": "The {name} must not be negative, got: {value}",
    "invalid_option": "The {name} must be one of [{options}], got: {value}",
    "invalid_date": "The {name} is not an ISO 8601 date or unix timestamp: {value}",
    "extra_forbidden": "The {name} input is not recognized.",
}

MIN_PORT = 1
MAX_PORT = 65535


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _null_or_empty() -> PydanticCustomError:
    return PydanticCustomError("null_or_empty", "can't be null or empty")


def _required(value: Any) -> Any:
    if _is_blank(value):
        raise _null_or_empty()
    return value


def _parse_int(value: Any) -> int:
    if _is_blank(value):
        raise _null_or_empty()
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise PydanticCustomError(
            "invalid_integer", "must be an integer: {value}", {"value": str(value)}
        ) from None


def _non_negative(value: int) -> int:
    if value < 0:
        raise PydanticCustomError(
            "negative_integer", "must not be negative: {value}", {"value": str(value)}
        )
    return value


def _parse_port(value: Any) -> int:
    if _is_blank(value):
        raise _null_or_empty()
    try:
        port = _parse_int(value)
    except PydanticCustomError:
        port = None
    if port is None or not MIN_PORT <= port <= MAX_PORT:
        raise PydanticCustomError("invalid_port", "not a valid port: {value}", {"value": str(value)})
    return port


def _parse_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if _is_blank(value):
        raise _null_or_empty()
    text = str(value).strip().lower()
    if text == "true":
        return True
    if text == "false":
        return False
    raise PydanticCustomError(
        "invalid_boolean", "must be 'true' or 'false': {value}", {"value": str(value)}
    )


def one_of(*options: str) -> BeforeValidator:
    """Case-insensitive enumerated option, normalized to lower case."""

    def _check(value: Any) -> str:
        if _is_blank(value):
            raise _null_or_empty()
        text = str(value).strip().lower()
        if text not in options:
            raise PydanticCustomError(
                "invalid_option",
                "must be one of [{options}]: {value}",
                {"options": ", ".join(options), "value": str(value)},
            )
        return text

    return BeforeValidator(_check)


RequiredStr = Annotated[str, BeforeValidator(_required)]
RequiredSecret = Annotated[SecretStr, BeforeValidator(_required)]
RequiredUrl = Annotated[AnyHttpUrl, BeforeValidator(_required)]
RequiredDatetime = Annotated[datetime, BeforeValidator(_required)]
IntStr = Annotated[int, BeforeValidator(_parse_int)]
NonNegativeInt = Annotated[int, BeforeValidator(_parse_int), AfterValidator(_non_negative)]
Port = Annotated[int, BeforeValidator(_parse_port)]
Flag = Annotated[bool, BeforeValidator(_parse_flag)]
HostnameVerifier = Annotated[str, one_of("strict", "browser_compatible", "allow_all")]


class ActionParams(BaseModel):
    """
    Base of every params model: camelCase input names, frozen, unknown inputs
    rejected. Absent inputs are dropped before field validation so optional
    fields fall back to their defaults and required ones report "missing".
    """

    model_config = ConfigDict(alias_generator=to_camel, frozen=True, extra="forbid")

    @model_validator(mode="before")
    @classmethod
    def _drop_absent(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        required = {f.alias or n for n, f in cls.model_fields.items() if f.is_required()}
        # "" stays for required inputs so it is reported instead of defaulted
        return {
            k: v for k, v in data.items() if not (v is None or (v == "" and k not in required))
        }

    @classmethod
    def input_names(cls) -> list[tuple[str, bool]]:
        """(input name, required) pairs in declaration order."""
        return [(f.alias or n, f.is_required()) for n, f in cls.model_fields.items()]


def _alias(model: BaseModel, field: str) -> str:
    info = type(model).model_fields[field]
    return info.alias or field


def require_together(model: BaseModel, *fields: str) -> None:
    """Coupled optional inputs: all of them or none of them."""
    given = [f for f in fields if f in model.model_fields_set]
    if not given or len(given) == len(fields):
        return
    missing = [_alias(model, f) for f in fields if f not in given]
    raise PydanticCustomError(
        "incomplete_group",
        "The {inputs} inputs must be specified together or all left empty; missing: {missing}",
        {
            "inputs": ", ".join(_alias(model, f) for f in fields),
            "missing": ", ".join(missing),
            "input": missing[0],
        },
    )


def require_with(model: BaseModel, dependent: str, anchor: str) -> None:
    """dependent may only be given when anchor is given too."""
    fields_set = model.model_fields_set
    if dependent in fields_set and anchor not in fields_set:
        raise PydanticCustomError(
            "dependent_input",
            "The {dependent} input requires {anchor} to be specified",
            {
                "dependent": _alias(model, dependent),
                "anchor": _alias(model, anchor),
                "input": _alias(model, dependent),
            },
        )


def to_input_error(err: ValidationError) -> InputValidationError:
    """Render the first pydantic error as an InputValidationError naming the input."""
    first = err.errors(include_url=False)[0]
    ctx: dict[str, Any] = dict(first.get("ctx") or {})
    loc = first.get("loc") or ()
    name = str(loc[0]) if loc else ctx.get("input")
    template = _MESSAGES.get(first["type"])
    if template is not None and name is not None:
        ctx.setdefault("value", first.get("input"))
        message = template.format(name=name, **ctx)
    elif name is not None and loc:
        message = f"The {name} is invalid: {first['msg']}"
    else:
        message = first["msg"]
    return InputValidationError(name, message)


def validate_inputs(model: type[ActionParams], inputs: Mapping[str, Any]) -> ActionParams:
    try:
        return model.model_validate(dict(inputs))
    except ValidationError as e:
        raise to_input_error(e) from None


# fields whose raw value is a secret; never echoed in logs or listings
SECRET_INPUTS = frozenset(
    {"password", "proxyPassword", "trustPassword", "keystorePassword", "primaryOrSecondaryKey"}
)


def redact(inputs: Mapping[str, Any]) -> dict[str, Any]:
    return {k: ("***" if k in SECRET_INPUTS and v else v) for k, v in inputs.items()}
