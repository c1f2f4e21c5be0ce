"""
Structured action outcome reported back to the host runtime.

ActionResult is a tagged union:
- Success(payload): the delegated operation returned a value
- Failure(message, detail): validation or the delegated operation raised

Both render to the same flat host map via to_outputs(); the host routes on
returnCode by exact string comparison, so the constants below are fixed.
"""
# @file purpose: Define ActionResult model and the result normalizer.

from __future__ import annotations

import json
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

# output names
RETURN_CODE = "returnCode"
RETURN_RESULT = "returnResult"
EXCEPTION = "exception"

# return codes
SUCCESS_CODE = "0"
FAILURE_CODE = "-1"

# response names
SUCCESS = "success"
FAILURE = "failure"


class Success(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["success"] = "success"
    payload: str = ""

    @property
    def ok(self) -> bool:
        return True

    @property
    def code(self) -> str:
        return SUCCESS_CODE

    @property
    def response(self) -> str:
        return SUCCESS

    def to_outputs(self) -> dict[str, str]:
        return {RETURN_CODE: SUCCESS_CODE, RETURN_RESULT: self.payload}


class Failure(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["failure"] = "failure"
    message: str = Field(..., description="Human-readable failure message.")
    detail: str = Field(..., min_length=1, description="Full diagnostic text.")

    @property
    def ok(self) -> bool:
        return False

    @property
    def code(self) -> str:
        return FAILURE_CODE

    @property
    def response(self) -> str:
        return FAILURE

    def to_outputs(self) -> dict[str, str]:
        return {RETURN_CODE: FAILURE_CODE, RETURN_RESULT: self.message, EXCEPTION: self.detail}


ActionResult = Annotated[Union[Success, Failure], Field(discriminator="kind")]


def success(value: Any = None) -> Success:
    """Wrap a delegated operation's return value."""
    if value is None:
        payload = ""
    elif isinstance(value, str):
        payload = value
    elif isinstance(value, (dict, list, tuple)):
        payload = json.dumps(value)
    else:
        payload = str(value)
    return Success(payload=payload)


def failure(exc: BaseException) -> Failure:
    """Wrap any raised error; the message falls back to the class name."""
    message = str(exc) or type(exc).__name__
    return Failure(message=message, detail=describe_exception(exc))


def describe_exception(exc: BaseException) -> str:
    lines = [_one_line(exc)]
    seen = {id(exc)}
    cause = _cause_of(exc)
    while cause is not None and id(cause) not in seen:
        seen.add(id(cause))
        lines.append(f"Caused by: {_one_line(cause)}")
        cause = _cause_of(cause)
    return "\n".join(lines)


def _one_line(exc: BaseException) -> str:
    cls = type(exc)
    name = cls.__qualname__ if cls.__module__ == "builtins" else f"{cls.__module__}.{cls.__qualname__}"
    text = str(exc)
    return f"{name}: {text}" if text else name


def _cause_of(exc: BaseException) -> BaseException | None:
    # "raise ... from None" hides the context, same as a printed traceback
    if exc.__cause__ is not None or exc.__suppress_context__:
        return exc.__cause__
    return exc.__context__
