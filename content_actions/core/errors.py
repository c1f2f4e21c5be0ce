"""
Project-level exception types; one taxonomy shared by every action.
- ContentActionError: base of all custom errors
- InputValidationError: missing or malformed input, raised before any external call
- DelegatedOperationError: failure of the external call (network, non-2xx, bad payload)
Anything else raised inside an action counts as an internal error; the runner
turns all of them into a Failure result.
"""
# @file purpose: Define error taxonomy for content-actions.

from typing import Any


class ContentActionError(Exception):
    """Base class for all custom errors in content-actions."""


class InputValidationError(ContentActionError):
    """Raised when an input is absent, empty or malformed."""

    def __init__(self, input_name: str | None, message: str) -> None:
        super().__init__(message)
        self.input_name: str | None = input_name
        self.message: str = message


class DelegatedOperationError(ContentActionError):
    """
    Raised when the delegated operation (HTTP call or local computation) fails.
    Carries enough context for the exception output to be diagnosable on its own.
    """

    def __init__(
        self,
        action: str,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.action: str = action
        self.message: str = message
        self.url: str | None = url
        self.status_code: int | None = status_code
        self.details: dict[str, Any] = details or {}
        self.cause: BaseException | None = cause

    def __str__(self) -> str:
        parts = [f"[{self.action}] {self.message}"]
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        if self.url:
            parts.append(f"url={self.url}")
        if self.details:
            kv = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            parts.append(f"details={{ {kv} }}")
        return " | ".join(parts)
