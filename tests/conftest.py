"""Shared fixtures: registered built-in actions and a recording HTTP client."""
# @file purpose: Provide pytest fixtures for action tests.

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Mapping

import pytest

from content_actions.core import registry
from content_actions.core.config import HttpClientConfig
from content_actions.core.context import ActionContext
from content_actions.io.http_client import HttpResponse


class RecordingHttp:
    """HttpClient double: records every call and answers with a canned response."""

    def __init__(self, response: HttpResponse) -> None:
        self.response = response
        self.calls: list[dict[str, Any]] = []

    def request(
        self,
        config: HttpClientConfig,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        data: Mapping[str, str] | None = None,
    ) -> HttpResponse:
        self.calls.append(
            {"config": config, "method": method, "url": url, "headers": headers, "data": data}
        )
        return self.response


@pytest.fixture(scope="session", autouse=True)
def builtin_actions() -> None:
    registry.load_builtin_actions()


@pytest.fixture
def recording_http() -> Callable[..., RecordingHttp]:
    def make(status_code: int = 200, text: str = "") -> RecordingHttp:
        return RecordingHttp(HttpResponse(status_code=status_code, text=text))

    return make


@pytest.fixture
def fixed_clock_ctx() -> ActionContext:
    return ActionContext(clock=lambda: datetime(2020, 1, 1, tzinfo=timezone.utc))
