"""
HTTP client protocol (abstraction).

This Protocol defines the minimal HTTP surface that action implementations
rely on. Actions receive it through ActionContext, so tests and alternative
transports can be plugged in without changing actions.

Notes:
- `config` is the validated HttpClientConfig; the client owns everything about
  turning it into a connection (auth, proxy, TLS, timeouts, cookies).
- Transport failures surface as DelegatedOperationError. Non-2xx responses are
  returned as-is; deciding what a status code means belongs to the action.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol

from ..core.config import HttpClientConfig


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    text: str = ""
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        return json.loads(self.text)


class HttpClient(Protocol):
    def request(
        self,
        config: HttpClientConfig,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        data: Mapping[str, str] | None = None,
    ) -> HttpResponse: ...
