"""
Collaborators handed to every action: the HTTP client and a clock.
"""
# @file purpose: Define the per-invocation action context.

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

from ..io.http_client import HttpClient
from ..io.httpx_client import HttpxClient


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ActionContext:
    http: HttpClient = field(default_factory=HttpxClient)
    clock: Callable[[], datetime] = utc_now
