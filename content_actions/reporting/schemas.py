"""
Reporting data models for script runs.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class StepReport(BaseModel):
    """One executed action and its host outputs."""

    index: int
    name: str
    ok: bool
    return_code: str
    return_result: str = ""
    exception: Optional[str] = None
    outputs: Dict[str, str] = Field(default_factory=dict)


class RunReport(BaseModel):
    """A collection of step outcomes from one script."""

    script: str
    total: int
    success: int
    failure: int
    items: List[StepReport]
