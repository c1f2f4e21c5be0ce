# content_actions/core/controller/runner.py
"""
Invocation boundary and a minimal sequential runner for ActionSpec[].

execute() is the single place where an invocation moves through
Validating -> Executing -> Succeeded | Failed. It never raises: validation
errors, delegated failures and unexpected errors all come back as a Failure.

Runner.run() executes a list of specs one after another and returns
per-step outcomes for CLI rendering and reporting. No retries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError

from .. import registry
from ..action import ActionRequest, ActionSpec
from ..context import ActionContext
from ..errors import InputValidationError
from ..result import ActionResult, failure, success
from ..validators import redact

logger = logging.getLogger(__name__)


def execute(name: str, inputs: ActionRequest, ctx: Optional[ActionContext] = None) -> ActionResult:
    """Run one action end to end and return its result; never raises."""
    # validating
    try:
        spec = _to_spec(name, inputs)
        _meta, params = registry.validate_spec(spec)
        fn = registry.get_action(name)
    except Exception as e:  # noqa: BLE001
        logger.debug("action %s rejected inputs %s: %s", name, redact(inputs), e)
        return failure(e)

    # executing
    try:
        value = fn(ctx or ActionContext(), params)
    except Exception as e:  # noqa: BLE001
        logger.debug("action %s failed: %s", name, e)
        return failure(e)
    return success(value)


def _to_spec(name: str, inputs: ActionRequest) -> ActionSpec:
    try:
        return ActionSpec(name=name, inputs=dict(inputs))
    except ValidationError as e:
        # pydantic echoes input_value; raw inputs may be secrets
        field = e.errors(include_url=False)[0]["loc"][-1]
        raise InputValidationError(str(field), f"The {field} input must be a string.") from None


@dataclass
class StepOutcome:
    """UI-friendly outcome used by CLI and reporters."""

    index: int
    name: str
    ok: bool
    return_code: str
    detail: str = "-"
    outputs: dict[str, str] | None = None


class Runner:
    def __init__(self, *, ctx: Optional[ActionContext] = None) -> None:
        self.ctx = ctx or ActionContext()

    def run(self, specs: list[ActionSpec]) -> list[StepOutcome]:
        outcomes: list[StepOutcome] = []

        for i, spec in enumerate(specs, start=1):
            res = execute(spec.name, spec.inputs, self.ctx)
            outputs = res.to_outputs()

            text = res.payload if res.ok else res.message
            detail = (text[:120] + "…") if len(text) > 120 else (text or "-")

            outcomes.append(
                StepOutcome(
                    index=i,
                    name=spec.name,
                    ok=res.ok,
                    return_code=res.code,
                    detail=detail,
                    outputs=outputs,
                )
            )

        return outcomes
