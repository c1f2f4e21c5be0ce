"""
Invocation data contracts.
- ActionRequest: raw inputs as the host passes them (name -> string | None)
- ActionSpec: one invocation described as data (action name + raw inputs),
  used by the runner and the CLI scripts
"""
# @file purpose: Define action invocation contracts.

from typing import Mapping, Optional

from pydantic import BaseModel, Field

# None (or a missing key) means "not provided", which is not the same as ""
ActionRequest = Mapping[str, Optional[str]]


class ActionSpec(BaseModel):
    name: str = Field(..., description="Registered action name.")
    inputs: dict[str, Optional[str]] = Field(
        default_factory=dict, description="Raw string inputs keyed by input name."
    )
