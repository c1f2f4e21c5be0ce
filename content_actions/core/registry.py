"""
Action registry and metadata:
- register action functions by name
- bind a params_model (ActionParams subclass) used to validate raw inputs
- validate_spec() performs the strict input check before execution
"""
# @file purpose: Provide action registry, metadata, and spec validation.

from __future__ import annotations

import importlib
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, Type

from .action import ActionSpec
from .validators import ActionParams, validate_inputs

# standard action signature: fn(ctx: ActionContext, params) -> payload
ActionFn = Callable[..., Any]

BUILTIN_ACTION_MODULES = (
    "content_actions.actions.couchbase",
    "content_actions.actions.azure",
    "content_actions.actions.date_time",
    "content_actions.actions.lists",
)


@dataclass(frozen=True)
class ActionMeta:
    """Action metadata: name, bound params model and a one-line description."""

    name: str
    params_model: Optional[Type[ActionParams]] = None
    description: str = ""


_REGISTRY: Dict[str, ActionFn] = {}
_META: Dict[str, ActionMeta] = {}


def action(
    name: str, *, params_model: Optional[Type[ActionParams]] = None
) -> Callable[[ActionFn], ActionFn]:
    """
    Decorator registering an action function together with its params model:
        @action("list_appender", params_model=ListAppenderParams)
        def list_appender(ctx, params): ...
    """

    def deco(fn: ActionFn) -> ActionFn:
        register(name, fn, params_model=params_model)
        return fn

    return deco


def register(name: str, fn: ActionFn, *, params_model: Optional[Type[ActionParams]] = None) -> None:
    """Non-decorator registration, for dynamic wiring or tests."""
    doc = (fn.__doc__ or "").strip().splitlines()
    _REGISTRY[name] = fn
    _META[name] = ActionMeta(name=name, params_model=params_model, description=doc[0] if doc else "")


def get_action(name: str) -> ActionFn:
    try:
        return _REGISTRY[name]
    except KeyError as e:
        raise KeyError(f"Action not registered: {name}") from e


def get_meta(name: str) -> ActionMeta:
    try:
        return _META[name]
    except KeyError as e:
        raise KeyError(f"Action not registered (no metadata): {name}") from e


def list_actions() -> Dict[str, ActionMeta]:
    """Shallow copy, for listings and debugging."""
    return dict(_META)


def validate_spec(spec: ActionSpec) -> Tuple[ActionMeta, Optional[ActionParams]]:
    """
    Strict check of an ActionSpec before execution:
    1) the action must be registered (KeyError otherwise)
    2) with a params_model, inputs are validated (InputValidationError otherwise)
    3) returns (ActionMeta, params instance | None)
    """
    meta = get_meta(spec.name)

    if meta.params_model is None:
        return meta, None

    return meta, validate_inputs(meta.params_model, spec.inputs)


def load_builtin_actions() -> None:
    """Import every bundled action module; importing registers the actions. Idempotent."""
    for module in BUILTIN_ACTION_MODULES:
        importlib.import_module(module)
