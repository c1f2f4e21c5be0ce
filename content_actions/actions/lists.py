"""
Delimited list actions: a list is a single string split on a delimiter.
Elements are kept verbatim (no trimming); the delimiter is required and may be
whitespace.
"""
# @file purpose: Implement and register delimited-list actions.

from __future__ import annotations

from typing import Optional

from pydantic import Field

from ..core.context import ActionContext
from ..core.errors import InputValidationError
from ..core.registry import action
from ..core.validators import ActionParams, Flag, IntStr, RequiredStr


class ListInputs(ActionParams):
    list_: RequiredStr = Field(alias="list")
    delimiter: RequiredStr

    def items(self) -> list[str]:
        return self.list_.split(self.delimiter)


class ListElementParams(ActionParams):
    """list may be empty: the element then becomes the whole list."""

    list_: Optional[str] = Field(default=None, alias="list")
    element: RequiredStr
    delimiter: RequiredStr


class ListIndexParams(ListInputs):
    index: IntStr


class ListSortParams(ListInputs):
    reverse: Flag = False


def _position(items: list[str], index: int) -> int:
    """Negative indexes count from the end."""
    pos = index + len(items) if index < 0 else index
    if not 0 <= pos < len(items):
        raise InputValidationError(
            "index", f"The index {index} is out of range for a list of {len(items)} elements."
        )
    return pos


def _is_int(text: str) -> bool:
    try:
        int(text)
    except ValueError:
        return False
    return True


@action("list_appender", params_model=ListElementParams)
def list_appender(ctx: ActionContext, params: ListElementParams) -> str:
    """Append an element at the end of a list."""
    if not params.list_:
        return params.element
    return params.list_ + params.delimiter + params.element


@action("list_prepender", params_model=ListElementParams)
def list_prepender(ctx: ActionContext, params: ListElementParams) -> str:
    """Insert an element at the beginning of a list."""
    if not params.list_:
        return params.element
    return params.element + params.delimiter + params.list_


@action("list_size", params_model=ListInputs)
def list_size(ctx: ActionContext, params: ListInputs) -> str:
    """Count the elements of a list."""
    return str(len(params.items()))


@action("list_item_grabber", params_model=ListIndexParams)
def list_item_grabber(ctx: ActionContext, params: ListIndexParams) -> str:
    """Return the element at an index."""
    items = params.items()
    return items[_position(items, params.index)]


@action("list_remover", params_model=ListIndexParams)
def list_remover(ctx: ActionContext, params: ListIndexParams) -> str:
    """Remove the element at an index and return the remaining list."""
    items = params.items()
    del items[_position(items, params.index)]
    return params.delimiter.join(items)


@action("list_sort", params_model=ListSortParams)
def list_sort(ctx: ActionContext, params: ListSortParams) -> str:
    """Sort a list; numerically when every element is an integer."""
    items = params.items()
    if all(_is_int(item) for item in items):
        items.sort(key=int, reverse=params.reverse)
    else:
        items.sort(reverse=params.reverse)
    return params.delimiter.join(items)
