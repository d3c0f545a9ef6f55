from __future__ import annotations
from collections.abc import Mapping
from typing import Any, Callable, List

from .models import SelectorConfig, SelectorSpec
from .normalize import fold

KeyFunc = Callable[[Any], str]


def identity(record: Any) -> Any:
    return record


def field_selector(name: str) -> KeyFunc:
    """Key = record[name] for mappings, record.name otherwise; "" when absent."""
    def select(record: Any) -> Any:
        if isinstance(record, Mapping):
            value = record.get(name)
        else:
            value = getattr(record, name, None)
        return "" if value is None else value
    select.__name__ = f"field_{name}"
    return select


def _base_selector(item: SelectorSpec) -> KeyFunc:
    if callable(item):
        return item
    if item:
        return field_selector(item)
    return identity


def _folding(select: KeyFunc) -> KeyFunc:
    def select_folded(record: Any) -> str:
        return fold(select(record))
    return select_folded


def resolve_selectors(selector: SelectorConfig, case_insensitive: bool = False) -> List[KeyFunc]:
    """
    Turn a selector configuration into an ordered list of key functions.

    None -> [identity]; a bare field name or callable -> one function; a
    list/tuple -> one function per element, in order. Nothing is validated
    here: a selector that yields a non-string fails when first applied.
    """
    if isinstance(selector, (list, tuple)):
        items = list(selector) or [None]
    else:
        items = [selector]
    funcs = [_base_selector(s) for s in items]
    if case_insensitive:
        funcs = [_folding(f) for f in funcs]
    return funcs
