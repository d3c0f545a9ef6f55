# src/fastmatch/models.py
"""
Data models for the prefix matcher.

This module defines small, focused data containers:

- MatcherOptions: the configuration a FastMatcher was built with.
- IndexEntry: one (position, record, key) triple inside a sorted index list.
- Definition / Entry: the dictionary records served by the demos.

These classes do not contain business logic; building, searching and
serializing live in index.py, search.py and loader.py respectively.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence, Tuple, Union

from .config import DEFAULT_LIMIT

# A selector is configured as None (identity), a field name, or a callable.
SelectorSpec = Union[None, str, Callable[[Any], str]]
SelectorConfig = Union[SelectorSpec, Sequence[SelectorSpec]]


@dataclass(frozen=True, slots=True)
class MatcherOptions:
    """
    Options recognized by FastMatcher.

    Attributes
    ----------
    selector : SelectorConfig
        How to extract the comparison key from a record. None means the
        record itself; a str names a field (mapping key or attribute); a
        callable is applied as is. A list/tuple configures several keys.
    case_insensitive : bool
        Lowercase every comparison key and every query prefix.
    any_word : bool
        Also match the prefix against every word-aligned tail of a key.
    preserve_order : bool
        Return matches in input order instead of key order.
    limit : int
        Maximum number of unique records returned per query.
    """
    selector: SelectorConfig = None
    case_insensitive: bool = False
    any_word: bool = False
    preserve_order: bool = False
    limit: int = DEFAULT_LIMIT


@dataclass(frozen=True, slots=True)
class IndexEntry:
    """
    One entry of a sorted index list.

    Attributes
    ----------
    position : int
        Index of the record in the matcher's snapshot. Two entries with the
        same position are the same logical match (any-word mode and multiple
        selectors produce several entries per record).
    record : Any
        The record itself, never inspected except through selectors.
    key : str
        The comparison key, already case-normalized.
    """
    position: int
    record: Any
    key: str


@dataclass(frozen=True, slots=True)
class Definition:
    """One sense of a dictionary term: part of speech and gloss."""
    pos: str
    gloss: str


@dataclass(frozen=True, slots=True)
class Entry:
    """A dictionary record: a term plus its definitions, in source order."""
    term: str
    definitions: Tuple[Definition, ...] = field(default_factory=tuple)

    @property
    def first_gloss(self) -> Optional[str]:
        return self.definitions[0].gloss if self.definitions else None
