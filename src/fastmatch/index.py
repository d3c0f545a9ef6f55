"""
Index construction for the prefix matcher.

Every configured selector is applied to every record of the snapshot, giving
(position, record, key) triples that are stably sorted by key into a
SortedIndex. In any-word mode each key is first expanded into its word
tails and every tail offset gets its own SortedIndex, so a prefix can match
the start of any word without scanning the collection.
"""

from __future__ import annotations

import bisect
import logging
from typing import Any, Iterable, Iterator, List, Sequence, Tuple

from .models import IndexEntry
from .normalize import word_tails
from .selectors import KeyFunc

log = logging.getLogger(__name__)


class SortedIndex:
    """
    Immutable list of IndexEntry ordered by key.
    Keeps a parallel list of keys so lookups can use bisect directly.
    """
    __slots__ = ("_keys", "_entries")

    def __init__(self, entries: Iterable[IndexEntry] = ()) -> None:
        # list.sort is stable: equal keys keep snapshot order
        items = sorted(entries, key=lambda e: e.key)
        self._entries: Tuple[IndexEntry, ...] = tuple(items)
        self._keys: List[str] = [e.key for e in items]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[IndexEntry]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"SortedIndex(entries={len(self._entries)})"

    @property
    def keys(self) -> Sequence[str]:
        return tuple(self._keys)

    def lower_bound(self, prefix: str) -> int:
        """First position whose key is not less than prefix."""
        return bisect.bisect_left(self._keys, prefix)

    def scan(self, prefix: str, room: int) -> List[IndexEntry]:
        """
        Entries whose key starts with prefix, in key order, at most room of them.
        The empty prefix matches every key.
        """
        out: List[IndexEntry] = []
        keys, entries = self._keys, self._entries
        i, n = self.lower_bound(prefix), len(keys)
        while i < n and len(out) < room:
            if not keys[i].startswith(prefix):
                break
            out.append(entries[i])
            i += 1
        return out


def _keyed(records: Sequence[Any], select: KeyFunc) -> List[Tuple[int, Any, str]]:
    return [(pos, rec, select(rec)) for pos, rec in enumerate(records)]


def build_plain(records: Sequence[Any], select: KeyFunc) -> SortedIndex:
    return SortedIndex(IndexEntry(pos, rec, key) for pos, rec, key in _keyed(records, select))


def build_any_word(records: Sequence[Any], select: KeyFunc) -> List[SortedIndex]:
    """
    One SortedIndex per word offset. Offset j holds, for every record with at
    least j+1 tails, an entry keyed by its j-th tail.
    """
    buckets: List[List[IndexEntry]] = []
    for pos, rec, key in _keyed(records, select):
        for j, tail in enumerate(word_tails(key)):
            if j == len(buckets):
                buckets.append([])
            buckets[j].append(IndexEntry(pos, rec, tail))
    return [SortedIndex(b) for b in buckets]


def build_index_lists(records: Sequence[Any], selectors: Sequence[KeyFunc],
                      any_word: bool = False) -> List[SortedIndex]:
    """
    Build every sorted list for a snapshot, selector-major then word offset.
    Exceptions raised by a selector propagate unchanged.
    """
    lists: List[SortedIndex] = []
    for select in selectors:
        if any_word:
            per_offset = build_any_word(records, select)
            # keep one (empty) list per selector even over zero records
            lists.extend(per_offset or [SortedIndex()])
        else:
            lists.append(build_plain(records, select))
    log.debug("built %d index list(s) over %d record(s)", len(lists), len(records))
    return lists
