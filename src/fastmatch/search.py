from __future__ import annotations
from typing import Any, List, Sequence

from .index import SortedIndex
from .models import IndexEntry


def collect(lists: Sequence[SortedIndex], prefix: str, limit: int) -> List[IndexEntry]:
    """
    /* ~~~ Scan every list in order with an adaptive cap.
       Lists may repeat records already found (dedup happens afterwards),
       so the raw cap grows by the number of entries each list contributed:
       every list gets room for `limit` entries of its own. ~~~ */
    """
    items: List[IndexEntry] = []
    for idx in lists:
        if len(items) == limit:
            break
        found = idx.scan(prefix, limit - len(items))
        items.extend(found)
        limit += len(found)
    return items


def merge(items: List[IndexEntry], limit: int, preserve_order: bool = False) -> List[Any]:
    """
    Records of items, first occurrence per position wins, at most limit.
    With preserve_order the survivors come back in snapshot order.
    """
    if preserve_order:
        items = sorted(items, key=lambda e: e.position)
    out: List[Any] = []
    seen = set()
    for e in items:
        if len(out) == limit:
            break
        if e.position in seen:
            continue
        seen.add(e.position)
        out.append(e.record)
    return out


def find_matches(lists: Sequence[SortedIndex], prefix: str, limit: int,
                 preserve_order: bool = False) -> List[Any]:
    """Full query pipeline over already-normalized input."""
    return merge(collect(lists, prefix, limit), limit, preserve_order=preserve_order)
