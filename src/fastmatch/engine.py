# fastmatch/engine.py
from __future__ import annotations

import logging
import time
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from . import config as CFG
from .index import SortedIndex, build_index_lists
from .models import MatcherOptions, SelectorConfig
from .normalize import fold
from .search import find_matches
from .selectors import resolve_selectors

log = logging.getLogger(__name__)


class FastMatcher:
    """
    Prefix matcher over a fixed snapshot of records.

    Construction resolves the selectors, builds the sorted index lists and
    then never changes them:
      * get_matches(prefix): ordered, deduplicated records whose key (or,
        with any_word, one of its word tails) starts with prefix

    Results are a new list per call unless a `matches` list is supplied, in
    which case that list is overwritten in place on every query and
    returned; its contents are then valid only until the next call.
    """

    # ------------- lifecycle -------------

    def __init__(
        self,
        records: Iterable[Any],
        *,
        selector: SelectorConfig = None,
        case_insensitive: bool = False,
        any_word: bool = False,
        preserve_order: bool = False,
        limit: Optional[int] = CFG.DEFAULT_LIMIT,
        matches: Optional[List[Any]] = None,
    ) -> None:
        # falsy limit falls back to the default, like an unset option
        limit = int(limit or CFG.DEFAULT_LIMIT)
        if limit < 1:
            raise ValueError(f"limit must be a positive integer, got {limit}")
        if isinstance(selector, list):
            selector = tuple(selector)

        self.options = MatcherOptions(
            selector=selector,
            case_insensitive=bool(case_insensitive),
            any_word=bool(any_word),
            preserve_order=bool(preserve_order),
            limit=limit,
        )
        self.matches = matches
        self._records: Tuple[Any, ...] = tuple(records)  # caller keeps the original

        t0 = time.perf_counter()
        self._selectors = resolve_selectors(selector, case_insensitive=self.options.case_insensitive)
        self._lists: List[SortedIndex] = build_index_lists(
            self._records, self._selectors, any_word=self.options.any_word
        )
        log.info(
            "FastMatcher built: records=%d lists=%d entries=%d in %.3fs",
            len(self._records), len(self._lists),
            sum(len(x) for x in self._lists), time.perf_counter() - t0,
        )

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"FastMatcher(records={len(self._records)}, lists={len(self._lists)}, options={self.options!r})"

    @property
    def records(self) -> Tuple[Any, ...]:
        return self._records

    @property
    def index_lists(self) -> Sequence[SortedIndex]:
        return tuple(self._lists)

    # ------------- query -------------

    # /* ~~~ Return the records matching a prefix, at most `limit` of them ~~~ */
    def get_matches(self, prefix: str) -> List[Any]:
        opts = self.options
        if opts.case_insensitive:
            prefix = fold(prefix)

        found = find_matches(self._lists, prefix, opts.limit, preserve_order=opts.preserve_order)
        log.debug("get_matches(%r): %d match(es)", prefix, len(found))

        if self.matches is None:
            return found
        self.matches[:] = found
        return self.matches
