"""
Fast Prefix Matcher Module

This module answers prefix (autocomplete) queries over a fixed collection of
records. The collection is snapshotted and indexed once; every query is then
a binary search per sorted index list plus a short forward scan, never a
rescan of the whole collection.

The module is designed with a clean separation of concerns:
- Selector resolution (which text of a record is matched)
- Index construction (sorted key lists, optional any-word tails)
- Lookup and merging (adaptive limit, dedup, optional input order)
- Dictionary shards for the demos

Main Classes and Functions:
    FastMatcher(records, **options): Build a matcher over records
    FastMatcher.get_matches(prefix): Matching records, at most `limit`
    load_shards(data_dir): Load dictionary entries for the demos
    load_shard_archive(zip_path): The same, read from a ZIP of shards

Example Usage:
    from fastmatch import FastMatcher

    matcher = FastMatcher(["aa", "ab", "ba", "bb"])
    matcher.get_matches("a")            # ['aa', 'ab']

    people = [{"first": "Ada", "last": "Lovelace"}, {"first": "Alan", "last": "Turing"}]
    by_name = FastMatcher(people, selector=["first", "last"], case_insensitive=True)
    by_name.get_matches("tu")           # [{'first': 'Alan', 'last': 'Turing'}]

Version: 1.0.0
"""

# src/fastmatch/__init__.py
from .engine import FastMatcher
from .loader import load_shards, load_shard_archive, write_shards, read_wordlist, build_matcher
from .models import MatcherOptions, IndexEntry, Entry, Definition

__version__ = "1.0.0"
__all__ = [
    "FastMatcher",
    "MatcherOptions",
    "IndexEntry",
    "Entry",
    "Definition",
    "load_shards",
    "load_shard_archive",
    "write_shards",
    "read_wordlist",
    "build_matcher",
]
