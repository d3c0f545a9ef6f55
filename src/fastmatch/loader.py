"""
Dictionary Data Loading Module

This module supplies the records the demos feed into FastMatcher: a
dictionary of terms with their definitions, stored as one JSON "shard" per
chapter (the first character of the term), e.g. data/a.json, data/b.json.

Key Functions:
    read_wordlist(path): Parse a local tab-separated word list into entries
    chapter_of(term): Shard chapter of a term (first character, or "_")
    write_shards(entries, data_dir): Group entries by chapter and write shards
    load_shards(data_dir): Read every shard back, in file-name order
    load_shard_archive(zip_path): Read shards straight out of a ZIP archive
    build_matcher(entries): FastMatcher configured the way the demos use it

Shard format (a JSON list, pretty-printed):
    [{"term": "abandon", "definitions": [{"pos": "v", "def": "..."}]}]

Word list format (one definition per line, '#' starts a comment):
    term<TAB>pos<TAB>gloss
    term
"""

# src/fastmatch/loader.py
from __future__ import annotations

import json
import logging
import os
import zipfile
from collections import defaultdict
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

from . import config as CFG
from .engine import FastMatcher
from .models import Definition, Entry

log = logging.getLogger(__name__)

# Chapter used for terms whose first character cannot name a file
FALLBACK_CHAPTER = "_"
_UNSAFE_CHAPTERS = {os.sep, os.altsep, "\0", "."} - {None}

PathLike = Union[str, Path]


class ShardFormatError(ValueError):
    """A shard file does not hold a list of {"term": str, ...} objects."""


def entry_to_json(entry: Entry) -> Dict[str, Any]:
    """
    Convert an Entry to the shard/API object layout.

    Example:
        >>> entry_to_json(Entry("ox", (Definition("n", "cattle"),)))
        {'term': 'ox', 'definitions': [{'pos': 'n', 'def': 'cattle'}]}
    """
    return {
        "term": entry.term,
        "definitions": [{"pos": d.pos, "def": d.gloss} for d in entry.definitions],
    }


def entry_from_json(obj: Any, source: str = "<json>") -> Entry:
    if not isinstance(obj, dict) or not isinstance(obj.get("term"), str):
        raise ShardFormatError(f"{source}: expected an object with a string 'term', got {obj!r}")
    defs = []
    for d in obj.get("definitions") or []:
        if not isinstance(d, dict):
            raise ShardFormatError(f"{source}: bad definition for {obj['term']!r}: {d!r}")
        defs.append(Definition(pos=str(d.get("pos", "")), gloss=str(d.get("def", ""))))
    return Entry(term=obj["term"], definitions=tuple(defs))


def read_wordlist(path: PathLike) -> List[Entry]:
    """
    Parse a local word list into entries.

    Each non-blank, non-comment line is either a bare term or
    ``term<TAB>pos<TAB>gloss``. Definitions of a repeated term are merged in
    file order and terms keep their first-seen order.

    Args:
        path: Word list file (UTF-8)

    Returns:
        List[Entry]: One entry per distinct term

    Example:
        >>> read_wordlist("words.tsv")[0]
        Entry(term='abandon', definitions=(Definition(pos='v', gloss='leave behind'),))
    """
    order: List[str] = []
    defs: Dict[str, List[Definition]] = {}
    with open(path, "r", encoding=CFG.ENCODING) as f:
        for raw in f:
            line = raw.rstrip("\r\n")
            if not line.strip() or line.lstrip().startswith("#"):
                continue
            parts = line.split("\t")
            term = parts[0].strip()
            if not term:
                continue
            if term not in defs:
                order.append(term)
                defs[term] = []
            if len(parts) >= 3:
                defs[term].append(Definition(pos=parts[1].strip(), gloss="\t".join(parts[2:]).strip()))
            elif len(parts) == 2 and parts[1].strip():
                defs[term].append(Definition(pos="", gloss=parts[1].strip()))
    log.info("Read %d term(s) from %s", len(order), path)
    return [Entry(term=t, definitions=tuple(defs[t])) for t in order]


def _verbose() -> bool:
    # Checked on every call; the CLI sets it after this module is imported
    return os.environ.get(CFG.VERBOSE_ENV) == "1"


def chapter_of(term: str) -> str:
    """
    Shard chapter for a term: its first character, or FALLBACK_CHAPTER when
    that character is a path separator, a dot, NUL or otherwise unprintable.

    Example:
        >>> chapter_of("apple"), chapter_of("/usr"), chapter_of(".bashrc")
        ('a', '_', '_')
    """
    ch = term[0]
    if ch in _UNSAFE_CHAPTERS or not ch.isprintable():
        return FALLBACK_CHAPTER
    return ch


def write_shards(entries: Iterable[Entry], data_dir: PathLike) -> Dict[str, int]:
    """
    Write entries as per-chapter JSON shards.

    The chapter of an entry is chapter_of(term); entries keep their relative
    order inside a shard. Existing shards for the same chapters are replaced.
    Every shard is written directly inside data_dir.

    Returns:
        Dict[str, int]: chapter -> number of entries written

    Raises:
        ValueError: a shard path would fall outside data_dir
    """
    chapters: Dict[str, List[Entry]] = defaultdict(list)
    for e in entries:
        if not e.term:
            continue
        chapters[chapter_of(e.term)].append(e)

    out_dir = Path(data_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    root = out_dir.resolve()
    verbose = _verbose()
    counts: Dict[str, int] = {}
    for chapter, items in sorted(chapters.items()):
        path = out_dir / f"{chapter}{CFG.SHARD_SUFFIX}"
        if path.resolve().parent != root:
            raise ValueError(f"shard {path.name!r} escapes {out_dir}")
        tmp = path.with_name(path.name + ".tmp")
        data = json.dumps([entry_to_json(e) for e in items], ensure_ascii=False, indent=CFG.SHARD_INDENT)
        tmp.write_text(data, encoding=CFG.ENCODING)
        os.replace(tmp, path)
        counts[chapter] = len(items)
        if verbose:
            print(f"[shard] {path.name}: {len(items):,} entries")
    log.info("Wrote %d shard(s) to %s", len(counts), out_dir)
    return counts


def _parse_shard(text: str, source: str) -> List[Entry]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ShardFormatError(f"{source}: invalid JSON ({exc})") from exc
    if not isinstance(data, list):
        raise ShardFormatError(f"{source}: expected a list of entries")
    return [entry_from_json(obj, source=source) for obj in data]


def load_shards(data_dir: PathLike) -> List[Entry]:
    """
    Load every shard in data_dir, in sorted file-name order.

    Raises:
        FileNotFoundError: data_dir does not exist
        ShardFormatError: a shard is not a JSON list of entry objects
    """
    root = Path(data_dir)
    if not root.is_dir():
        raise FileNotFoundError(f"data directory not found: {root}")

    verbose = _verbose()
    entries: List[Entry] = []
    shards = sorted(p for p in root.glob(f"*{CFG.SHARD_SUFFIX}") if p.is_file())
    for path in shards:
        entries.extend(_parse_shard(path.read_text(encoding=CFG.ENCODING), path.name))
        if verbose:
            print(f"[loaded] {path.name}: total entries={len(entries):,}")

    log.info("Loaded %d entries from %d shard(s) in %s", len(entries), len(shards), root)
    return entries


def load_shard_archive(zip_path: PathLike) -> List[Entry]:
    """
    Load shards from a ZIP archive without extracting it.

    Members ending in the shard suffix are read in sorted base-name order,
    wherever they sit inside the archive (a zipped data/ folder works).
    Directories and hidden files (leading '.') are ignored.

    Raises:
        FileNotFoundError: zip_path does not exist
        zipfile.BadZipFile: zip_path is not a ZIP archive
        ShardFormatError: a shard is not a JSON list of entry objects
    """
    path = Path(zip_path)
    if not path.is_file():
        raise FileNotFoundError(f"archive not found: {path}")

    verbose = _verbose()
    entries: List[Entry] = []
    with zipfile.ZipFile(path) as zf:
        members = []
        for info in zf.infolist():
            name = info.filename.replace("\\", "/").rsplit("/", 1)[-1]
            if info.is_dir() or not name or name.startswith("."):
                continue
            if name.endswith(CFG.SHARD_SUFFIX):
                members.append((name, info))
        members.sort(key=lambda m: (m[0], m[1].filename))
        for name, info in members:
            text = zf.read(info).decode(CFG.ENCODING)
            entries.extend(_parse_shard(text, f"{path.name}:{info.filename}"))
            if verbose:
                print(f"[loaded] {path.name}:{name}: total entries={len(entries):,}")

    log.info("Loaded %d entries from %d shard(s) in %s", len(entries), len(members), path)
    return entries


def build_matcher(entries: Iterable[Entry], **overrides: Any) -> FastMatcher:
    """FastMatcher over dictionary entries, configured like the demos."""
    opts: Dict[str, Any] = {
        "selector": CFG.DEMO_SELECTOR,
        "case_insensitive": CFG.DEMO_CASE_INSENSITIVE,
        "limit": CFG.DEMO_LIMIT,
    }
    opts.update(overrides)
    return FastMatcher(entries, **opts)
