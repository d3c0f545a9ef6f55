from __future__ import annotations
import argparse, json, logging, os, sys
from typing import List

from . import config as CFG
from .loader import build_matcher, entry_to_json, load_shard_archive, load_shards, read_wordlist, write_shards
from .models import Entry

def _supports_color() -> bool:
    return sys.stdout.isatty() and os.environ.get("NO_COLOR", "") == ""

CSI = "\033["
def _c(text: str, code: str) -> str:
    if not _supports_color(): return text
    return f"{CSI}{code}m{text}{CSI}0m"

def _print_table(rows: List[Entry]) -> None:
    if not rows:
        print(_c("(no matches)", "2;37")); return
    print(_c("#   Term                         Definition", "1;37"))
    for i, e in enumerate(rows, start=1):
        gloss = e.first_gloss or ""
        extra = f" (+{len(e.definitions) - 1})" if len(e.definitions) > 1 else ""
        print(f"{i:<3} {e.term:<28} {gloss}{extra}")

def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Prefix matcher CLI over dictionary shards")
    p.add_argument("--data", default=None, help="Folder (or ZIP) of <chapter>.json shards")
    p.add_argument("--wordlist", default=None, help="Tab-separated word list (term, pos, gloss)")
    p.add_argument("--write-shards", metavar="DIR", default=None, help="Write loaded entries as shards to DIR")
    p.add_argument("--selector", action="append", default=None,
                   help=f"Field to match (repeatable, default: {CFG.DEMO_SELECTOR})")
    p.add_argument("--case-sensitive", action="store_true", help="Do not lowercase keys and queries")
    p.add_argument("--any-word", action="store_true", help="Also match the start of any word")
    p.add_argument("--preserve-order", action="store_true", help="Keep input order in results")
    p.add_argument("-k", "--limit", type=int, default=CFG.DEMO_LIMIT, help="Maximum matches")
    p.add_argument("--q", default=None, help="Single query to run once")
    p.add_argument("--repl", action="store_true", help="Interactive loop after loading")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args(argv)

    if not args.data and not args.wordlist:
        p.error("one of --data or --wordlist is required")
    if args.limit < 1:
        p.error("--limit must be positive")

    if args.verbose:
        logging.basicConfig(level=logging.INFO)
        os.environ[CFG.VERBOSE_ENV] = "1"

    entries: List[Entry] = []
    if args.data:
        load = load_shard_archive if os.path.isfile(args.data) else load_shards
        entries.extend(load(args.data))
    if args.wordlist:
        entries.extend(read_wordlist(args.wordlist))

    if args.write_shards:
        counts = write_shards(entries, args.write_shards)
        print(f"Wrote {sum(counts.values()):,} entries in {len(counts)} shard(s) to {args.write_shards}")

    selector = args.selector if args.selector else CFG.DEMO_SELECTOR
    matcher = build_matcher(
        entries,
        selector=selector,
        case_insensitive=not args.case_sensitive,
        any_word=args.any_word,
        preserve_order=args.preserve_order,
        limit=args.limit,
    )

    def run_query(q: str) -> None:
        rows = matcher.get_matches(q)
        if args.json:
            print(json.dumps([entry_to_json(r) for r in rows], ensure_ascii=False, indent=2))
        else:
            _print_table(rows)

    if args.q is not None:
        run_query(args.q)

    if args.repl:
        print(f"Loaded {len(matcher):,} entries. Type a prefix (empty line to exit).")
        while True:
            try:
                q = input("> ")
            except (EOFError, KeyboardInterrupt):
                print(); break
            if not q:
                break
            run_query(q)

    return 0

if __name__ == "__main__":
    raise SystemExit(main())
