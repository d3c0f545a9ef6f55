from __future__ import annotations
from pathlib import Path

# maximum unique matches per query when the caller gives no limit
DEFAULT_LIMIT: int = 25

# project root: the directory holding src/
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# dictionary shards (one <chapter>.json per first character)
DEFAULT_DATA_DIR = PROJECT_ROOT / "data"
SHARD_SUFFIX: str = ".json"
SHARD_INDENT: int = 2
ENCODING: str = "utf-8"

# matcher settings used by the dictionary demos
DEMO_SELECTOR: str = "term"
DEMO_LIMIT: int = 20
DEMO_CASE_INSENSITIVE: bool = True

# web demo
HOST: str = "127.0.0.1"
PORT: int = 8000
DEBOUNCE_MS: int = 150

# loader progress (set FASTMATCH_VERBOSE=1 to enable)
VERBOSE_ENV: str = "FASTMATCH_VERBOSE"
