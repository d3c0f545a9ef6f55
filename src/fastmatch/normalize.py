from __future__ import annotations
import re
from typing import List

_WS = re.compile(r"\s+")

def fold(text: str) -> str:
    """Case normalization shared by keys and query prefixes."""
    return text.lower()

def word_tails(key: str) -> List[str]:
    """
    Return the word-aligned tails of a key, longest first.
    Rules:
      * leading whitespace is dropped; tail 0 is the stripped key
      * every whitespace run starts a new tail right after the run
      * a trailing run yields an empty tail (it only matches the empty prefix)
    Example: "of the night" -> ["of the night", "the night", "night"]
    """
    s = key.lstrip()
    tails = [s]
    for m in _WS.finditer(s):
        tails.append(s[m.end():])
    return tails
