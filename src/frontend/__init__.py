"""Flask demo: a search box wired to FastMatcher over dictionary shards."""
from .web import app, main

__all__ = ["app", "main"]
