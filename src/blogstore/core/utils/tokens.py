"""Shared markdown-it parser factory"""

from functools import lru_cache

from markdown_it import MarkdownIt


@lru_cache(maxsize=None)
def make_parser(preset: str = "gfm-like") -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})
