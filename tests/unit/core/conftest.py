"""Shared fixtures for core unit tests"""

import pytest

from blogstore.core.parse import parse_text
from blogstore.core.utils.tokens import make_parser


@pytest.fixture(name="parser")
def parser_fixture():
    return make_parser("gfm-like")


@pytest.fixture(name="parse")
def parse_fixture():
    """Parse text as if it were the file at rel_path under the content root."""
    def _parse(text: str, rel_path: str = "_posts/2016-10-23-post.md"):
        return parse_text(text, rel_path)
    return _parse
