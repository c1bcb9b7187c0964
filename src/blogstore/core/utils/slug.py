"""Slug generation for post identifiers and page names"""

import re
import unicodedata


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe ASCII slug."""
    text = unicodedata.normalize('NFKD', text).encode('ascii', 'ignore').decode('ascii')
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


def slug_from_permalink(permalink: str) -> str:
    """Last non-empty path segment of a permalink, without extension ('/about/' -> 'about')."""
    segments = [s for s in permalink.split('/') if s]
    if not segments:
        return 'index'
    return slugify(segments[-1].rsplit('.', 1)[0])
