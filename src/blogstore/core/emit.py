"""Serialize documents back to their on-disk form and write a store to a directory"""

import logging
from pathlib import Path

import yaml

from blogstore.core.models import Document, DocumentKind, thaw
from blogstore.core.store import DocumentStore


logger = logging.getLogger(__name__)


def build_frontmatter(doc: Document) -> dict:
    """Metadata block for doc: stored keys in their original order plus any required field missing."""
    fm = thaw(doc.metadata)
    fm.setdefault('title', doc.title)
    if doc.kind == DocumentKind.page:
        fm.setdefault('permalink', doc.permalink)
    return fm


def serialize_document(doc: Document) -> str:
    """Return the file text for doc: YAML metadata block, a blank line, then the body."""
    header = yaml.safe_dump(build_frontmatter(doc), default_flow_style=False, allow_unicode=True, sort_keys=False)
    return f"---\n{header}---\n\n{doc.body}"


def write_document(doc: Document, output_dir: Path) -> Path:
    """Write doc to output_dir / doc.path, mirroring the source layout. Returns the written path."""
    dest = output_dir / doc.path
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_text(serialize_document(doc), encoding='utf-8')
    logger.debug("wrote %s -> %s", doc.identifier, dest)
    return dest


def write_store(store: DocumentStore, output_dir: Path) -> list[tuple[str, Path]]:
    """Write every document in store. Returns (identifier, path) pairs, posts first in listing order."""
    docs = store.list_posts() + store.list_pages()
    return [(doc.identifier, write_document(doc, output_dir)) for doc in docs]
