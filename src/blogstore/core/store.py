"""Immutable in-memory document store: whole-store validated load and read queries"""

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, Optional

from blogstore.config import Settings
from blogstore.core.errors import ValidationError, ValidationErrorKind
from blogstore.core.models import Document, DocumentKind
from blogstore.core.parse import discover_files, parse_file
from blogstore.core.validate import build_document


logger = logging.getLogger(__name__)


class DocumentStore:
    """Read-only view over a validated set of documents.

    Construct with load(); a store never holds a document that failed
    validation and never changes after construction.

    Posts and pages share one identifier namespace: a page's identifier is
    its permalink, and it must not equal any post identifier either.
    """

    def __init__(self, documents: Iterable[Document] = ()):
        index: dict[str, Document] = {}
        for doc in documents:
            if doc.identifier in index:
                raise ValidationError(
                    ValidationErrorKind.duplicate_identifier,
                    doc.path,
                    f"{doc.identifier!r} already defined by {index[doc.identifier].path}",
                )
            index[doc.identifier] = doc
        self._index = MappingProxyType(index)
        self._documents = tuple(index.values())

    @property
    def documents(self) -> tuple[Document, ...]:
        return self._documents

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._index

    def __repr__(self) -> str:
        posts = sum(1 for d in self._documents if d.kind == DocumentKind.post)
        return f"DocumentStore(posts={posts}, pages={len(self._documents) - posts})"

    def list_posts(self) -> list[Document]:
        """Posts, most recent first; equal dates ordered by identifier ascending."""
        posts = sorted(
            (d for d in self._documents if d.kind == DocumentKind.post),
            key=lambda d: d.identifier,
        )
        # stable sort keeps identifier order within a date
        return sorted(posts, key=lambda d: d.publication_date, reverse=True)

    def list_pages(self) -> list[Document]:
        """Pages in no meaningful order (sorted by permalink for reproducible output)."""
        return sorted(
            (d for d in self._documents if d.kind == DocumentKind.page),
            key=lambda d: d.permalink,
        )

    def find_by_identifier(self, identifier: str) -> Optional[Document]:
        return self._index.get(identifier)


def _content_root(source: Path, posts_dir: str) -> Path:
    """Site directory above source: the parent of the outermost posts dir on its path, if any.

    Loading a posts directory, or a file anywhere below one, keeps the posts
    dir in every relative path so those documents are still posts.
    """
    base = source if source.is_dir() else source.parent
    root = base
    for ancestor in (base, *base.parents):
        if ancestor.name == posts_dir:
            root = ancestor.parent
    return root


def load(source: str | Path, settings: Settings = None) -> DocumentStore:
    """Parse and validate every document under source; fail on the first violation.

    source may be a content directory or a single markdown file. Files are
    processed in sorted path order, so the reported violation is deterministic.
    """
    settings = settings or Settings()
    source = Path(source)
    if not source.exists():
        raise FileNotFoundError(f"Content source not found: {source}")
    root = _content_root(source, settings.posts_dir)

    files = discover_files(source, settings.posts_dir, settings.markdown_extensions, settings.exclude, root)
    # lazy so a duplicate is reported before any later file is parsed
    documents = (
        build_document(parse_file(path, root, settings.parser_config), settings.posts_dir)
        for path in files
    )
    try:
        store = DocumentStore(documents)
    except ValidationError as e:
        logger.error("load aborted: %s", e)
        raise
    logger.info("loaded %r from %s", store, source)
    return store
