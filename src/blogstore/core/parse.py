"""File discovery, front matter extraction, and markdown-it tokenization"""

import logging
import re
from pathlib import Path
from typing import Any, Iterable

import yaml

from blogstore.core.errors import ValidationError, ValidationErrorKind
from blogstore.core.models import ParsedDoc
from blogstore.core.utils.tokens import make_parser


logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r'\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)', re.DOTALL | re.MULTILINE)
OPENING_RE = re.compile(r'\A---[ \t]*\r?\n')
MD_EXTENSIONS = ('.md', '.markdown')


def split_frontmatter(text: str, ref: str = '<string>') -> tuple[dict[str, Any], str, bool]:
    """Return (frontmatter_dict, body, has_frontmatter) with the YAML header removed.

    Leading blank lines of the body are dropped; the separator line is not content.
    """
    m = FRONTMATTER_RE.match(text)
    if not m:
        if OPENING_RE.match(text):
            raise ValidationError(ValidationErrorKind.invalid_metadata, ref, "unterminated metadata block")
        return {}, text, False
    try:
        fm = yaml.safe_load(m.group(1)) or {}
    except yaml.YAMLError as e:
        raise ValidationError(ValidationErrorKind.invalid_metadata, ref, f"invalid YAML: {e}") from e
    if not isinstance(fm, dict):
        raise ValidationError(
            ValidationErrorKind.invalid_metadata, ref, f"expected a mapping, got {type(fm).__name__}"
        )
    return fm, text[m.end():].lstrip('\r\n'), True


def has_frontmatter(path: Path) -> bool:
    """True if the file opens with a '---' line (Jekyll only processes such files as pages)."""
    with path.open(encoding='utf-8-sig') as f:
        return OPENING_RE.match(f.readline()) is not None


def _is_ignored(rel: Path, posts_dir: str, exclude: Iterable[str]) -> bool:
    """Skip excluded names and underscore/dot directories other than the posts directory."""
    excluded = set(exclude)
    for part in rel.parts[:-1]:
        if part in excluded or (part.startswith(('_', '.')) and part != posts_dir):
            return True
    name = rel.parts[-1]
    return name in excluded or name.startswith('.')


def is_post_path(rel_path: str, posts_dir: str = '_posts') -> bool:
    """A document is a post when any parent directory is the posts directory."""
    return posts_dir in Path(rel_path).parts[:-1]


def discover_files(
    root: Path,
    posts_dir: str = '_posts',
    extensions: Iterable[str] = MD_EXTENSIONS,
    exclude: Iterable[str] = (),
    content_root: Path = None,
    ) -> list[Path]:
    """Return sorted document files under root, or [root] if root is a single markdown file.

    Posts are every markdown file under the posts directory; any other markdown
    file counts only when it carries a front matter block. Ignore rules and
    post detection use paths relative to content_root (default: root), so a
    posts directory can itself be loaded.
    """
    extensions = tuple(extensions)
    if root.is_file():
        return [root] if root.suffix in extensions else []

    base = content_root if content_root is not None else root
    found = []
    for p in sorted(root.rglob('*')):
        if not p.is_file() or p.suffix not in extensions:
            continue
        rel = p.relative_to(base)
        if _is_ignored(rel, posts_dir, exclude):
            logger.debug("skipping ignored file %s", rel)
            continue
        if not is_post_path(rel.as_posix(), posts_dir) and not has_frontmatter(p):
            logger.debug("skipping %s: no front matter, treated as a static file", rel)
            continue
        found.append(p)
    return found


def parse_text(text: str, rel_path: str, path: Path = None, parser_config: str = 'gfm-like') -> ParsedDoc:
    """Parse document text into a ParsedDoc with token stream."""
    frontmatter, body, present = split_frontmatter(text, rel_path)
    return ParsedDoc(
        path=path or Path(rel_path),
        rel_path=rel_path,
        raw_markdown=text,
        markdown=body,
        frontmatter=frontmatter,
        has_frontmatter=present,
        tokens=make_parser(parser_config).parse(body),
    )


def parse_file(path: Path, root: Path = None, parser_config: str = 'gfm-like') -> ParsedDoc:
    """Parse a single markdown file; rel_path is relative to root when given, else the file name."""
    raw = path.read_text(encoding='utf-8-sig')
    rel = path.relative_to(root) if root is not None and root != path else Path(path.name)
    logger.debug("parsing %s", rel)
    return parse_text(raw, rel.as_posix(), path, parser_config)
