"""Turn a ParsedDoc into a complete, validated Document"""

import re
from datetime import date, datetime
from pathlib import PurePosixPath
from typing import Any, Optional

from blogstore.core.errors import ValidationError, ValidationErrorKind
from blogstore.core.models import Document, DocumentKind, ParsedDoc
from blogstore.core.parse import is_post_path
from blogstore.core.utils.fences import unbalanced_fences
from blogstore.core.utils.slug import slug_from_permalink, slugify


POST_FILENAME_RE = re.compile(r'^(?P<date>\d{4}-\d{2}-\d{2})-(?P<slug>.+)$')


def normalize_metadata(value: Any) -> Any:
    """Recursively convert YAML dates to ISO strings and mapping keys to str."""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): normalize_metadata(v) for k, v in value.items()}
    if isinstance(value, list):
        return [normalize_metadata(v) for v in value]
    return value


def parse_date(value: Any) -> Optional[date]:
    """Accept date/datetime objects or strings starting with an ISO date; None if unparsable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def _require_text(metadata: dict[str, Any], key: str) -> Optional[str]:
    """Return metadata[key] as text, or None when absent or blank."""
    value = metadata.get(key)
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value)
    return text if text.strip() else None


def _post_fields(parsed: ParsedDoc, metadata: dict[str, Any], title: str) -> dict[str, Any]:
    """Resolve publication date, slug and identifier for a post."""
    ref = parsed.rel_path
    stem = PurePosixPath(ref).stem
    name_match = POST_FILENAME_RE.match(stem)

    if 'date' in metadata:
        published = parse_date(parsed.frontmatter.get('date'))
        if published is None:
            raise ValidationError(ValidationErrorKind.invalid_date, ref, f"unparsable date {metadata['date']!r}")
    elif name_match:
        published = parse_date(name_match.group('date'))
        if published is None:
            raise ValidationError(ValidationErrorKind.invalid_date, ref, f"invalid file name date {stem!r}")
    else:
        raise ValidationError(ValidationErrorKind.invalid_date, ref, "post has no date")

    slug = (
        slugify(_require_text(metadata, 'slug') or '')
        or slugify(title)
        or slugify(name_match.group('slug') if name_match else stem)
    )
    return {
        "kind": DocumentKind.post,
        "identifier": f"{published.isoformat()}-{slug}",
        "slug": slug,
        "publication_date": published,
        "permalink": _require_text(metadata, 'permalink'),
    }


def _page_fields(parsed: ParsedDoc, metadata: dict[str, Any]) -> dict[str, Any]:
    """Resolve permalink, slug and identifier for a page."""
    permalink = _require_text(metadata, 'permalink')
    if permalink is None:
        raise ValidationError(ValidationErrorKind.missing_permalink, parsed.rel_path)
    permalink = permalink.strip()
    return {
        "kind": DocumentKind.page,
        "identifier": permalink,
        "slug": slug_from_permalink(permalink),
        "publication_date": None,
        "permalink": permalink,
    }


def build_document(parsed: ParsedDoc, posts_dir: str = '_posts') -> Document:
    """Validate a ParsedDoc and build its Document, or raise ValidationError.

    Checks run in a fixed order: title, body, code fences, then the
    kind-specific fields (date for posts, permalink for pages).
    """
    ref = parsed.rel_path
    metadata = normalize_metadata(parsed.frontmatter)

    title = _require_text(metadata, 'title')
    if title is None:
        raise ValidationError(ValidationErrorKind.missing_title, ref)

    if not parsed.markdown.strip():
        raise ValidationError(ValidationErrorKind.missing_body, ref)

    if bad := unbalanced_fences(parsed.tokens):
        lines = ", ".join(str(n) for n in bad)
        raise ValidationError(ValidationErrorKind.malformed_code_fence, ref, f"unclosed code block at body line {lines}")

    if is_post_path(ref, posts_dir):
        fields = _post_fields(parsed, metadata, title)
    else:
        fields = _page_fields(parsed, metadata)

    return Document(
        title=title,
        body=parsed.markdown,
        path=ref,
        metadata=metadata,
        **fields,
    )
