"""Document model for posts and pages, plus the intermediate parse result"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from blogstore.core.utils.fences import fence_languages, unbalanced_fences
from blogstore.core.utils.tokens import make_parser


DEFAULT_EXCERPT_SEPARATOR = "\n\n"


def freeze(value: Any) -> Any:
    """Read-only copy of a metadata value: mappings become proxies, lists become tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    return value


def thaw(value: Any) -> Any:
    """Plain dict/list copy of a frozen metadata value, safe to mutate or dump as YAML."""
    if isinstance(value, Mapping):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(v) for v in value]
    return value


class DocumentKind(str, Enum):
    """Closed set of document variants, distinguished by their required fields"""
    post = "post"
    page = "page"


class Document(BaseModel):
    """A complete, validated post or page. Never constructed partially."""
    model_config = ConfigDict(frozen=True)

    identifier: str = Field(min_length=1)
    kind: DocumentKind
    title: str
    body: str
    slug: str
    path: str                                   # relative to the content root, POSIX form
    publication_date: Optional[date] = None     # posts only
    permalink: Optional[str] = None             # required for pages
    metadata: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)

    @field_validator('metadata', mode='after')
    @classmethod
    def _freeze_metadata(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return freeze(value)

    @model_validator(mode='after')
    def _check_invariants(self) -> 'Document':
        if not self.title.strip():
            raise ValueError("title must not be blank")
        if not self.body.strip():
            raise ValueError("body must not be blank")
        if unbalanced_fences(make_parser().parse(self.body)):
            raise ValueError("body has an unclosed code block")
        if self.kind == DocumentKind.post and self.publication_date is None:
            raise ValueError("a post requires publication_date")
        if self.kind == DocumentKind.page:
            if self.publication_date is not None:
                raise ValueError("a page has no publication_date")
            if not (self.permalink or '').strip():
                raise ValueError("a page requires permalink")
        return self

    @property
    def is_post(self) -> bool:
        return self.kind == DocumentKind.post

    @property
    def code_languages(self) -> list[str]:
        """Distinct fence language tags in order of first appearance."""
        return fence_languages(self.body)

    @property
    def excerpt(self) -> str:
        """Body text up to the first excerpt separator (a blank line unless overridden)."""
        separator = self.metadata.get("excerpt_separator") or DEFAULT_EXCERPT_SEPARATOR
        head, _, _ = self.body.strip().partition(str(separator))
        return head.strip()


@dataclass
class ParsedDoc:
    """Internal parse result carrying markdown-it tokens; not exposed to renderers."""
    path:            Path
    rel_path:        str            # POSIX path relative to the content root
    raw_markdown:    str            # full file content (includes front matter)
    markdown:        str            # body only (front matter stripped)
    frontmatter:     dict[str, Any]
    has_frontmatter: bool
    tokens:          list           # markdown-it Token objects
