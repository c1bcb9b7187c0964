"""Validation error taxonomy raised while loading the document store"""

from enum import Enum


class ValidationErrorKind(str, Enum):
    """The invariant a document violated"""
    duplicate_identifier = "duplicate_identifier"
    missing_title = "missing_title"
    missing_body = "missing_body"
    malformed_code_fence = "malformed_code_fence"
    missing_permalink = "missing_permalink"
    invalid_date = "invalid_date"
    invalid_metadata = "invalid_metadata"


class ValidationError(ValueError):
    """A document failed validation; identifies the offending source file."""

    def __init__(self, kind: ValidationErrorKind, document: str, detail: str = ""):
        self.kind = kind
        self.document = document
        self.detail = detail
        message = f"{kind.value}: {document}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
