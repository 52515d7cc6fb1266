# SPDX-License-Identifier: Apache-2.0
"""Annotation error definitions.

Styling defects (unknown colors or font styles) are absorbed by the
resolvers and never raised. Structural defects abort the batch.
"""

from __future__ import annotations


class AnnotationError(Exception):
    """Base exception for annotation errors."""

    def __init__(
        self,
        message: str,
        stage: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.stage = stage
        self.cause = cause


class InvalidPageReference(AnnotationError):
    """Page number outside ``[1, page_count]``."""

    def __init__(self, page_number: int, page_count: int) -> None:
        super().__init__(
            f"Invalid page number: {page_number} (document has {page_count} pages)",
            stage="resolve_page",
        )
        self.page_number = page_number
        self.page_count = page_count


class DocumentCodecFailure(AnnotationError):
    """The document could not be loaded or serialized."""


class UnexpectedFailure(AnnotationError):
    """Any other failure while applying annotations."""
