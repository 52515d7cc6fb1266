# SPDX-License-Identifier: Apache-2.0
"""Annotation pipeline package."""

from .annotation_pipeline import (
    AnnotationPipeline,
    AnnotationResult,
    LoggingObserver,
    annotate_pdf,
)

__all__ = [
    "AnnotationPipeline",
    "AnnotationResult",
    "LoggingObserver",
    "annotate_pdf",
]
