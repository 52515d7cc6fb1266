# SPDX-License-Identifier: Apache-2.0
"""Annotation pipeline implementation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from pdf_annotator.core.composer import AnnotationComposer, ComposedAnnotation, ComposerConfig
from pdf_annotator.core.document import AnnotationDocument
from pdf_annotator.core.errors import AnnotationError, UnexpectedFailure
from pdf_annotator.core.models import AnnotationSpec
from pdf_annotator.core.observer import (
    EVENT_COMPLETE,
    EVENT_MAPPED,
    EVENT_START,
    AnnotationObserver,
)

logger = logging.getLogger(__name__)


class LoggingObserver:
    """Observer that reports annotation progress through ``logging``."""

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self._log = log or logger

    def __call__(
        self,
        event: str,
        index: int,
        total: int,
        detail: dict[str, Any],
    ) -> None:
        if event == EVENT_START:
            spec: AnnotationSpec = detail["spec"]
            self._log.info(
                "Applying annotation %d/%d on page %d", index + 1, total, spec.page_number
            )
        elif event == EVENT_MAPPED:
            page = detail["page"]
            rect = detail["rect"]
            self._log.debug(
                "Page %.1fx%.1f, scale %.4f/%.4f, rect x=%.2f y=%.2f w=%.2f h=%.2f",
                page.width,
                page.height,
                detail["scale"][0],
                detail["scale"][1],
                rect.x,
                rect.y,
                rect.width,
                rect.height,
            )
            if detail["clamped"]:
                self._log.warning(
                    "Annotation %d outside page bounds; adjusted to x=%.2f y=%.2f w=%.2f h=%.2f",
                    index + 1,
                    rect.x,
                    rect.y,
                    rect.width,
                    rect.height,
                )
        elif event == EVENT_COMPLETE:
            if detail["truncated"]:
                self._log.warning(
                    "Annotation %d text did not fit; overflowing words were dropped",
                    index + 1,
                )
            self._log.debug(
                "Annotation %d drawn with %s %.1fpt in %d line(s)%s",
                index + 1,
                detail["font"],
                detail["font_size"],
                detail["lines"],
                f", link {detail['link']}" if detail["link"] else "",
            )


@dataclass
class AnnotationResult:
    """Annotation pipeline result."""

    pdf_bytes: bytes
    annotations: list[ComposedAnnotation] = field(default_factory=list)

    @property
    def stats(self) -> dict[str, Any]:
        return {
            "annotations": len(self.annotations),
            "links": sum(1 for item in self.annotations if item.link is not None),
            "truncated": sum(1 for item in self.annotations if item.layout.truncated),
        }


class AnnotationPipeline:
    """Load a PDF, apply a batch of annotations in order and serialize it.

    Annotations are applied strictly sequentially; input order is drawing
    order. The first failure stops the batch and is raised to the caller.
    """

    def __init__(
        self,
        config: Optional[ComposerConfig] = None,
        observer: Optional[AnnotationObserver] = None,
    ) -> None:
        """Initialize AnnotationPipeline.

        Args:
            config: Drawing defaults.
            observer: Progress hook. Defaults to LoggingObserver.
        """
        self._config = config or ComposerConfig()
        self._observer = observer if observer is not None else LoggingObserver()

    def annotate(
        self,
        pdf_source: Union[Path, str, bytes],
        annotations: Iterable[AnnotationSpec],
        output_path: Optional[Path] = None,
    ) -> AnnotationResult:
        """Apply annotations to a PDF.

        Args:
            pdf_source: Path to PDF file or PDF bytes.
            annotations: Annotations in drawing order.
            output_path: Optional path to also write the result to.

        Returns:
            AnnotationResult with the serialized PDF.

        Raises:
            TypeError: If pdf_source is not Path, str, or bytes.
            FileNotFoundError: If the PDF path does not exist.
            InvalidPageReference: An annotation targets a missing page.
            DocumentCodecFailure: The PDF could not be loaded or saved.
            UnexpectedFailure: Anything else went wrong.
        """
        specs = list(annotations)
        document = AnnotationDocument(pdf_source)
        try:
            with document, AnnotationComposer(self._config) as composer:
                composed = self.apply_all(composer, document, specs)
                pdf_bytes = document.to_bytes()
        except AnnotationError:
            raise
        except Exception as exc:
            raise UnexpectedFailure(
                f"Unexpected failure while annotating: {exc}", stage="annotate", cause=exc
            ) from exc

        if output_path is not None:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_bytes(pdf_bytes)

        return AnnotationResult(pdf_bytes=pdf_bytes, annotations=composed)

    def apply_all(
        self,
        composer: AnnotationComposer,
        document: AnnotationDocument,
        specs: list[AnnotationSpec],
    ) -> list[ComposedAnnotation]:
        """Apply annotations to an open document, stopping at the first error.

        Annotations applied before the failing one stay in the document.
        """
        composed: list[ComposedAnnotation] = []
        total = len(specs)
        for index, spec in enumerate(specs):
            composed.append(
                composer.apply(document, spec, observer=self._observer, index=index, total=total)
            )
        return composed


def annotate_pdf(
    pdf_source: Union[Path, str, bytes],
    annotations: Iterable[AnnotationSpec],
    observer: Optional[AnnotationObserver] = None,
) -> bytes:
    """Apply annotations to a PDF and return the annotated bytes."""
    return AnnotationPipeline(observer=observer).annotate(pdf_source, annotations).pdf_bytes
