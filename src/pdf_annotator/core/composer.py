# SPDX-License-Identifier: Apache-2.0
"""Annotation composition.

Applies one annotation to a document: map the rectangle into page space,
cover the original content, optionally fill a background, draw the wrapped
text, optionally outline the rectangle and finally add a link region.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .colors import ColorResolver
from .coordinates import CoordinateMapper
from .document import AnnotationDocument
from .fonts import FontResolver
from .models import (
    DEFAULT_BORDER_WIDTH,
    DEFAULT_FONT_SIZE,
    RGB,
    WHITE,
    AnnotationSpec,
    LayoutResult,
    LinkRegion,
    Rect,
    ResolvedStyle,
)
from .observer import EVENT_COMPLETE, EVENT_MAPPED, EVENT_START, AnnotationObserver
from .text_layout import (
    DEFAULT_HORIZONTAL_PADDING,
    DEFAULT_LEADING_FACTOR,
    DEFAULT_TEXT_INSET,
    TextLayoutEngine,
)


@dataclass
class ComposerConfig:
    """Drawing defaults for annotations."""

    default_font_size: float = DEFAULT_FONT_SIZE
    leading_factor: float = DEFAULT_LEADING_FACTOR
    horizontal_padding: float = DEFAULT_HORIZONTAL_PADDING
    text_inset: float = DEFAULT_TEXT_INSET
    default_border_width: float = DEFAULT_BORDER_WIDTH
    cover_color: RGB = WHITE


@dataclass
class ComposedAnnotation:
    """What was drawn for one annotation."""

    rect: Rect
    style: ResolvedStyle
    layout: LayoutResult
    link: Optional[LinkRegion] = None


class AnnotationComposer:
    """Apply annotations to a document one at a time.

    The composer holds no per-document state; the same instance can be used
    for any number of documents, but a single document must only be written
    by one caller at a time.
    """

    def __init__(
        self,
        config: Optional[ComposerConfig] = None,
        color_resolver: Optional[ColorResolver] = None,
        font_resolver: Optional[FontResolver] = None,
        mapper: Optional[CoordinateMapper] = None,
        layout_engine: Optional[TextLayoutEngine] = None,
    ) -> None:
        self._config = config or ComposerConfig()
        self._colors = color_resolver or ColorResolver()
        self._owns_fonts = font_resolver is None
        self._fonts = font_resolver or FontResolver()
        self._mapper = mapper or CoordinateMapper()
        self._layout = layout_engine or TextLayoutEngine(
            leading_factor=self._config.leading_factor,
            horizontal_padding=self._config.horizontal_padding,
            text_inset=self._config.text_inset,
        )

    def __enter__(self) -> AnnotationComposer:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_fonts:
            self._fonts.close()

    @property
    def config(self) -> ComposerConfig:
        return self._config

    def resolve_style(self, spec: AnnotationSpec) -> ResolvedStyle:
        """Resolve font, size and colors for an annotation.

        Unknown font styles and malformed colors fall back to Helvetica and
        black respectively.
        """
        font_size = spec.font_size if spec.font_size else self._config.default_font_size
        background = None
        if spec.has_background:
            background = self._colors.resolve(spec.background_color)

        border = None
        border_width = None
        if spec.has_border:
            border = self._colors.resolve(spec.border_color)
            border_width = (
                spec.border_width
                if spec.border_width is not None
                else self._config.default_border_width
            )

        return ResolvedStyle(
            font=self._fonts.resolve(spec.font_style),
            font_size=font_size,
            text_color=self._colors.resolve(spec.color),
            background=background,
            border=border,
            border_width=border_width,
        )

    def apply(
        self,
        document: AnnotationDocument,
        spec: AnnotationSpec,
        observer: Optional[AnnotationObserver] = None,
        index: int = 0,
        total: int = 1,
    ) -> ComposedAnnotation:
        """Apply a single annotation to the document.

        Args:
            document: Target document. Modified in place.
            spec: Annotation to apply.
            observer: Optional hook notified at start, after mapping and on
                completion.
            index: Position of the annotation in its batch (for the observer).
            total: Size of the batch (for the observer).

        Returns:
            ComposedAnnotation describing what was drawn.

        Raises:
            InvalidPageReference: If the page does not exist. Nothing is drawn.
        """
        self._notify(observer, EVENT_START, index, total, {"spec": spec})

        page_number = spec.page_number
        page = document.page_dimensions(page_number)
        mapping = self._mapper.map_with_details(spec, page)
        rect = mapping.rect
        self._notify(
            observer,
            EVENT_MAPPED,
            index,
            total,
            {
                "page": page,
                "scale": (mapping.scale_x, mapping.scale_y),
                "unclamped": mapping.unclamped,
                "rect": rect,
                "clamped": mapping.was_clamped,
            },
        )

        document.cover_rect(page_number, rect, self._config.cover_color)

        style = self.resolve_style(spec)
        if style.background is not None:
            document.fill_rect(page_number, rect, style.background)

        layout = self._layout.layout(spec.text, style.font, style.font_size, rect)
        document.draw_text_lines(
            page_number,
            rect,
            layout.lines,
            style.font.name,
            style.font_size,
            style.text_color,
            inset=self._layout.text_inset,
        )

        if style.border is not None and style.border_width is not None:
            document.stroke_rect(page_number, rect, style.border, style.border_width)

        link = None
        if spec.has_link and spec.link is not None:
            link = document.add_link_region(page_number, rect, spec.link)

        composed = ComposedAnnotation(rect=rect, style=style, layout=layout, link=link)
        self._notify(
            observer,
            EVENT_COMPLETE,
            index,
            total,
            {
                "rect": rect,
                "font": style.font.name,
                "font_size": style.font_size,
                "lines": len(layout.lines),
                "truncated": layout.truncated,
                "centered_origin": layout.centered_origin,
                "link": link.url if link else None,
            },
        )
        return composed

    @staticmethod
    def _notify(
        observer: Optional[AnnotationObserver],
        event: str,
        index: int,
        total: int,
        detail: dict[str, Any],
    ) -> None:
        if observer is None:
            return
        observer(event, index, total, detail)
