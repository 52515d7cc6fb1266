# SPDX-License-Identifier: Apache-2.0
"""Surface-to-page coordinate mapping.

Browser clients report rectangles on a rendering canvas (origin top-left,
y down). PDF pages use an origin at the bottom-left with y growing upward.
The mapper rescales by the page/canvas ratio when the canvas size is known,
flips the vertical axis and clamps the result to the page.
"""

from __future__ import annotations

from dataclasses import dataclass

from .models import AnnotationSpec, CoordinateSpace, PageDimensions, Rect


@dataclass(frozen=True)
class MappingResult:
    """Intermediate values of a mapping, reported to observers."""

    unclamped: Rect
    rect: Rect
    scale_x: float = 1.0
    scale_y: float = 1.0

    @property
    def was_clamped(self) -> bool:
        return self.unclamped != self.rect


class CoordinateMapper:
    """Map annotation rectangles into clamped page-space rectangles."""

    def map(self, spec: AnnotationSpec, page: PageDimensions) -> Rect:
        """Map the annotation rectangle onto the page.

        Args:
            spec: Annotation whose rectangle should be mapped.
            page: Media box size of the target page.

        Returns:
            Page-space rectangle inside the page bounds.
        """
        return self.map_with_details(spec, page).rect

    def map_with_details(self, spec: AnnotationSpec, page: PageDimensions) -> MappingResult:
        """Map the annotation rectangle and keep the pre-clamp values."""
        source = spec.rect
        surface = spec.surface

        if surface is not None and surface.is_usable:
            scale_x = page.width / surface.canvas_width
            scale_y = page.height / surface.canvas_height
            width = source.width * scale_x
            height = source.height * scale_y
            x = source.x * scale_x
            # Surface top edge becomes the page-space top edge
            y = page.height - (source.y * scale_y) - height
        else:
            scale_x = scale_y = 1.0
            width = source.width
            height = source.height
            x = source.x
            y = page.height - source.y - source.height

        unclamped = Rect(x=x, y=y, width=width, height=height, space=CoordinateSpace.PAGE)
        return MappingResult(
            unclamped=unclamped,
            rect=self.clamp(unclamped, page),
            scale_x=scale_x,
            scale_y=scale_y,
        )

    @staticmethod
    def clamp(rect: Rect, page: PageDimensions) -> Rect:
        """Clamp a page-space rectangle to the page bounds.

        The origin is pulled inside the page first, then the extent is
        shortened to fit. Origin and extent never go below zero, so a
        rectangle larger than the page collapses onto the whole page.

        Args:
            rect: Page-space rectangle, possibly out of bounds.
            page: Page size.

        Returns:
            Rectangle with 0 <= x, 0 <= y, right <= page.width and
            top <= page.height (for non-negative page sizes).
        """
        x = max(0.0, min(rect.x, page.width - rect.width))
        y = max(0.0, min(rect.y, page.height - rect.height))
        width = max(0.0, min(rect.width, page.width - x))
        height = max(0.0, min(rect.height, page.height - y))
        if (x, y, width, height) == (rect.x, rect.y, rect.width, rect.height):
            return rect
        return Rect(x=x, y=y, width=width, height=height, space=CoordinateSpace.PAGE)
