# SPDX-License-Identifier: Apache-2.0
"""Text layout engine for annotation rectangles.

This module provides:
- Text width calculation from em-scale font metrics
- Greedy word wrapping with a fixed leading and silent truncation when the
  rectangle runs out of vertical space
- Centred placement for the single unwrapped line variant
"""

from __future__ import annotations

from .fonts import EM_UNITS, FontMetrics
from .models import LayoutResult, Rect, TextLine

DEFAULT_LEADING_FACTOR = 1.5
DEFAULT_HORIZONTAL_PADDING = 4.0
DEFAULT_TEXT_INSET = 2.0


def split_words(text: str) -> list[str]:
    """Split text on single spaces, dropping empty tokens.

    Runs of spaces collapse. Tabs and newlines are not treated as breaks.
    """
    return [word for word in text.split(" ") if word]


class TextLayoutEngine:
    """Engine for laying out annotation text within a rectangle.

    Lines are broken greedily: words are added to the current line until
    the next one would push it past ``box_width - horizontal_padding``. Each
    line after the first sits ``leading_factor * font_size`` below the
    previous one. Once the baseline cursor drops below the rectangle's
    bottom edge no further lines are produced.
    """

    def __init__(
        self,
        leading_factor: float = DEFAULT_LEADING_FACTOR,
        horizontal_padding: float = DEFAULT_HORIZONTAL_PADDING,
        text_inset: float = DEFAULT_TEXT_INSET,
    ) -> None:
        """Initialize TextLayoutEngine.

        Args:
            leading_factor: Baseline-to-baseline distance as a multiple of font size.
            horizontal_padding: Width reserved inside the box when wrapping.
            text_inset: Left inset of wrapped lines from the box edge.
        """
        self._leading_factor = leading_factor
        self._horizontal_padding = horizontal_padding
        self._text_inset = text_inset

    @property
    def text_inset(self) -> float:
        return self._text_inset

    def calculate_text_width(
        self,
        text: str,
        font: FontMetrics,
        font_size: float,
    ) -> float:
        """Calculate the width of text in points.

        Args:
            text: Text to measure.
            font: Font metrics at 1000-unit em scale.
            font_size: Font size in points.

        Returns:
            Total width in points.
        """
        if not text:
            return 0.0
        return font.advance_width(text) / EM_UNITS * font_size

    def get_leading(self, font_size: float) -> float:
        """Baseline-to-baseline distance for the given font size."""
        return self._leading_factor * font_size

    def wrap(
        self,
        text: str,
        font: FontMetrics,
        font_size: float,
        box_width: float,
        box_height: float = float("inf"),
    ) -> list[TextLine]:
        """Wrap text into lines that fit the box.

        Args:
            text: Text to wrap.
            font: Font metrics.
            font_size: Font size in points.
            box_width: Width of the target rectangle.
            box_height: Height of the target rectangle. Lines whose baseline
                would fall below the bottom edge are dropped.

        Returns:
            Laid out lines, top to bottom.
        """
        lines, _ = self._wrap(text, font, font_size, box_width, box_height)
        return lines

    def _wrap(
        self,
        text: str,
        font: FontMetrics,
        font_size: float,
        box_width: float,
        box_height: float,
    ) -> tuple[list[TextLine], bool]:
        max_width = box_width - self._horizontal_padding
        leading = self.get_leading(font_size)
        # Offset of the current baseline below the top edge
        cursor = font_size
        lines: list[TextLine] = []
        current = ""
        truncated = False

        words = split_words(text)
        for word in words:
            candidate = word if not current else f"{current} {word}"
            candidate_width = self.calculate_text_width(candidate, font, font_size)

            if cursor > box_height:
                truncated = True
                break

            if candidate_width > max_width:
                # A first word wider than the box still consumes a line
                if current:
                    lines.append(self._make_line(current, cursor, font, font_size))
                cursor += leading
                current = word
            else:
                current = candidate

        if current and cursor <= box_height:
            lines.append(self._make_line(current, cursor, font, font_size))
        elif current:
            truncated = True

        return lines, truncated

    def _make_line(
        self,
        content: str,
        baseline_offset: float,
        font: FontMetrics,
        font_size: float,
    ) -> TextLine:
        return TextLine(
            content=content,
            baseline_offset=baseline_offset,
            width=self.calculate_text_width(content, font, font_size),
        )

    def center_single_line(
        self,
        text: str,
        font: FontMetrics,
        font_size: float,
        rect: Rect,
    ) -> tuple[float, float]:
        """Baseline origin for drawing text unwrapped and centred in ``rect``.

        Horizontal centring only applies when the text is narrower than the
        box; wider text starts at the left edge. Vertically the cap height
        is centred, corrected by the descent.

        Args:
            text: Text to place.
            font: Font metrics.
            font_size: Font size in points.
            rect: Page-space rectangle.

        Returns:
            (x, y) baseline origin in page space.
        """
        scale = font_size / EM_UNITS
        text_width = self.calculate_text_width(text, font, font_size)
        text_height = font.cap_height * scale
        descent = font.descent * scale

        x = rect.x
        if text_width < rect.width:
            x = rect.x + (rect.width - text_width) / 2
        y = rect.y + (rect.height - text_height) / 2 - descent
        return x, y

    def layout(
        self,
        text: str,
        font: FontMetrics,
        font_size: float,
        rect: Rect,
    ) -> LayoutResult:
        """Lay out text inside a page-space rectangle.

        Args:
            text: Text to lay out.
            font: Font metrics.
            font_size: Font size in points.
            rect: Page-space rectangle.

        Returns:
            LayoutResult with wrapped lines and the centred single-line origin.
        """
        lines, truncated = self._wrap(text, font, font_size, rect.width, rect.height)
        return LayoutResult(
            lines=lines,
            centered_origin=self.center_single_line(text, font, font_size, rect),
            fits_unwrapped=self.calculate_text_width(text, font, font_size) < rect.width,
            truncated=truncated,
        )
