# SPDX-License-Identifier: Apache-2.0
"""Data models for PDF annotation placement.

This module defines the geometry and request types that flow through
coordinate mapping, text layout and annotation composition. Every derived
value (mapped rectangles, resolved styles, laid out lines) lives only for
the duration of a single annotation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

DEFAULT_FONT_SIZE = 12.0
DEFAULT_BORDER_WIDTH = 1.0


class CoordinateSpace(str, Enum):
    """Coordinate system a rectangle is expressed in."""

    # Rendering canvas: origin top-left, y grows downward
    SURFACE = "surface"
    # PDF page: origin bottom-left, y grows upward
    PAGE = "page"


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle.

    Attributes:
        x: Left X coordinate
        y: Y coordinate of the origin corner (top edge in surface space,
            bottom edge in page space)
        width: Horizontal extent
        height: Vertical extent
        space: Coordinate space the values are expressed in
    """

    x: float
    y: float
    width: float
    height: float
    space: CoordinateSpace = CoordinateSpace.PAGE

    @property
    def right(self) -> float:
        """Right X coordinate."""
        return self.x + self.width

    @property
    def top(self) -> float:
        """Top Y coordinate in page space."""
        return self.y + self.height


@dataclass(frozen=True)
class PageDimensions:
    """Media box size of a single page in points."""

    width: float
    height: float


@dataclass(frozen=True)
class SurfaceSize:
    """Size of the rendering canvas the caller measured coordinates on."""

    canvas_width: float
    canvas_height: float

    @property
    def is_usable(self) -> bool:
        """Whether both dimensions can be used as scale divisors."""
        return self.canvas_width > 0 and self.canvas_height > 0


@dataclass(frozen=True)
class RGB:
    """RGB color with channels normalized to [0, 1]."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    @classmethod
    def from_bytes(cls, r: int, g: int, b: int) -> RGB:
        """Create from 0-255 channel values."""
        return cls(r=r / 255.0, g=g / 255.0, b=b / 255.0)

    def to_bytes(self) -> tuple[int, int, int]:
        """Return 0-255 channel values as used by PDFium."""
        return (
            round(self.r * 255),
            round(self.g * 255),
            round(self.b * 255),
        )


BLACK = RGB(0.0, 0.0, 0.0)
WHITE = RGB(1.0, 1.0, 1.0)


@dataclass(frozen=True)
class AnnotationSpec:
    """Immutable input for placing one annotation.

    Attributes:
        text: Text to draw inside the rectangle (non-empty)
        page_number: Target page (1-based)
        rect: Rectangle in top-left-origin convention. Surface units when
            ``surface`` is given, page units otherwise.
        color: Text color token (named color or hex string)
        link: URL opened when the region is activated
        font_style: Font style token (e.g. "bold", "times-italic")
        font_size: Font size in points (defaults to 12)
        background_color: Fill color drawn behind the text
        border_color: Outline color
        border_width: Outline width (defaults to 1 when a border is drawn)
        surface: Canvas size used to rescale ``rect`` into page units
    """

    text: str
    page_number: int
    rect: Rect
    color: Optional[str] = None
    link: Optional[str] = None
    font_style: Optional[str] = None
    font_size: Optional[float] = None
    background_color: Optional[str] = None
    border_color: Optional[str] = None
    border_width: Optional[float] = None
    surface: Optional[SurfaceSize] = None

    @property
    def has_link(self) -> bool:
        return bool(self.link and self.link.strip())

    @property
    def has_background(self) -> bool:
        return bool(self.background_color and self.background_color.strip())

    @property
    def has_border(self) -> bool:
        return bool(self.border_color and self.border_color.strip())


@dataclass(frozen=True)
class ResolvedStyle:
    """Font and colors resolved for a single annotation."""

    font: Any  # FontMetrics
    font_size: float
    text_color: RGB
    background: Optional[RGB] = None
    border: Optional[RGB] = None
    border_width: Optional[float] = None


@dataclass(frozen=True)
class TextLine:
    """A single laid out line.

    Attributes:
        content: Text drawn on this line
        baseline_offset: Distance from the rectangle's top edge to the baseline
        width: Measured advance width at the layout font size
    """

    content: str
    baseline_offset: float
    width: float = 0.0


@dataclass
class LayoutResult:
    """Result of laying out text inside a rectangle."""

    lines: list[TextLine] = field(default_factory=list)
    # Baseline origin of the single-line centred variant
    centered_origin: tuple[float, float] = (0.0, 0.0)
    fits_unwrapped: bool = False
    truncated: bool = False


@dataclass(frozen=True)
class LinkRegion:
    """Clickable region that opens ``url``."""

    rect: Rect
    url: str
    border_width: float = 0.0
