# SPDX-License-Identifier: Apache-2.0
"""Standard PDF font resolution and metrics.

Style tokens map onto the twelve Latin faces of the PDF standard-14 set
(Helvetica, Times and Courier in four weight/slant combinations). Glyph
advances are measured with PDFium's built-in font programs; cap height and
descent come from the Adobe AFM values for each family.

All metrics are expressed at a 1000-unit em scale. Multiply by
``font_size / 1000`` to get points.
"""

from __future__ import annotations

import ctypes
from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable

import pypdfium2 as pdfium  # type: ignore[import-untyped]

EM_UNITS = 1000.0


@runtime_checkable
class FontMetrics(Protocol):
    """Per-face metrics at 1000-unit em scale."""

    @property
    def name(self) -> str:
        """PostScript name of the face (e.g. "Helvetica-Bold")."""
        ...

    @property
    def cap_height(self) -> float: ...

    @property
    def descent(self) -> float:
        """Descent below the baseline (zero or negative)."""
        ...

    def advance_width(self, text: str) -> float:
        """Sum of glyph advances for ``text``."""
        ...


@dataclass(frozen=True)
class FontFace:
    """A standard font face and its vertical metrics."""

    name: str
    family: str
    cap_height: float
    descent: float


# Vertical metrics per family (Adobe AFM)
_FAMILY_METRICS: dict[str, tuple[float, float]] = {
    "helvetica": (718.0, -207.0),
    "times": (662.0, -217.0),
    "courier": (562.0, -157.0),
}


def _face(name: str, family: str) -> FontFace:
    cap_height, descent = _FAMILY_METRICS[family]
    return FontFace(name=name, family=family, cap_height=cap_height, descent=descent)


DEFAULT_FACE = _face("Helvetica", "helvetica")

# Style token -> face
FONT_STYLES: dict[str, FontFace] = {
    "bold": _face("Helvetica-Bold", "helvetica"),
    "italic": _face("Helvetica-Oblique", "helvetica"),
    "bold-italic": _face("Helvetica-BoldOblique", "helvetica"),
    "bolditalic": _face("Helvetica-BoldOblique", "helvetica"),
    "times": _face("Times-Roman", "times"),
    "times-bold": _face("Times-Bold", "times"),
    "times-italic": _face("Times-Italic", "times"),
    "times-bold-italic": _face("Times-BoldItalic", "times"),
    "courier": _face("Courier", "courier"),
    "courier-bold": _face("Courier-Bold", "courier"),
    "courier-italic": _face("Courier-Oblique", "courier"),
    "courier-bold-italic": _face("Courier-BoldOblique", "courier"),
}


class StandardFontMetrics:
    """Metrics for a standard face backed by a PDFium font handle."""

    def __init__(self, face: FontFace, font_handle: Any) -> None:
        self._face = face
        self._handle = font_handle
        self._glyph_widths: dict[str, float] = {}

    @property
    def face(self) -> FontFace:
        return self._face

    @property
    def name(self) -> str:
        return self._face.name

    @property
    def cap_height(self) -> float:
        return self._face.cap_height

    @property
    def descent(self) -> float:
        return self._face.descent

    def advance_width(self, text: str) -> float:
        """Calculate the advance width of text at 1000-unit em scale.

        Characters the face has no glyph for contribute zero width.

        Args:
            text: Text to measure.

        Returns:
            Total advance width.
        """
        return sum(self._glyph_width(char) for char in text)

    def _glyph_width(self, char: str) -> float:
        cached = self._glyph_widths.get(char)
        if cached is not None:
            return cached

        width_out = ctypes.c_float()
        result = pdfium.raw.FPDFFont_GetGlyphWidth(
            self._handle,
            ord(char),
            ctypes.c_float(EM_UNITS),
            ctypes.byref(width_out),
        )
        width = width_out.value if result else 0.0
        self._glyph_widths[char] = width
        return width


class FontResolver:
    """Resolve font style tokens to standard font metrics.

    ``resolve`` never fails: blank or unknown tokens map to plain Helvetica.
    Faces are measured in a private scratch document, so one resolver can
    serve any number of target documents.
    """

    def __init__(self, styles: Optional[dict[str, FontFace]] = None) -> None:
        """Initialize FontResolver.

        Args:
            styles: Token -> face table. Defaults to FONT_STYLES.
        """
        self._styles = {
            token.lower(): face for token, face in (styles or FONT_STYLES).items()
        }
        self._doc: Optional[pdfium.PdfDocument] = None
        self._metrics: dict[str, StandardFontMetrics] = {}

    def __enter__(self) -> FontResolver:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Release the scratch document."""
        self._metrics.clear()
        if self._doc is not None:
            self._doc.close()
            self._doc = None

    def face_for(self, style: Optional[str]) -> FontFace:
        """Return the face a style token selects."""
        if style is None or not style.strip():
            return DEFAULT_FACE
        return self._styles.get(style.strip().lower(), DEFAULT_FACE)

    def resolve(self, style: Optional[str]) -> StandardFontMetrics:
        """Resolve a style token to measurable font metrics.

        Args:
            style: Style token such as "bold" or "courier-bold-italic".

        Returns:
            Metrics for the selected face.
        """
        face = self.face_for(style)
        metrics = self._metrics.get(face.name)
        if metrics is not None:
            return metrics

        if self._doc is None:
            self._doc = pdfium.PdfDocument.new()
        handle = pdfium.raw.FPDFText_LoadStandardFont(
            self._doc.raw, face.name.encode("ascii")
        )
        metrics = StandardFontMetrics(face, handle)
        self._metrics[face.name] = metrics
        return metrics
