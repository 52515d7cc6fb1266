# SPDX-License-Identifier: Apache-2.0
"""PDF document wrapper used as the drawing target for annotations.

Page content (cover, fills, outlines, text) is written with pypdfium2.
Link annotations are collected per page and written with pikepdf when the
document is serialized, since PDFium has no stable API for URI actions.
"""

from __future__ import annotations

import ctypes
from io import BytesIO
from pathlib import Path
from typing import Any, Optional, Union

import pikepdf  # type: ignore[import-untyped]
import pypdfium2 as pdfium  # type: ignore[import-untyped]

from .errors import DocumentCodecFailure, InvalidPageReference
from .helpers import to_rgba, to_widestring
from .models import RGB, WHITE, LinkRegion, PageDimensions, Rect, TextLine

# FPDFPath_SetDrawMode fill modes
FPDF_FILLMODE_NONE = 0
FPDF_FILLMODE_WINDING = 2


class AnnotationDocument:
    """Mutable PDF document that annotations are drawn onto.

    Page numbers are 1-based throughout. Objects are appended to a page in
    call order, so later calls paint over earlier ones.

    Example:
        >>> with AnnotationDocument(pdf_bytes) as doc:
        ...     doc.fill_rect(1, Rect(72, 700, 200, 40), RGB(1, 1, 0))
        ...     doc.add_link_region(1, Rect(72, 700, 200, 40), "https://example.com")
        ...     data = doc.to_bytes()
    """

    def __init__(self, pdf_source: Union[Path, str, bytes]) -> None:
        """Load a PDF document.

        Args:
            pdf_source: Path to PDF file or PDF bytes.

        Raises:
            TypeError: If pdf_source is not Path, str, or bytes.
            FileNotFoundError: If the file path doesn't exist.
            DocumentCodecFailure: If the PDF cannot be parsed.
        """
        self._pdf: Optional[pdfium.PdfDocument] = None
        self._pages: dict[int, pdfium.PdfPage] = {}
        self._fonts: dict[str, Any] = {}
        self._links: dict[int, list[LinkRegion]] = {}

        if isinstance(pdf_source, bytes):
            self._source_name = "bytes"
            data: Union[bytes, str] = pdf_source
        elif isinstance(pdf_source, (str, Path)):
            path = Path(pdf_source)
            if not path.exists():
                raise FileNotFoundError(f"PDF file not found: {path}")
            self._source_name = path.name
            data = str(path)
        else:
            raise TypeError(
                f"pdf_source must be Path, str, or bytes, got {type(pdf_source).__name__}"
            )

        try:
            self._pdf = pdfium.PdfDocument(data)
        except pdfium.PdfiumError as exc:
            raise DocumentCodecFailure(
                f"Failed to load PDF from {self._source_name}: {exc}",
                stage="load",
                cause=exc,
            ) from exc

    def __enter__(self) -> AnnotationDocument:
        """Context manager entry."""
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Any,
    ) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the document and release page handles."""
        for page in self._pages.values():
            page.close()
        self._pages.clear()
        self._fonts.clear()
        if self._pdf is not None:
            self._pdf.close()
            self._pdf = None

    @property
    def source_name(self) -> str:
        return self._source_name

    @property
    def page_count(self) -> int:
        """Get the number of pages in the document."""
        return len(self._ensure_open())

    def _ensure_open(self) -> pdfium.PdfDocument:
        if self._pdf is None:
            raise RuntimeError("PDF document is not open")
        return self._pdf

    def check_page(self, page_number: int) -> None:
        """Raise InvalidPageReference unless 1 <= page_number <= page_count."""
        page_count = self.page_count
        if page_number < 1 or page_number > page_count:
            raise InvalidPageReference(page_number, page_count)

    def _page(self, page_number: int) -> pdfium.PdfPage:
        self.check_page(page_number)
        page = self._pages.get(page_number)
        if page is None:
            page = self._ensure_open()[page_number - 1]
            self._pages[page_number] = page
        return page

    def page_dimensions(self, page_number: int) -> PageDimensions:
        """Media box size of a page.

        Args:
            page_number: Page number (1-based).

        Returns:
            PageDimensions in points.
        """
        left, bottom, right, top = self._page(page_number).get_mediabox()
        return PageDimensions(width=right - left, height=top - bottom)

    def load_standard_font(self, font_name: str) -> Any:
        """Load a standard PDF font into this document.

        Args:
            font_name: Standard font name (e.g., "Helvetica", "Times-Roman").

        Returns:
            PDFium font handle.

        Raises:
            ValueError: If PDFium does not know the font.
        """
        if font_name in self._fonts:
            return self._fonts[font_name]

        pdf = self._ensure_open()
        font_handle = pdfium.raw.FPDFText_LoadStandardFont(
            pdf.raw, font_name.encode("ascii")
        )
        if not font_handle:
            raise ValueError(f"Unknown standard font: {font_name}")
        self._fonts[font_name] = font_handle
        return font_handle

    def _insert_rect(
        self,
        page_number: int,
        rect: Rect,
        fill: Optional[RGB] = None,
        stroke: Optional[RGB] = None,
        stroke_width: float = 1.0,
    ) -> None:
        page = self._page(page_number)
        path = pdfium.raw.FPDFPageObj_CreateNewRect(
            ctypes.c_float(rect.x),
            ctypes.c_float(rect.y),
            ctypes.c_float(rect.width),
            ctypes.c_float(rect.height),
        )
        if fill is not None:
            pdfium.raw.FPDFPageObj_SetFillColor(path, *to_rgba(fill))
        if stroke is not None:
            pdfium.raw.FPDFPageObj_SetStrokeColor(path, *to_rgba(stroke))
            pdfium.raw.FPDFPageObj_SetStrokeWidth(path, ctypes.c_float(stroke_width))

        fill_mode = FPDF_FILLMODE_WINDING if fill is not None else FPDF_FILLMODE_NONE
        draw_stroke = 1 if stroke is not None else 0
        pdfium.raw.FPDFPath_SetDrawMode(path, fill_mode, ctypes.c_int(draw_stroke))

        pdfium.raw.FPDFPage_InsertObject(page.raw, path)
        page.gen_content()

    def cover_rect(self, page_number: int, rect: Rect, color: RGB = WHITE) -> None:
        """Paint an opaque rectangle over existing page content."""
        self._insert_rect(page_number, rect, fill=color)

    def fill_rect(self, page_number: int, rect: Rect, color: RGB) -> None:
        """Fill a rectangle with a solid color."""
        self._insert_rect(page_number, rect, fill=color)

    def stroke_rect(self, page_number: int, rect: Rect, color: RGB, width: float) -> None:
        """Draw the outline of a rectangle."""
        self._insert_rect(page_number, rect, stroke=color, stroke_width=width)

    def draw_text_lines(
        self,
        page_number: int,
        rect: Rect,
        lines: list[TextLine],
        font_name: str,
        font_size: float,
        color: RGB,
        inset: float = 0.0,
    ) -> int:
        """Draw laid out lines inside a page-space rectangle.

        Each line becomes its own text object, left-aligned at ``rect.x +
        inset`` with its baseline ``line.baseline_offset`` below the top edge.

        Args:
            page_number: Page number (1-based).
            rect: Page-space rectangle the lines were laid out for.
            lines: Lines from TextLayoutEngine.
            font_name: Standard font name.
            font_size: Font size in points.
            color: Text fill color.
            inset: Horizontal inset from the left edge.

        Returns:
            Number of text objects inserted.
        """
        page = self._page(page_number)
        doc_handle = self._ensure_open().raw
        font_handle = self.load_standard_font(font_name)

        inserted = 0
        for line in lines:
            text_obj = pdfium.raw.FPDFPageObj_CreateTextObj(
                doc_handle, font_handle, ctypes.c_float(font_size)
            )
            if not text_obj:
                continue

            if not pdfium.raw.FPDFText_SetText(text_obj, to_widestring(line.content)):
                pdfium.raw.FPDFPageObj_Destroy(text_obj)
                continue

            pdfium.raw.FPDFPageObj_SetFillColor(text_obj, *to_rgba(color))
            pdfium.raw.FPDFPageObj_Transform(
                text_obj,
                ctypes.c_double(1.0),
                ctypes.c_double(0.0),
                ctypes.c_double(0.0),
                ctypes.c_double(1.0),
                ctypes.c_double(rect.x + inset),
                ctypes.c_double(rect.top - line.baseline_offset),
            )
            pdfium.raw.FPDFPage_InsertObject(page.raw, text_obj)
            inserted += 1

        page.gen_content()
        return inserted

    def add_link_region(
        self,
        page_number: int,
        rect: Rect,
        url: str,
        border_width: float = 0.0,
    ) -> LinkRegion:
        """Add a clickable region that opens ``url``.

        The region is written into the page's annotation list on
        serialization.
        """
        self.check_page(page_number)
        region = LinkRegion(rect=rect, url=url, border_width=border_width)
        self._links.setdefault(page_number, []).append(region)
        return region

    def link_regions(self, page_number: int) -> list[LinkRegion]:
        """Link regions added to a page so far."""
        return list(self._links.get(page_number, []))

    def to_bytes(self) -> bytes:
        """Serialize the document, including pending link regions.

        Raises:
            DocumentCodecFailure: If saving fails.
        """
        buffer = BytesIO()
        pdf = self._ensure_open()
        try:
            pdf.save(buffer)
        except pdfium.PdfiumError as exc:
            raise DocumentCodecFailure(
                f"Failed to save PDF: {exc}", stage="save", cause=exc
            ) from exc

        if not self._links:
            return buffer.getvalue()

        try:
            return self._write_links(buffer.getvalue())
        except pikepdf.PdfError as exc:
            raise DocumentCodecFailure(
                f"Failed to write link annotations: {exc}", stage="save", cause=exc
            ) from exc

    def _write_links(self, pdf_bytes: bytes) -> bytes:
        with pikepdf.open(BytesIO(pdf_bytes)) as pdf:
            for page_number, regions in sorted(self._links.items()):
                page = pdf.pages[page_number - 1].obj
                if pikepdf.Name.Annots not in page:
                    page.Annots = pdf.make_indirect(pikepdf.Array())
                for region in regions:
                    page.Annots.append(pdf.make_indirect(_link_annotation(region)))

            output = BytesIO()
            pdf.save(output)
            return output.getvalue()

    def save(self, output_path: Union[Path, str]) -> None:
        """Save the PDF to a file.

        Args:
            output_path: Output file path.
        """
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.to_bytes())


def _link_annotation(region: LinkRegion) -> pikepdf.Dictionary:
    rect = region.rect
    return pikepdf.Dictionary(
        Type=pikepdf.Name.Annot,
        Subtype=pikepdf.Name.Link,
        Rect=pikepdf.Array([rect.x, rect.y, rect.right, rect.top]),
        Border=pikepdf.Array([0, 0, region.border_width]),
        BS=pikepdf.Dictionary(W=region.border_width),
        A=pikepdf.Dictionary(
            S=pikepdf.Name.URI,
            URI=pikepdf.String(region.url),
        ),
    )
