# SPDX-License-Identifier: Apache-2.0
"""Shared fixtures for annotation tests."""

from __future__ import annotations

import ctypes
from io import BytesIO
from typing import Callable

import pypdfium2 as pdfium
import pytest


def build_pdf(pages: int = 1, width: float = 612.0, height: float = 792.0) -> bytes:
    """Create a PDF with ``pages`` blank pages of the given size."""
    pdf = pdfium.PdfDocument.new()
    for _ in range(pages):
        page = pdf.new_page(width, height)
        page.close()
    buffer = BytesIO()
    pdf.save(buffer)
    pdf.close()
    return buffer.getvalue()


@pytest.fixture
def pdf_factory() -> Callable[..., bytes]:
    """Factory for blank PDFs: ``pdf_factory(pages=2, width=800, height=600)``."""
    return build_pdf


@pytest.fixture
def blank_pdf() -> bytes:
    """Single blank US Letter page."""
    return build_pdf()


class FixedWidthMetrics:
    """Font metrics where every character has the same advance."""

    def __init__(
        self,
        char_width: float = 600.0,
        cap_height: float = 700.0,
        descent: float = -200.0,
        name: str = "Fixed",
    ) -> None:
        self._char_width = char_width
        self._cap_height = cap_height
        self._descent = descent
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def cap_height(self) -> float:
        return self._cap_height

    @property
    def descent(self) -> float:
        return self._descent

    def advance_width(self, text: str) -> float:
        return self._char_width * len(text)


@pytest.fixture
def fixed_metrics() -> FixedWidthMetrics:
    """600 units per character (7.2pt per character at 12pt)."""
    return FixedWidthMetrics()


def _rgba(getter, obj_raw) -> tuple[int, int, int, int]:
    channels = [ctypes.c_uint() for _ in range(4)]
    getter(obj_raw, *(ctypes.byref(channel) for channel in channels))
    return tuple(channel.value for channel in channels)  # type: ignore[return-value]


def describe_page_objects(pdf_bytes: bytes, page_number: int = 1) -> list[dict]:
    """Summaries of the page objects on a page of a serialized PDF.

    Path entries carry ``fill`` / ``stroke`` RGBA tuples (None when that
    paint operation is off) and ``stroke_width``.
    """
    pdf = pdfium.PdfDocument(pdf_bytes)
    try:
        page = pdf[page_number - 1]
        summaries: list[dict] = []
        for obj in page.get_objects():
            if obj.type == pdfium.raw.FPDF_PAGEOBJ_TEXT:
                summaries.append({"type": "text"})
            elif obj.type == pdfium.raw.FPDF_PAGEOBJ_PATH:
                fill_mode = ctypes.c_int()
                stroke = ctypes.c_int()
                pdfium.raw.FPDFPath_GetDrawMode(
                    obj.raw, ctypes.byref(fill_mode), ctypes.byref(stroke)
                )
                width = ctypes.c_float()
                pdfium.raw.FPDFPageObj_GetStrokeWidth(obj.raw, ctypes.byref(width))
                summaries.append(
                    {
                        "type": "path",
                        "fill": _rgba(pdfium.raw.FPDFPageObj_GetFillColor, obj.raw)
                        if fill_mode.value
                        else None,
                        "stroke": _rgba(pdfium.raw.FPDFPageObj_GetStrokeColor, obj.raw)
                        if stroke.value
                        else None,
                        "stroke_width": width.value,
                    }
                )
            else:
                summaries.append({"type": "other"})
        page.close()
        return summaries
    finally:
        pdf.close()


def extract_text(pdf_bytes: bytes, page_number: int = 1) -> str:
    """Text of a page of a serialized PDF."""
    pdf = pdfium.PdfDocument(pdf_bytes)
    try:
        page = pdf[page_number - 1]
        textpage = page.get_textpage()
        text = textpage.get_text_range()
        textpage.close()
        page.close()
        return text
    finally:
        pdf.close()


@pytest.fixture
def page_objects() -> Callable[..., list[dict]]:
    return describe_page_objects


@pytest.fixture
def page_text() -> Callable[..., str]:
    return extract_text
