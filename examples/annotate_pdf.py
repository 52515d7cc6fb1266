#!/usr/bin/env python3
# SPDX-License-Identifier: Apache-2.0
"""Annotation sample script.

Builds a two-page sample PDF and places a few annotations on it: one in
page coordinates, one measured on a half-size browser canvas, and one
with a border and link.

Usage:
    cd examples
    python annotate_pdf.py
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path

import pypdfium2 as pdfium

from pdf_annotator.api.schemas import parse_annotations
from pdf_annotator.pipeline import AnnotationPipeline

OUTPUT_DIR = Path(__file__).parent / "output"

ANNOTATIONS = [
    {
        "selectedText": "Approved for release",
        "pageNumber": 1,
        "x": 72,
        "y": 72,
        "width": 220,
        "height": 40,
        "color": "darkgray",
        "fontStyle": "bold",
        "fontSize": 14,
        "backgroundColor": "#ffffcc",
    },
    {
        "selectedText": "Measured on a 306x396 canvas",
        "pageNumber": 1,
        "x": 36,
        "y": 300,
        "width": 120,
        "height": 30,
        "color": "#036",
        "fontStyle": "times-italic",
        "canvasWidth": 306,
        "canvasHeight": 396,
    },
    {
        "selectedText": "See the project page for details",
        "pageNumber": 2,
        "x": 100,
        "y": 100,
        "width": 180,
        "height": 50,
        "color": "blue",
        "borderColor": "red",
        "borderWidth": 2,
        "link": "https://example.com",
    },
]


def build_sample_pdf() -> bytes:
    pdf = pdfium.PdfDocument.new()
    for _ in range(2):
        pdf.new_page(612, 792).close()
    buffer = BytesIO()
    pdf.save(buffer)
    pdf.close()
    return buffer.getvalue()


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")

    specs = parse_annotations(ANNOTATIONS)
    output_path = OUTPUT_DIR / "annotated_sample.pdf"
    result = AnnotationPipeline().annotate(build_sample_pdf(), specs, output_path=output_path)

    print(f"Output: {output_path}")
    for key, value in result.stats.items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
