# SPDX-License-Identifier: Apache-2.0
"""ctypes conversion helpers for pypdfium2's raw API."""

from __future__ import annotations

import ctypes

from .models import RGB


def to_widestring(text: str) -> ctypes.Array:
    """Convert a Python string to FPDF_WIDESTRING (UTF-16LE, null terminated).

    Example:
        >>> ws = to_widestring("Hello")
        >>> # ws can now be passed to FPDFText_SetText
    """
    encoded = text.encode("utf-16-le") + b"\x00\x00"
    return (ctypes.c_ushort * (len(encoded) // 2)).from_buffer_copy(encoded)


def to_rgba(color: RGB, alpha: int = 255) -> tuple[int, int, int, int]:
    """Convert a normalized color to the 0-255 RGBA channels PDFium expects."""
    r, g, b = color.to_bytes()
    return r, g, b, alpha
