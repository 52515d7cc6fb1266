# SPDX-License-Identifier: Apache-2.0
"""Core annotation placement modules."""

from .colors import ColorResolver
from .composer import AnnotationComposer, ComposedAnnotation, ComposerConfig
from .coordinates import CoordinateMapper, MappingResult
from .document import AnnotationDocument
from .errors import (
    AnnotationError,
    DocumentCodecFailure,
    InvalidPageReference,
    UnexpectedFailure,
)
from .fonts import FontFace, FontMetrics, FontResolver, StandardFontMetrics
from .models import (
    RGB,
    AnnotationSpec,
    CoordinateSpace,
    LayoutResult,
    LinkRegion,
    PageDimensions,
    Rect,
    ResolvedStyle,
    SurfaceSize,
    TextLine,
)
from .observer import AnnotationObserver
from .text_layout import TextLayoutEngine

__all__ = [
    "AnnotationComposer",
    "AnnotationDocument",
    "AnnotationError",
    "AnnotationObserver",
    "AnnotationSpec",
    "ColorResolver",
    "ComposedAnnotation",
    "ComposerConfig",
    "CoordinateMapper",
    "CoordinateSpace",
    "DocumentCodecFailure",
    "FontFace",
    "FontMetrics",
    "FontResolver",
    "InvalidPageReference",
    "LayoutResult",
    "LinkRegion",
    "MappingResult",
    "PageDimensions",
    "RGB",
    "Rect",
    "ResolvedStyle",
    "StandardFontMetrics",
    "SurfaceSize",
    "TextLayoutEngine",
    "TextLine",
    "UnexpectedFailure",
]
