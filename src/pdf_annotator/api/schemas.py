# SPDX-License-Identifier: Apache-2.0
"""
Request schemas for the annotation API.
Field names follow the camelCase keys browser clients send.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from pdf_annotator.core.models import AnnotationSpec, CoordinateSpace, Rect, SurfaceSize


class AnnotationRequest(BaseModel):
    """
    One annotation as submitted by a client.

    Coordinates are in the client's top-left-origin convention. When both
    canvas dimensions are present they are canvas pixels, otherwise page points.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    selected_text: Optional[str] = Field(None, alias="selectedText")
    page_number: Optional[int] = Field(None, alias="pageNumber")
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    color: Optional[str] = None

    link: Optional[str] = None
    font_style: Optional[str] = Field(None, alias="fontStyle")
    font_size: Optional[float] = Field(None, alias="fontSize")
    background_color: Optional[str] = Field(None, alias="backgroundColor")
    border_color: Optional[str] = Field(None, alias="borderColor")
    border_width: Optional[float] = Field(None, alias="borderWidth")

    canvas_width: Optional[float] = Field(None, alias="canvasWidth")
    canvas_height: Optional[float] = Field(None, alias="canvasHeight")

    # Sent by some clients; not used for placement
    viewport_width: Optional[float] = Field(None, alias="viewportWidth")
    viewport_height: Optional[float] = Field(None, alias="viewportHeight")
    pdf_width: Optional[float] = Field(None, alias="pdfWidth")
    pdf_height: Optional[float] = Field(None, alias="pdfHeight")
    scale: Optional[float] = None

    @model_validator(mode="after")
    def check_required(self) -> "AnnotationRequest":
        if self.selected_text is None or not self.selected_text.strip():
            raise ValueError("Selected text is required")
        if self.page_number is None or self.page_number < 1:
            raise ValueError("Valid page number is required")
        for name, label in (
            ("x", "X coordinate"),
            ("y", "Y coordinate"),
            ("width", "Width"),
            ("height", "Height"),
        ):
            if getattr(self, name) is None:
                raise ValueError(f"{label} is required")
        if self.width < 0 or self.height < 0:
            raise ValueError("Width and height must not be negative")
        if self.color is None or not self.color.strip():
            raise ValueError("Color is required")
        return self

    def to_spec(self) -> AnnotationSpec:
        """Convert to the core annotation input."""
        surface = None
        if self.canvas_width is not None and self.canvas_height is not None:
            surface = SurfaceSize(self.canvas_width, self.canvas_height)
        space = CoordinateSpace.SURFACE if surface is not None else CoordinateSpace.PAGE
        return AnnotationSpec(
            text=self.selected_text,
            page_number=self.page_number,
            rect=Rect(x=self.x, y=self.y, width=self.width, height=self.height, space=space),
            color=self.color,
            link=self.link,
            font_style=self.font_style,
            font_size=self.font_size,
            background_color=self.background_color,
            border_color=self.border_color,
            border_width=self.border_width,
            surface=surface,
        )


class AnnotateJsonBody(BaseModel):
    """Body of the JSON variant: a base64 encoded PDF plus its annotations."""

    filename: str = Field("document.pdf", min_length=1)
    document: str = Field(..., min_length=1, description="Base64 encoded PDF")
    annotations: List[dict] = Field(default_factory=list)


class RequestValidationFailure(ValueError):
    """An annotation failed validation; ``index`` is its position in the list."""

    def __init__(self, index: int, message: str) -> None:
        super().__init__(f"Annotation {index}: {message}")
        self.index = index


def describe_validation_error(exc: ValidationError) -> str:
    """First error of a ValidationError as a short, human readable message."""
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    message = first.get("msg", "invalid value")
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "__root__")
    return f"{location}: {message}" if location else message


def parse_annotations(items: list) -> List[AnnotationSpec]:
    """
    Validate raw annotation dictionaries in order.

    Raises:
        RequestValidationFailure: For the first annotation that fails.
    """
    specs: List[AnnotationSpec] = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise RequestValidationFailure(index, "Annotation must be an object")
        try:
            request = AnnotationRequest.model_validate(item)
        except ValidationError as exc:
            raise RequestValidationFailure(index, describe_validation_error(exc)) from exc
        specs.append(request.to_spec())
    return specs
