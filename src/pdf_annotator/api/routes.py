# SPDX-License-Identifier: Apache-2.0
"""
PDF annotation endpoints.

Both upload variants share one flow: validate the request, apply the
annotations in order and return the annotated PDF as an attachment.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import threading
from pathlib import PurePath
from typing import List
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from pdf_annotator import __version__
from pdf_annotator.api.schemas import (
    AnnotateJsonBody,
    RequestValidationFailure,
    parse_annotations,
)
from pdf_annotator.api.settings import ServiceSettings, get_settings
from pdf_annotator.core.composer import ComposerConfig
from pdf_annotator.core.errors import (
    AnnotationError,
    DocumentCodecFailure,
    InvalidPageReference,
)
from pdf_annotator.core.models import AnnotationSpec
from pdf_annotator.pipeline import AnnotationPipeline

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/pdf", tags=["pdf"])

PDF_CONTENT_TYPE = "application/pdf"

# PDFium is not thread-safe; sync endpoints run in a worker pool
_PDFIUM_LOCK = threading.Lock()


def content_disposition(filename: str) -> str:
    """Attachment header value safe for latin-1 encoding.

    Names outside ASCII get an ASCII fallback plus an RFC 5987 ``filename*``.
    """
    name = "".join(ch for ch in filename if ch not in '"\\' and ord(ch) >= 32)
    ascii_name = name.encode("ascii", "replace").decode("ascii").replace("?", "_")
    if ascii_name == name:
        return f'attachment; filename="{name}"'
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(name)}"


def _check_upload(data: bytes, content_type: str | None, settings: ServiceSettings) -> None:
    if not data:
        raise HTTPException(status_code=400, detail="File is empty")
    if content_type != PDF_CONTENT_TYPE:
        raise HTTPException(status_code=400, detail="File must be a PDF")
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File exceeds maximum upload size of {settings.max_upload_bytes} bytes",
        )


def _validated_specs(items: list) -> List[AnnotationSpec]:
    try:
        return parse_annotations(items)
    except RequestValidationFailure as exc:
        raise HTTPException(status_code=400, detail=str(exc))


def _annotated_response(
    pdf_bytes: bytes,
    specs: List[AnnotationSpec],
    filename: str,
    settings: ServiceSettings,
) -> Response:
    pipeline = AnnotationPipeline(
        config=ComposerConfig(default_font_size=settings.default_font_size)
    )
    try:
        with _PDFIUM_LOCK:
            result = pipeline.annotate(pdf_bytes, specs)
    except InvalidPageReference as exc:
        logger.warning("Rejected annotation batch for %s: %s", filename, exc)
        raise HTTPException(status_code=400, detail=str(exc))
    except DocumentCodecFailure as exc:
        logger.error("Failed to process %s: %s", filename, exc)
        raise HTTPException(status_code=500, detail=f"Failed to process PDF: {exc}")
    except AnnotationError as exc:
        logger.exception("Annotation failed for %s (stage=%s)", filename, exc.stage)
        raise HTTPException(status_code=500, detail="Internal server error")

    logger.info(
        "Annotated %s: %d annotation(s), %d link(s), %d truncated",
        filename,
        result.stats["annotations"],
        result.stats["links"],
        result.stats["truncated"],
    )
    base_name = PurePath(filename).name or "document.pdf"
    return Response(
        content=result.pdf_bytes,
        media_type=PDF_CONTENT_TYPE,
        headers={"Content-Disposition": content_disposition(f"annotated_{base_name}")},
    )


@router.post("/annotate")
def annotate(
    file: UploadFile = File(...),
    annotations: str = Form(...),
    settings: ServiceSettings = Depends(get_settings),
):
    """Annotate an uploaded PDF. ``annotations`` is a JSON array string."""
    data = file.file.read()
    _check_upload(data, file.content_type, settings)

    try:
        items = json.loads(annotations)
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid annotations format: {exc}")
    if not isinstance(items, list):
        raise HTTPException(
            status_code=400,
            detail="Invalid annotations format: expected a JSON array",
        )

    specs = _validated_specs(items)
    logger.info(
        "Received %s (%d bytes) with %d annotation(s)", file.filename, len(data), len(specs)
    )
    return _annotated_response(data, specs, file.filename or "document.pdf", settings)


@router.post("/annotate-json")
def annotate_json(
    body: AnnotateJsonBody,
    settings: ServiceSettings = Depends(get_settings),
):
    """Annotate a base64 encoded PDF sent in a JSON body."""
    try:
        data = base64.b64decode(body.document, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise HTTPException(status_code=400, detail=f"Invalid document encoding: {exc}")
    _check_upload(data, PDF_CONTENT_TYPE, settings)

    specs = _validated_specs(body.annotations)
    logger.info(
        "Received %s (%d bytes) with %d annotation(s)", body.filename, len(data), len(specs)
    )
    return _annotated_response(data, specs, body.filename, settings)


@router.get("/health")
def health():
    return {"status": "UP", "service": "PDF Annotation Service", "version": __version__}
