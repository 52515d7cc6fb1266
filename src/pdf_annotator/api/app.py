# SPDX-License-Identifier: Apache-2.0
"""FastAPI application and server entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from pdf_annotator import __version__
from pdf_annotator.api.routes import router
from pdf_annotator.api.schemas import describe_validation_error
from pdf_annotator.api.settings import ServiceSettings, get_settings

logger = logging.getLogger(__name__)


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"{location}: {first.get('msg', 'invalid value')}"
    else:
        message = str(exc)
    return JSONResponse(status_code=400, content={"error": f"Invalid request: {message}"})


async def _model_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": f"Invalid request: {describe_validation_error(exc)}"},
    )


def create_app(settings: Optional[ServiceSettings] = None) -> FastAPI:
    """Build the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title="PDF Annotation Service",
        description="Places text annotations onto existing PDF pages",
        version=__version__,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_origins_list(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(ValidationError, _model_validation_error)
    app.include_router(router)
    return app


app = create_app()


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Run the PDF annotation HTTP service.")
    parser.add_argument(
        "--host", default=settings.host, help=f"Bind address (default: {settings.host})"
    )
    parser.add_argument(
        "--port", type=int, default=settings.port, help=f"Port (default: {settings.port})"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    level_name = "DEBUG" if args.verbose else get_settings().log_level.upper()
    logging.basicConfig(
        level=level_name,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("Starting PDF Annotation Service on %s:%d", args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port, log_level=level_name.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
