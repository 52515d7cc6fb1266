# SPDX-License-Identifier: Apache-2.0
"""Tests for the HTTP API."""

from __future__ import annotations

import base64
import json
from io import BytesIO
from typing import Any
from urllib.parse import quote

import pikepdf
import pytest
from fastapi.testclient import TestClient

from pdf_annotator.api.app import create_app
from pdf_annotator.api.routes import content_disposition
from pdf_annotator.api.settings import ServiceSettings, get_settings


@pytest.fixture
def settings() -> ServiceSettings:
    return ServiceSettings(max_upload_bytes=1024 * 1024)


@pytest.fixture
def client(settings: ServiceSettings) -> TestClient:
    app = create_app(settings)
    app.dependency_overrides[get_settings] = lambda: settings
    return TestClient(app)


def _annotation(**overrides: Any) -> dict[str, Any]:
    values: dict[str, Any] = {
        "selectedText": "Reviewed",
        "pageNumber": 1,
        "x": 100,
        "y": 50,
        "width": 100,
        "height": 40,
        "color": "red",
    }
    values.update(overrides)
    return values


def _post_multipart(
    client: TestClient,
    pdf_bytes: bytes,
    annotations: Any,
    filename: str = "report.pdf",
    content_type: str = "application/pdf",
):
    payload = annotations if isinstance(annotations, str) else json.dumps(annotations)
    return client.post(
        "/api/pdf/annotate",
        files={"file": (filename, pdf_bytes, content_type)},
        data={"annotations": payload},
    )


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/api/pdf/health")
        assert response.status_code == 200
        assert response.json() == {
            "status": "UP",
            "service": "PDF Annotation Service",
            "version": "1.0.0",
        }


class TestAnnotateMultipart:
    """Tests for POST /api/pdf/annotate."""

    def test_success(self, client: TestClient, pdf_factory) -> None:
        annotation = _annotation(canvasWidth=400, canvasHeight=300, link="https://example.com")
        response = _post_multipart(client, pdf_factory(width=800, height=600), [annotation])

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert (
            response.headers["content-disposition"]
            == 'attachment; filename="annotated_report.pdf"'
        )
        with pikepdf.open(BytesIO(response.content)) as pdf:
            annot = pdf.pages[0].obj.Annots[0]
            assert [float(v) for v in annot.Rect] == [200.0, 420.0, 400.0, 500.0]

    def test_non_ascii_filename(self, client: TestClient, blank_pdf: bytes) -> None:
        response = _post_multipart(client, blank_pdf, [_annotation()], filename="報告書.pdf")

        assert response.status_code == 200
        assert response.content.startswith(b"%PDF")
        assert response.headers["content-disposition"] == (
            "attachment; filename=\"annotated____.pdf\"; "
            f"filename*=UTF-8''{quote('annotated_報告書.pdf')}"
        )

    def test_unused_client_fields_accepted(self, client: TestClient, blank_pdf: bytes) -> None:
        annotation = _annotation(
            viewportWidth=1024, viewportHeight=768, pdfWidth=612, pdfHeight=792, scale=1.5
        )
        assert _post_multipart(client, blank_pdf, [annotation]).status_code == 200

    def test_empty_file(self, client: TestClient) -> None:
        response = _post_multipart(client, b"", [_annotation()])
        assert response.status_code == 400
        assert response.json() == {"error": "File is empty"}

    def test_not_a_pdf(self, client: TestClient, blank_pdf: bytes) -> None:
        response = _post_multipart(client, blank_pdf, [_annotation()], content_type="text/plain")
        assert response.status_code == 400
        assert response.json() == {"error": "File must be a PDF"}

    def test_too_large(self, client: TestClient) -> None:
        response = _post_multipart(client, b"%PDF" + b"0" * (1024 * 1024), [_annotation()])
        assert response.status_code == 413

    @pytest.mark.parametrize("payload", ["not json", "{\"a\": 1}", "[1,"])
    def test_invalid_annotations_format(
        self, client: TestClient, blank_pdf: bytes, payload: str
    ) -> None:
        response = _post_multipart(client, blank_pdf, payload)
        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid annotations format:")

    @pytest.mark.parametrize(
        ("overrides", "message"),
        [
            ({"selectedText": "  "}, "Selected text is required"),
            ({"pageNumber": 0}, "Valid page number is required"),
            ({"color": ""}, "Color is required"),
            ({"x": None}, "X coordinate is required"),
            ({"width": -5}, "Width and height must not be negative"),
        ],
    )
    def test_annotation_validation(
        self,
        client: TestClient,
        blank_pdf: bytes,
        overrides: dict[str, Any],
        message: str,
    ) -> None:
        response = _post_multipart(client, blank_pdf, [_annotation(), _annotation(**overrides)])
        assert response.status_code == 400
        assert response.json() == {"error": f"Annotation 1: {message}"}

    def test_invalid_page(self, client: TestClient, blank_pdf: bytes) -> None:
        response = _post_multipart(client, blank_pdf, [_annotation(pageNumber=4)])
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid page number: 4 (document has 1 pages)"}

    def test_corrupt_pdf(self, client: TestClient) -> None:
        response = _post_multipart(client, b"not really a pdf", [_annotation()])
        assert response.status_code == 500
        assert response.json()["error"].startswith("Failed to process PDF:")

    def test_cors(self, client: TestClient) -> None:
        response = client.options(
            "/api/pdf/annotate",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert response.status_code == 200
        assert "access-control-allow-origin" in response.headers


class TestAnnotateJson:
    """Tests for POST /api/pdf/annotate-json."""

    def test_success(self, client: TestClient, blank_pdf: bytes, page_text) -> None:
        response = client.post(
            "/api/pdf/annotate-json",
            json={
                "filename": "contract.pdf",
                "document": base64.b64encode(blank_pdf).decode("ascii"),
                "annotations": [_annotation(selectedText="Signed")],
            },
        )
        assert response.status_code == 200
        assert (
            response.headers["content-disposition"]
            == 'attachment; filename="annotated_contract.pdf"'
        )
        assert "Signed" in page_text(response.content)

    def test_invalid_base64(self, client: TestClient) -> None:
        response = client.post(
            "/api/pdf/annotate-json",
            json={"filename": "a.pdf", "document": "***", "annotations": []},
        )
        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid document encoding")

    def test_missing_document(self, client: TestClient) -> None:
        response = client.post("/api/pdf/annotate-json", json={"annotations": []})
        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid request:")

    def test_annotation_validation(self, client: TestClient, blank_pdf: bytes) -> None:
        response = client.post(
            "/api/pdf/annotate-json",
            json={
                "document": base64.b64encode(blank_pdf).decode("ascii"),
                "annotations": [_annotation(pageNumber=-1)],
            },
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Annotation 0: Valid page number is required"}


class TestSettings:
    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PDF_ANNOTATOR_PORT", "9090")
        monkeypatch.setenv("PDF_ANNOTATOR_ALLOWED_ORIGINS", "http://a.test, http://b.test")
        settings = ServiceSettings()
        assert settings.port == 9090
        assert settings.get_origins_list() == ["http://a.test", "http://b.test"]

    def test_default_origins(self) -> None:
        assert ServiceSettings(allowed_origins="").get_origins_list() == ["*"]


class TestServerEntryPoint:
    def test_parse_args(self) -> None:
        from pdf_annotator.api.app import parse_args

        args = parse_args(["--host", "127.0.0.1", "--port", "9000"])
        assert args.host == "127.0.0.1"
        assert args.port == 9000

    def test_main_runs_uvicorn(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from pdf_annotator.api import app as app_module

        calls: list[dict[str, Any]] = []
        monkeypatch.setattr(app_module.uvicorn, "run", lambda app, **kwargs: calls.append(kwargs))
        assert app_module.main(["--port", "9001", "-v"]) == 0
        assert calls == [{"host": app_module.get_settings().host, "port": 9001, "log_level": "debug"}]


class TestContentDisposition:
    """Tests for the attachment header value."""

    def test_ascii_name(self) -> None:
        assert content_disposition("annotated_a.pdf") == 'attachment; filename="annotated_a.pdf"'

    def test_quotes_and_control_characters_removed(self) -> None:
        assert content_disposition('a"b\r\n.pdf') == 'attachment; filename="ab.pdf"'

    def test_non_ascii_name_is_latin1_safe(self) -> None:
        value = content_disposition("annotated_résumé.pdf")
        assert value.startswith('attachment; filename="annotated_r_sum_.pdf"; ')
        assert value.endswith("filename*=UTF-8''annotated_r%C3%A9sum%C3%A9.pdf")
        value.encode("latin-1")
