"""Unit tests for the PDF generation services."""

import json
from unittest.mock import patch

import pytest
import requests

from invoice_editor.models import InvoiceModel, LineItem, PdfDocument, SubmissionStatus
from invoice_editor.services import (
    DemoInvoicePdfService,
    HttpInvoicePdfService,
    SubmissionError,
    get_pdf_service,
)
from invoice_editor.services.invoice_pdf_service_demo import PLACEHOLDER_PDF

POST_TARGET = "invoice_editor.services.invoice_pdf_service_http.requests.Session.post"


@pytest.fixture
def payload():
    model = InvoiceModel(
        customer_name="Acme Corp",
        tax_rate=18,
        items=[LineItem("Dev Fee", 1, 500), LineItem("Hosting", 2, 25)],
    )
    return model.to_payload()


@pytest.fixture(autouse=True)
def clear_service_cache():
    get_pdf_service.cache_clear()
    yield
    get_pdf_service.cache_clear()


def _response(status=200, content=b"%PDF-1.4 generated", headers=None):
    response = requests.Response()
    response.status_code = status
    response._content = content
    response.headers.update(
        headers if headers is not None else {"Content-Type": "application/pdf"}
    )
    response.url = "http://backend:8080/api/invoices/pdf"
    return response


class TestHttpInvoicePdfService:
    """Test the HTTP PDF client."""

    def test_init(self):
        service = HttpInvoicePdfService("http://backend:8080/")
        assert service.url == "http://backend:8080/api/invoices/pdf"
        assert service.timeout == 30
        assert service.session.headers["Content-Type"] == "application/json"
        assert service.session.headers["Accept"] == "application/pdf"

    def test_custom_path_under_prefix(self):
        service = HttpInvoicePdfService("http://host/billing", path="/render", timeout=5)
        assert service.url == "http://host/billing/render"
        assert service.timeout == 5

    @patch(POST_TARGET)
    def test_generate_pdf_success(self, mock_post, payload):
        mock_post.return_value = _response()
        service = HttpInvoicePdfService("http://backend:8080")

        document = service.generate_pdf(payload)

        assert isinstance(document, PdfDocument)
        assert document.content == b"%PDF-1.4 generated"
        assert document.is_pdf
        assert document.filename == "invoice.pdf"

        args, kwargs = mock_post.call_args
        assert args == ("http://backend:8080/api/invoices/pdf",)
        assert kwargs["timeout"] == 30
        sent = json.loads(kwargs["data"])
        assert sent == payload
        assert json.loads(sent["itemsPayload"]) == sent["items"]

    @patch(POST_TARGET)
    def test_filename_from_content_disposition(self, mock_post, payload):
        mock_post.return_value = _response(
            headers={
                "Content-Type": "application/pdf",
                "Content-Disposition": 'attachment; filename="INV-42.pdf"',
            }
        )
        document = HttpInvoicePdfService("http://backend:8080").generate_pdf(payload)
        assert document.filename == "INV-42.pdf"

    @pytest.mark.parametrize(
        "header,expected",
        [
            ("attachment; filename*=UTF-8''Rechnung%20M%C3%BCller.pdf", "Rechnung Müller.pdf"),
            (
                "attachment; filename=\"fallback.pdf\"; filename*=UTF-8''INV%2042.pdf",
                "INV 42.pdf",
            ),
            ("attachment; filename*=''plain%2Bname.pdf", "plain+name.pdf"),
            ("inline", "invoice.pdf"),
        ],
    )
    @patch(POST_TARGET)
    def test_extended_filename_is_decoded(self, mock_post, header, expected, payload):
        mock_post.return_value = _response(
            headers={"Content-Type": "application/pdf", "Content-Disposition": header}
        )
        document = HttpInvoicePdfService("http://backend:8080").generate_pdf(payload)
        assert document.filename == expected

    @patch(POST_TARGET)
    def test_unexpected_content_type_still_returned(self, mock_post, payload):
        mock_post.return_value = _response(
            content=b"not really a pdf", headers={"Content-Type": "text/plain"}
        )
        document = HttpInvoicePdfService("http://backend:8080").generate_pdf(payload)
        assert document.content == b"not really a pdf"
        assert not document.is_pdf

    @patch(POST_TARGET)
    def test_error_status(self, mock_post, payload):
        mock_post.return_value = _response(status=500, content=b"boom")
        with pytest.raises(SubmissionError, match="status 500") as exc_info:
            HttpInvoicePdfService("http://backend:8080").generate_pdf(payload)
        assert isinstance(exc_info.value.__cause__, requests.exceptions.HTTPError)

    @patch(POST_TARGET)
    def test_empty_body(self, mock_post, payload):
        mock_post.return_value = _response(content=b"")
        with pytest.raises(SubmissionError, match="empty"):
            HttpInvoicePdfService("http://backend:8080").generate_pdf(payload)

    @patch(POST_TARGET)
    def test_timeout(self, mock_post, payload):
        mock_post.side_effect = requests.exceptions.Timeout()
        with pytest.raises(SubmissionError, match="timed out"):
            HttpInvoicePdfService("http://backend:8080", timeout=2).generate_pdf(payload)

    @patch(POST_TARGET)
    def test_connection_error(self, mock_post, payload):
        mock_post.side_effect = requests.exceptions.ConnectionError("refused")
        with pytest.raises(SubmissionError, match="Failed to connect"):
            HttpInvoicePdfService("http://backend:8080").generate_pdf(payload)

    @patch(POST_TARGET)
    def test_other_request_error(self, mock_post, payload):
        mock_post.side_effect = requests.exceptions.TooManyRedirects()
        with pytest.raises(SubmissionError):
            HttpInvoicePdfService("http://backend:8080").generate_pdf(payload)


class TestDemoInvoicePdfService:
    """Test the offline demo service."""

    def test_returns_placeholder(self, payload):
        service = DemoInvoicePdfService()
        document = service.generate_pdf(payload)
        assert document.content == PLACEHOLDER_PDF
        assert document.is_pdf
        assert service.received == [payload]

    def test_received_payload_is_a_copy(self, payload):
        service = DemoInvoicePdfService()
        service.generate_pdf(payload)
        payload["items"].clear()
        assert len(service.received[0]["items"]) == 2

    def test_fail_mode(self, payload):
        service = DemoInvoicePdfService(fail=True)
        with pytest.raises(SubmissionError):
            service.generate_pdf(payload)
        assert len(service.received) == 1


class TestGetPdfService:
    """Test the service factory."""

    def test_demo(self):
        assert isinstance(get_pdf_service("demo"), DemoInvoicePdfService)

    def test_kind_is_case_insensitive(self):
        assert isinstance(get_pdf_service("DEMO"), DemoInvoicePdfService)

    def test_http_from_environment(self, monkeypatch):
        monkeypatch.setenv("INVOICE_EDITOR_SERVICE", "http")
        monkeypatch.setenv("INVOICE_EDITOR_PDF_URL", "http://pdf.internal:9000")
        monkeypatch.setenv("INVOICE_EDITOR_TIMEOUT", "12")
        service = get_pdf_service()
        assert isinstance(service, HttpInvoicePdfService)
        assert service.url == "http://pdf.internal:9000/api/invoices/pdf"
        assert service.timeout == 12.0

    def test_cached(self):
        assert get_pdf_service("demo") is get_pdf_service("demo")

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown PDF service kind"):
            get_pdf_service("fax")


class TestSubmissionModels:
    """Test the document and submission status models."""

    def test_pdf_content_type_with_parameters(self):
        document = PdfDocument(content=b"x", content_type="application/PDF; charset=binary")
        assert document.is_pdf
        assert document.size == 1

    def test_success_status(self):
        document = PdfDocument(content=b"%PDF", filename="INV-7.pdf")
        status = SubmissionStatus.success(document, fingerprint="abc")
        assert status.succeeded
        assert status.error == ""
        assert (status.filename, status.size, status.fingerprint) == ("INV-7.pdf", 4, "abc")

    def test_failure_status(self):
        status = SubmissionStatus.failure("Could not generate", fingerprint="abc")
        assert not status.succeeded
        assert status.error == "Could not generate"
        assert status.size == 0
