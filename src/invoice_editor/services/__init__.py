"""
Service factory for the Invoice Editor.

This module provides the get_pdf_service() factory function that returns
the appropriate InvoicePdfService implementation based on configuration.

Available Implementations:
- http: Posts invoices to the PDF backend (INVOICE_EDITOR_PDF_URL)
- demo: Returns a placeholder document without any network access

The service is cached at the module level, so the same instance is reused
across all requests. Configure via INVOICE_EDITOR_SERVICE environment variable.
"""

import os
from functools import cache
from typing import Callable, Dict

from invoice_editor.lib import logs
from invoice_editor.services.invoice_pdf_service import (
    InvoicePdfService,
    SubmissionError,
)
from invoice_editor.services.invoice_pdf_service_demo import DemoInvoicePdfService
from invoice_editor.services.invoice_pdf_service_http import (
    DEFAULT_PATH,
    DEFAULT_TIMEOUT,
    HttpInvoicePdfService,
)

LOG = logs.logger(__file__)


def _http_service() -> HttpInvoicePdfService:
    return HttpInvoicePdfService(
        base_url=os.getenv("INVOICE_EDITOR_PDF_URL", "http://localhost:8080"),
        path=os.getenv("INVOICE_EDITOR_PDF_PATH", DEFAULT_PATH),
        timeout=float(os.getenv("INVOICE_EDITOR_TIMEOUT", str(DEFAULT_TIMEOUT))),
    )


_SERVICE_REGISTRY: Dict[str, Callable[[], InvoicePdfService]] = {
    "http": _http_service,
    "demo": lambda: DemoInvoicePdfService(),
}


@cache
def get_pdf_service(kind: str | None = None) -> InvoicePdfService:
    """Return the configured PDF service implementation."""
    resolved_kind = (kind or os.getenv("INVOICE_EDITOR_SERVICE", "http")).lower()
    LOG.info("get_pdf_service - kind:%s resolved_kind:%s", kind, resolved_kind)
    try:
        factory = _SERVICE_REGISTRY[resolved_kind]
    except KeyError as exc:
        msg = f"Unknown PDF service kind: {resolved_kind}"
        raise ValueError(msg) from exc
    service = factory()
    LOG.info("get_pdf_service - using %s", service.description)
    return service


__all__ = [
    "DemoInvoicePdfService",
    "HttpInvoicePdfService",
    "InvoicePdfService",
    "SubmissionError",
    "get_pdf_service",
]
