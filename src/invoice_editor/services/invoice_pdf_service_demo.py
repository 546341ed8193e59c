"""
Demo implementation of InvoicePdfService that never leaves the process.

Useful for:
- Local development without a running PDF backend
- Exercising the editor's submit flow in tests

Every call returns the same placeholder document and remembers the payload
it was given.
"""

import copy
from typing import Any, Mapping

from invoice_editor.lib import logs, objects
from invoice_editor.models.common import PdfDocument
from invoice_editor.services.invoice_pdf_service import (
    InvoicePdfService,
    SubmissionError,
)

LOG = logs.logger(__file__)

PLACEHOLDER_PDF = (
    b"%PDF-1.4\n"
    b"1 0 obj << /Type /Catalog /Pages 2 0 R >> endobj\n"
    b"2 0 obj << /Type /Pages /Kids [] /Count 0 >> endobj\n"
    b"trailer << /Root 1 0 R >>\n"
    b"%%EOF\n"
)


class DemoInvoicePdfService(InvoicePdfService):
    """
    In-memory PDF service returning a placeholder document.

    Attributes:
        received: Copies of every payload passed to generate_pdf().
    """

    def __init__(self, fail: bool = False) -> None:
        """
        Initialize the demo service.

        Args:
            fail: Raise SubmissionError on every call, to preview the
                failure path.
        """
        self.fail = fail
        self.received: list[dict] = []

    def generate_pdf(self, payload: Mapping[str, Any]) -> PdfDocument:
        """Record the payload and return PLACEHOLDER_PDF."""
        self.received.append(copy.deepcopy(dict(payload)))
        LOG.info("generate_pdf - demo fingerprint:%s", objects.fingerprint(payload))
        if self.fail:
            raise SubmissionError("Demo PDF service configured to fail")
        return PdfDocument(content=PLACEHOLDER_PDF)
