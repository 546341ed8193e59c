"""
Abstract base class defining the invoice PDF generation contract.

All PDF service implementations must extend InvoicePdfService and provide
generate_pdf(). Every failure to obtain a document is reported through the
single SubmissionError type so callers only handle one condition.

Implementations:
- HttpInvoicePdfService: POSTs the payload to the PDF backend
- DemoInvoicePdfService: Offline placeholder for development/testing
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping

from invoice_editor.models.common import PdfDocument


class SubmissionError(Exception):
    """Raised when an invoice could not be turned into a document."""


class InvoicePdfService(ABC):
    """
    Abstract base class for invoice document generation.

    Subclasses receive the payload produced by InvoiceModel.to_payload()
    and return the rendered document.
    """

    @abstractmethod
    def generate_pdf(self, payload: Mapping[str, Any]) -> PdfDocument:
        """
        Send the invoice payload and return the generated document.

        Args:
            payload: Invoice payload from InvoiceModel.to_payload().

        Raises:
            SubmissionError: If no document could be obtained.
        """

    @property
    def description(self) -> str:
        """Short human-readable name of the backend, used in logs."""
        return type(self).__name__
