"""
Reflex-free editor session backing InvoiceEditorState.

EditorSession mirrors the state's vars as plain Python values. The reflex
state copies its vars into a session, runs one operation and copies the
session back, so the edit/settle cycle and the submission guard can be
exercised without a running app.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from invoice_editor.lib import logs, objects
from invoice_editor.models.common import PdfDocument, SubmissionStatus
from invoice_editor.models.invoice import NEW_ITEM_DESCRIPTION, InvoiceModel, LineItem
from invoice_editor.services.invoice_pdf_service import (
    InvoicePdfService,
    SubmissionError,
)

LOG = logs.logger(__file__)

SUBMISSION_FAILED_MESSAGE = "Could not generate the invoice PDF. Please try again."


def _seed_items() -> list[LineItem]:
    return [LineItem(description=NEW_ITEM_DESCRIPTION)]


@dataclass
class EditorSession:
    """
    Editable invoice fields plus submission flags.

    Attributes:
        customer_name: Customer name as typed.
        customer_address: Customer address as typed.
        tax_rate: Current tax percentage.
        items: Line items in display order.
        sub_total: Settled subtotal.
        tax_amount: Settled tax amount.
        total_amount: Settled grand total.
        is_submitting: True while a submission is outstanding.
        submission_error: User-facing message of the last failed submission.
        last_filename: Filename of the last generated document.
    """

    customer_name: str = ""
    customer_address: str = ""
    tax_rate: float = 0.0
    items: list[LineItem] = field(default_factory=_seed_items)
    sub_total: float = 0.0
    tax_amount: float = 0.0
    total_amount: float = 0.0
    is_submitting: bool = False
    submission_error: str = ""
    last_filename: str = ""

    def model(self) -> InvoiceModel:
        """Rebuild the invoice model from the session fields."""
        return InvoiceModel(
            customer_name=self.customer_name,
            customer_address=self.customer_address,
            tax_rate=self.tax_rate,
            items=self.items,
        )

    def settle(self, model: InvoiceModel) -> None:
        """Copy a settled model, totals included, into the session."""
        self.customer_name = model.customer_name
        self.customer_address = model.customer_address
        self.tax_rate = model.tax_rate
        self.items = list(model.items)
        self.sub_total = model.sub_total
        self.tax_amount = model.tax_amount
        self.total_amount = model.total_amount

    def edit(self, operation: Callable[[InvoiceModel], Any]) -> Any:
        """
        Apply one model operation and settle the result.

        Args:
            operation: Callable receiving the rebuilt InvoiceModel.

        Returns:
            Whatever the operation returned.
        """
        model = self.model()
        result = operation(model)
        self.settle(model)
        return result

    def begin_submission(self) -> dict | None:
        """
        Mark a submission as outstanding and return the payload to send.

        Returns:
            The invoice payload, or None if a submission is already running.
        """
        if self.is_submitting:
            LOG.info("Submit ignored - submission already in progress")
            return None
        self.is_submitting = True
        self.submission_error = ""
        return self.model().to_payload()

    def finish_submission(self, status: SubmissionStatus) -> None:
        """Record a submission outcome; editable fields are left as they are."""
        self.is_submitting = False
        if status.succeeded:
            self.last_filename = status.filename
        else:
            self.submission_error = status.error


def generate_document(
    service: InvoicePdfService, payload: Mapping[str, Any]
) -> tuple[SubmissionStatus, PdfDocument | None]:
    """
    Ask the service for a document and describe the outcome.

    SubmissionError is turned into a failed status; anything else
    propagates.

    Args:
        service: PDF service to call.
        payload: Payload from EditorSession.begin_submission().

    Returns:
        The submission status and the document (None on failure).
    """
    fingerprint = objects.fingerprint(payload)
    try:
        document = service.generate_pdf(payload)
    except SubmissionError as e:
        LOG.error("Submission failed: %s", e, exc_info=True)
        return SubmissionStatus.failure(SUBMISSION_FAILED_MESSAGE, fingerprint), None

    status = SubmissionStatus.success(document, fingerprint)
    LOG.info(
        "Submission complete - filename:%s size:%s fingerprint:%s",
        status.filename,
        status.size,
        status.fingerprint,
    )
    return status, document
