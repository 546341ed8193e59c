"""
Reflex state management for the Invoice Editor.

InvoiceEditorState keeps the invoice as plain reactive vars. Each event
copies the vars into an EditorSession, applies exactly one operation and
copies the settled session back, so rendered totals always match the
rendered items.

Submission runs as a background event; a second submit while one is
outstanding is ignored.
"""

import asyncio
import os

import reflex as rx

from invoice_editor.editor import EditorSession, generate_document
from invoice_editor.lib import logs
from invoice_editor.models.invoice import NEW_ITEM_DESCRIPTION
from invoice_editor.models.reflex_models import LineItemModel, line_item_models
from invoice_editor.services import get_pdf_service
from invoice_editor.utils import format_currency

LOG = logs.logger(__file__)

# Configuration from environment
DEFAULT_TAX_RATE = float(os.getenv("INVOICE_EDITOR_DEFAULT_TAX_RATE", "18"))
CURRENCY = os.getenv("INVOICE_EDITOR_CURRENCY", "USD")


def _get_service():
    """Get the configured PDF service (lazy loaded)."""
    return get_pdf_service()


class InvoiceEditorState(rx.State):
    """
    Main application state for the Invoice Editor.

    Handles customer fields, line item edits, totals and submission.
    """

    customer_name: str = ""
    customer_address: str = ""
    tax_rate: float = DEFAULT_TAX_RATE
    items: list[LineItemModel] = [
        LineItemModel(
            description=NEW_ITEM_DESCRIPTION,
            formatted_line_total=format_currency(0, CURRENCY),
        )
    ]

    # Derived totals, written back after every edit
    sub_total: float = 0.0
    tax_amount: float = 0.0
    total_amount: float = 0.0

    # Submission state
    is_submitting: bool = False
    submission_error: str = ""
    last_filename: str = ""

    @rx.var
    def formatted_sub_total(self) -> str:
        return format_currency(self.sub_total, CURRENCY)

    @rx.var
    def formatted_tax_amount(self) -> str:
        return format_currency(self.tax_amount, CURRENCY)

    @rx.var
    def formatted_total_amount(self) -> str:
        return format_currency(self.total_amount, CURRENCY)

    @rx.var
    def can_remove_item(self) -> bool:
        """Check if a line item may be removed (at least one must remain)."""
        return len(self.items) > 1

    @rx.event
    def edit_customer_name(self, value: str):
        self._edit(lambda model: model.set_customer_field("customerName", value))

    @rx.event
    def edit_customer_address(self, value: str):
        self._edit(lambda model: model.set_customer_field("customerAddress", value))

    @rx.event
    def edit_tax_rate(self, value: str):
        """Update the tax rate; unusable input keeps the current rate."""
        self._edit(lambda model: model.set_tax_rate(value))

    @rx.event
    def update_item(self, index: int, field: str, value: str):
        """
        Event handler for edits inside a line item row.

        Args:
            index: Row position.
            field: "description", "quantity" or "unitPrice".
            value: Raw input text.
        """
        self._edit(lambda model: model.update_item(index, field, value))

    @rx.event
    def add_item(self):
        self._edit(lambda model: model.add_item())

    @rx.event
    def remove_item(self, index: int):
        self._edit(lambda model: model.remove_item(index))

    @rx.event(background=True)
    async def submit(self):
        """
        Send the current invoice to the PDF service and download the result.

        The editable state is left untouched on failure so the user can
        correct it and resubmit.
        """
        async with self:
            session = self._session()
            payload = session.begin_submission()
            self._store(session)
        if payload is None:
            return

        try:
            status, document = await asyncio.get_running_loop().run_in_executor(
                None, generate_document, _get_service(), payload
            )
        except Exception:
            async with self:
                self.is_submitting = False
            raise

        async with self:
            session = self._session()
            session.finish_submission(status)
            self._store(session)
        if document is None:
            return
        return rx.download(data=document.content, filename=document.filename)

    def _edit(self, operation):
        session = self._session()
        session.edit(operation)
        self._store(session)

    def _session(self) -> EditorSession:
        """Copy the current vars into an editor session."""
        return EditorSession(
            customer_name=self.customer_name,
            customer_address=self.customer_address,
            tax_rate=self.tax_rate,
            items=[row.to_line_item() for row in self.items],
            sub_total=self.sub_total,
            tax_amount=self.tax_amount,
            total_amount=self.total_amount,
            is_submitting=self.is_submitting,
            submission_error=self.submission_error,
            last_filename=self.last_filename,
        )

    def _store(self, session: EditorSession):
        """Write a settled editor session back into the vars."""
        self.customer_name = session.customer_name
        self.customer_address = session.customer_address
        self.tax_rate = session.tax_rate
        self.items = line_item_models(session.items, CURRENCY)
        self.sub_total = session.sub_total
        self.tax_amount = session.tax_amount
        self.total_amount = session.total_amount
        self.is_submitting = session.is_submitting
        self.submission_error = session.submission_error
        self.last_filename = session.last_filename
