"""
Data models and serialization helpers for the Invoice Editor.

This package provides:
- The editable invoice model (InvoiceModel, LineItem, Totals)
- Submission models (PdfDocument, SubmissionStatus)
- Payload serialization for the PDF backend

Reflex row models live in invoice_editor.models.reflex_models and are not
re-exported here so the core stays importable without a running app.
"""

from invoice_editor.models.common import PdfDocument, SubmissionStatus
from invoice_editor.models.invoice import (
    NEW_ITEM_DESCRIPTION,
    InvoiceModel,
    LineItem,
    Totals,
    compute_totals,
    deserialize_items,
    serialize_items,
)

__all__ = [
    "NEW_ITEM_DESCRIPTION",
    "InvoiceModel",
    "LineItem",
    "PdfDocument",
    "SubmissionStatus",
    "Totals",
    "compute_totals",
    "deserialize_items",
    "serialize_items",
]
