"""
Reflex-compatible models for the Invoice Editor.

These models extend rx.Base so they can be used with rx.foreach and
other Reflex reactive components.
"""

from typing import Iterable

import reflex as rx

from invoice_editor.models.invoice import LineItem
from invoice_editor.utils import format_currency


class LineItemModel(rx.Base):
    """Line item row as rendered by the editor."""

    description: str = ""
    quantity: int = 1
    unit_price: float = 0.0
    line_total: float = 0.0
    formatted_line_total: str = ""

    def to_line_item(self) -> LineItem:
        """Convert back into a domain line item (clamping applies)."""
        return LineItem(
            description=self.description,
            quantity=self.quantity,
            unit_price=self.unit_price,
        )


def line_item_models(
    items: Iterable[LineItem], currency: str = "USD"
) -> list[LineItemModel]:
    """
    Convert line items into LineItemModel rows.

    Args:
        items: Settled line items in display order.
        currency: Currency code for the formatted line total.

    Returns:
        Rows in display order.
    """
    return [
        LineItemModel(
            description=item.description,
            quantity=item.quantity,
            unit_price=item.unit_price,
            line_total=item.line_total,
            formatted_line_total=format_currency(item.line_total, currency),
        )
        for item in items
    ]
