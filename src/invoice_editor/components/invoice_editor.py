"""
Invoice editor form for Reflex.

Binds customer fields, line item rows, the tax rate and the submit button
to InvoiceEditorState. Totals are read from state and never computed here.
"""

import reflex as rx

from invoice_editor.models.reflex_models import LineItemModel
from invoice_editor.state import InvoiceEditorState


def invoice_editor() -> rx.Component:
    """
    Build the invoice editor card.

    Returns:
        The editor component.
    """
    return rx.box(
        _customer_fields(),
        _line_items(),
        _totals(),
        _submit_row(),
        class_name="card invoice-editor",
    )


def _customer_fields() -> rx.Component:
    return rx.box(
        rx.input(
            placeholder="Customer name",
            value=InvoiceEditorState.customer_name,
            on_change=InvoiceEditorState.edit_customer_name,
        ),
        rx.text_area(
            placeholder="Customer address",
            value=InvoiceEditorState.customer_address,
            on_change=InvoiceEditorState.edit_customer_address,
        ),
        class_name="customer-fields",
    )


def _line_items() -> rx.Component:
    return rx.box(
        rx.foreach(InvoiceEditorState.items, _line_item_row),
        rx.button(
            rx.icon("plus", size=16),
            "Add item",
            on_click=InvoiceEditorState.add_item,
            class_name="add-item-button",
        ),
        class_name="line-items",
    )


def _line_item_row(item: LineItemModel, index: int) -> rx.Component:
    """Build one editable row; index addresses the item in state."""
    return rx.box(
        rx.input(
            value=item.description,
            on_change=lambda value: InvoiceEditorState.update_item(
                index, "description", value
            ),
            class_name="item-description",
        ),
        rx.input(
            type="number",
            min=1,
            value=item.quantity,
            on_change=lambda value: InvoiceEditorState.update_item(
                index, "quantity", value
            ),
            class_name="item-quantity",
        ),
        rx.input(
            type="number",
            min=0,
            step=0.01,
            value=item.unit_price,
            on_change=lambda value: InvoiceEditorState.update_item(
                index, "unitPrice", value
            ),
            class_name="item-unit-price",
        ),
        rx.text(item.formatted_line_total, class_name="item-line-total"),
        rx.button(
            rx.icon("trash-2", size=16),
            on_click=InvoiceEditorState.remove_item(index),
            disabled=~InvoiceEditorState.can_remove_item,
            class_name="remove-item-button",
        ),
        class_name="line-item-row",
    )


def _totals() -> rx.Component:
    return rx.box(
        _totals_row("Subtotal", InvoiceEditorState.formatted_sub_total),
        rx.box(
            rx.text("Tax rate (%)"),
            rx.input(
                type="number",
                min=0,
                value=InvoiceEditorState.tax_rate,
                on_change=InvoiceEditorState.edit_tax_rate,
            ),
            class_name="totals-row",
        ),
        _totals_row("Tax", InvoiceEditorState.formatted_tax_amount),
        _totals_row("Total", InvoiceEditorState.formatted_total_amount),
        class_name="totals",
    )


def _totals_row(label: str, value) -> rx.Component:
    return rx.box(
        rx.text(label),
        rx.text(value, class_name="totals-value"),
        class_name="totals-row",
    )


def _submit_row() -> rx.Component:
    return rx.box(
        rx.button(
            rx.cond(
                InvoiceEditorState.is_submitting,
                rx.spinner(size="2"),
                rx.icon("file-down", size=16),
            ),
            "Generate PDF",
            on_click=InvoiceEditorState.submit,
            disabled=InvoiceEditorState.is_submitting,
        ),
        rx.cond(
            InvoiceEditorState.submission_error != "",
            rx.text(InvoiceEditorState.submission_error, class_name="alert-error"),
        ),
        rx.cond(
            InvoiceEditorState.last_filename != "",
            rx.text(
                "Last generated: ",
                InvoiceEditorState.last_filename,
                class_name="muted",
            ),
        ),
        class_name="submit-row",
    )
