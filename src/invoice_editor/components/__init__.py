"""
Reflex UI components for the Invoice Editor.

- invoice_editor: Customer fields, line item rows, totals and submit button
"""

from invoice_editor.components.invoice_editor import invoice_editor

__all__ = ["invoice_editor"]
