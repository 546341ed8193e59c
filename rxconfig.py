"""Reflex configuration for the Invoice Editor application."""

import reflex as rx

config = rx.Config(
    app_name="invoice_editor",
    app_module_import="invoice_editor.app",
)
