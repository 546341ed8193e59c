"""
Reflex application entry point for the Invoice Editor.

This module initializes the Reflex app and defines the main page layout.
"""

import os

import reflex as rx

from invoice_editor.components import invoice_editor
from invoice_editor.lib import logs

LOG = logs.logger(__file__)

# Configuration from environment
APP_PORT = int(os.getenv("INVOICE_EDITOR_PORT", "8000"))
APP_TITLE = "Invoice Editor"


def index() -> rx.Component:
    """Build the main page with the editor card."""
    return rx.box(
        rx.heading(APP_TITLE, size="6", as_="h1"),
        invoice_editor(),
        class_name="app-container",
    )


app = rx.App(
    theme=rx.theme(
        appearance="light",
        has_background=True,
        radius="large",
    ),
)

app.add_page(index, title=APP_TITLE)


def main() -> None:
    """Entrypoint used by `invoice-editor` console script."""
    import subprocess
    import sys

    LOG.info("Starting reflex on port %s", APP_PORT)
    subprocess.run(
        [sys.executable, "-m", "reflex", "run", "--frontend-port", str(APP_PORT)]
    )


if __name__ == "__main__":
    main()
