"""
Invoice Editor: a Reflex application for building invoices and requesting PDFs.

Subpackages:
- models: Editable invoice model and payload serialization
- services: PDF generation backends (HTTP and demo)
- components: Reflex UI components
- lib: Logging and serialization helpers

Main entry points:
- app.main(): Start the development server
- models.InvoiceModel: The editing core, usable without Reflex
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
