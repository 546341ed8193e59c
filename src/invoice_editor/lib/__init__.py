"""
Local library modules shared across the Invoice Editor.

Modules:
    logs: Logging utilities
    objects: JSON serialization and payload fingerprints
"""

from invoice_editor.lib import logs, objects

__all__ = ["logs", "objects"]
