"""Unit tests for the local library helpers."""

import json
import logging
from dataclasses import dataclass

from invoice_editor.lib import logs, objects


@dataclass
class _Sample:
    name: str
    amount: float


class TestObjects:
    """Test JSON helpers and fingerprints."""

    def test_to_json_dataclass(self):
        assert json.loads(objects.to_json(_Sample("a", 1.5))) == {"name": "a", "amount": 1.5}

    def test_to_json_nested_to_dict(self):
        class _WithToDict:
            def to_dict(self):
                return {"x": 1}

        assert json.loads(objects.to_json({"value": _WithToDict()})) == {"value": {"x": 1}}

    def test_from_json(self):
        assert objects.from_json(objects.to_json([1, "two"])) == [1, "two"]

    def test_fingerprint_ignores_key_order(self):
        assert objects.fingerprint({"a": 1, "b": 2}) == objects.fingerprint({"b": 2, "a": 1})

    def test_fingerprint_changes_with_content(self):
        assert objects.fingerprint({"a": 1}) != objects.fingerprint({"a": 2})

    def test_fingerprint_length(self):
        assert len(objects.fingerprint({"a": 1})) == 12
        assert len(objects.fingerprint({"a": 1}, length=20)) == 20


class TestLogs:
    """Test the logger factory."""

    def test_file_path_becomes_child_logger(self):
        log = logs.logger("/some/path/invoice_widget.py")
        assert log.name == "invoice_editor.invoice_widget"

    def test_qualified_name_kept(self):
        assert logs.logger("invoice_editor.state").name == "invoice_editor.state"

    def test_single_handler_on_package_logger(self):
        logs.logger("first_module")
        logs.logger("second_module")
        root = logging.getLogger(logs.ROOT_NAME)
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)
        assert logs.logger("first_module").handlers == []
