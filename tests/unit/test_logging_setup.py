import io
import json
import logging
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))

from debtbomb_core import logging_setup


class LoggingSetupTests(unittest.TestCase):
    def setUp(self):
        self.logger = logging.getLogger("debtbomb")
        self._saved = list(self.logger.handlers)
        self.logger.handlers.clear()

    def tearDown(self):
        for handler in self.logger.handlers:
            handler.close()
        self.logger.handlers[:] = self._saved

    def test_json_formatter(self):
        record = logging.LogRecord("debtbomb", logging.INFO, __file__, 1, "hello", None, None)
        record.event = "install_complete"
        payload = json.loads(logging_setup.JsonFormatter().format(record))
        self.assertEqual(payload["msg"], "hello")
        self.assertEqual(payload["event"], "install_complete")
        self.assertEqual(payload["level"], "INFO")

    def test_configure_is_idempotent_and_writes_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            with patch.object(logging_setup, "data_root", return_value=Path(tmp)):
                first = logging_setup.configure_logging(console=False)
                second = logging_setup.configure_logging(console=False)
                first.info("hello", extra={"event": "test"})
            self.assertIs(first, second)
            self.assertEqual(len(first.handlers), 1)
            for handler in first.handlers:
                handler.flush()
                handler.close()
            text = (Path(tmp) / "logs" / "debtbomb.log").read_text(encoding="utf-8")
            self.assertIn('"event": "test"', text)

    def test_file_only_records_skip_console(self):
        err = io.StringIO()
        with tempfile.TemporaryDirectory() as tmp:
            with patch.object(logging_setup, "data_root", return_value=Path(tmp)), patch("sys.stderr", err):
                logger = logging_setup.configure_logging(console=True)
                logger.error("download failed", extra={"file_only": True})
                logger.warning("no published checksum")
            for handler in logger.handlers:
                handler.close()
        self.assertNotIn("download failed", err.getvalue())
        self.assertIn("no published checksum", err.getvalue())

    def test_unwritable_log_dir_does_not_raise(self):
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "root"
            blocker.write_text("file", encoding="utf-8")
            with patch.object(logging_setup, "data_root", return_value=blocker):
                logger = logging_setup.configure_logging(console=False)
            self.assertIsInstance(logger.handlers[0], logging.NullHandler)


if __name__ == "__main__":
    unittest.main()
