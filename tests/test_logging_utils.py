import logging
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from culture_api.observability.logging_utils import (
    init_logging,
    log_event,
    reset_trace_id,
    set_trace_id,
    summarize_text,
)


class LoggingUtilsTests(unittest.TestCase):
    def tearDown(self) -> None:
        init_logging()

    def test_log_path_is_written_even_after_root_basic_config(self) -> None:
        logging.basicConfig(level=logging.INFO)
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "api.log"
            init_logging(log_path=str(log_path))
            token = set_trace_id("trace-123")
            try:
                log_event("geocode_miss", address="nowhere")
            finally:
                reset_trace_id(token)
            init_logging()
            content = log_path.read_text(encoding="utf-8")
        self.assertIn('"event": "geocode_miss"', content)
        self.assertIn("[trace-123]", content)
        self.assertIn('"trace_id": "trace-123"', content)

    def test_reinit_replaces_handler(self) -> None:
        init_logging()
        init_logging()
        self.assertEqual(len(logging.getLogger("culture_api").handlers), 1)

    def test_summarize_text(self) -> None:
        self.assertEqual(summarize_text("abc"), "abc")
        self.assertEqual(summarize_text("x" * 10, limit=4), "xxxx...")
        self.assertEqual(summarize_text(""), "")


if __name__ == "__main__":
    unittest.main()
