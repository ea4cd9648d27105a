import tempfile
import unittest
from pathlib import Path

from checkcors.models import RequestHeadersError, load_request_headers


class RequestHeadersTests(unittest.TestCase):
    def _load(self, text: str):
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "headers.json"
            path.write_text(text, encoding="utf-8")
            return load_request_headers(path)

    def test_string_and_list_values(self) -> None:
        headers = self._load('{"X-Test": "1", "Accept": ["text/html", "application/json"]}')
        out = headers.to_headers()

        self.assertEqual(out["x-test"], "1")
        self.assertEqual(out["Accept"], "text/html, application/json")
        self.assertEqual(len(out), 2)

    def test_malformed_json_fails(self) -> None:
        with self.assertRaises(RequestHeadersError) as ctx:
            self._load('{"X-Test": ')
        self.assertIn("invalid JSON", str(ctx.exception))

    def test_non_object_fails(self) -> None:
        with self.assertRaises(RequestHeadersError):
            self._load('["X-Test", "1"]')

    def test_non_string_value_fails(self) -> None:
        with self.assertRaises(RequestHeadersError):
            self._load('{"X-Test": 1}')

    def test_missing_file_fails(self) -> None:
        with self.assertRaises(RequestHeadersError):
            load_request_headers("/nonexistent/checkcors/headers.json")


if __name__ == "__main__":
    unittest.main()
