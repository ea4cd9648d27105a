import logging
import unittest

from checkcors.logfmt import LogfmtFormatter, format_value


class LogfmtTests(unittest.TestCase):
    def test_format_value_quotes_when_needed(self) -> None:
        self.assertEqual(format_value("GET"), "GET")
        self.assertEqual(format_value(""), '""')
        self.assertEqual(format_value("GET, POST"), '"GET, POST"')
        self.assertEqual(format_value('say "hi"'), '"say \\"hi\\""')

    def test_record_renders_extra_fields(self) -> None:
        logger = logging.getLogger("checkcors.test")
        record = logger.makeRecord(
            "checkcors.test",
            logging.ERROR,
            __file__,
            1,
            "header mismatch",
            (),
            None,
            extra={"url": "https://b.example", "header": "Access-Control-Allow-Methods", "got": ""},
        )
        line = LogfmtFormatter().format(record)

        self.assertIn('level=ERROR msg="header mismatch"', line)
        self.assertIn("url=https://b.example", line)
        self.assertIn("header=Access-Control-Allow-Methods", line)
        self.assertTrue(line.endswith('got=""'))
        self.assertTrue(line.startswith("time="))


if __name__ == "__main__":
    unittest.main()
