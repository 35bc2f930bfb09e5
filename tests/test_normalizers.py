import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from culture_api.domain.normalizers import (
    SchemaField,
    as_confidence,
    as_hex_color,
    as_month_day,
    as_monthly_series,
    as_number,
    as_postal_code,
    as_text,
    normalize_fields,
)


class CoercerTests(unittest.TestCase):
    def test_month_day(self) -> None:
        self.assertEqual(as_month_day("09-15"), "09-15")
        self.assertIsNone(as_month_day("9-15"))
        self.assertIsNone(as_month_day("13-01"))
        self.assertIsNone(as_month_day("2024-09-15"))
        self.assertIsNone(as_month_day(915))

    def test_hex_color(self) -> None:
        self.assertEqual(as_hex_color("#D4A017"), "#D4A017")
        self.assertIsNone(as_hex_color("D4A017"))
        self.assertIsNone(as_hex_color("#FFF"))

    def test_confidence(self) -> None:
        self.assertEqual(as_confidence("Medium"), "medium")
        self.assertIsNone(as_confidence("certain"))

    def test_number_rejects_bool_and_text(self) -> None:
        self.assertEqual(as_number(0), 0)
        self.assertEqual(as_number(48.85), 48.85)
        self.assertIsNone(as_number(True))
        self.assertIsNone(as_number("48.85"))
        self.assertIsNone(as_number(float("nan")))

    def test_postal_code(self) -> None:
        self.assertEqual(as_postal_code("80000"), "80000")
        self.assertEqual(as_postal_code(75001), "75001")
        self.assertEqual(as_postal_code(75001.0), "75001")
        self.assertIsNone(as_postal_code(None))

    def test_monthly_series(self) -> None:
        values = [3, 4, 7.5, 10, 14, 17, 19, 19, 16, 12, 7, 4]
        self.assertEqual(as_monthly_series(values), values)
        self.assertIsNone(as_monthly_series(values[:11]))
        self.assertIsNone(as_monthly_series(values[:11] + ["4"]))
        self.assertIsNone(as_monthly_series("3,4,7"))


class NormalizeFieldsTests(unittest.TestCase):
    def test_defaults_fill_missing_and_wrong_types(self) -> None:
        fields = [
            SchemaField("culture", as_text, "wheat"),
            SchemaField("region", as_text, ""),
            SchemaField("confidence", as_confidence, "low"),
        ]
        result = normalize_fields({"region": 12, "confidence": "high"}, fields)
        self.assertEqual(result, {"culture": "wheat", "region": "", "confidence": "high"})
        self.assertEqual(list(result), ["culture", "region", "confidence"])


if __name__ == "__main__":
    unittest.main()
