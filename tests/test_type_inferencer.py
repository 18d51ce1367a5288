from __future__ import annotations

import unittest

from datamesh.analysis.type_inferencer import TypeInferencer
from datamesh.domain.cells import ABSENT, BooleanCell, NumberCell, TextCell
from datamesh.domain.tabular import ColumnType


class TestTypeInferencer(unittest.TestCase):
    def setUp(self) -> None:
        self.inferencer = TypeInferencer()

    def test_empty_column_is_unknown(self) -> None:
        self.assertEqual(self.inferencer.infer([]), ColumnType.UNKNOWN)
        self.assertEqual(self.inferencer.infer([ABSENT, ABSENT]), ColumnType.UNKNOWN)

    def test_all_booleans(self) -> None:
        cells = [BooleanCell(True), ABSENT, BooleanCell(False)]
        self.assertEqual(self.inferencer.infer(cells), ColumnType.BOOLEAN)

    def test_all_numbers_ignore_absent(self) -> None:
        cells = [NumberCell(1.0), ABSENT, NumberCell(2.5)]
        self.assertEqual(self.inferencer.infer(cells), ColumnType.NUMBER)

    def test_mixed_number_and_boolean_is_text(self) -> None:
        cells = [NumberCell(1.0), BooleanCell(True)]
        self.assertEqual(self.inferencer.infer(cells), ColumnType.TEXT)

    def test_date_prefix_matches(self) -> None:
        cells = [TextCell("2024-01-05"), TextCell("2024-02-10T10:00:00")]
        self.assertEqual(self.inferencer.infer(cells), ColumnType.DATE)

    def test_date_ratio_at_threshold_is_date(self) -> None:
        cells = [TextCell(f"2024-01-0{day}") for day in range(1, 5)] + [TextCell("n/a")]
        self.assertEqual(self.inferencer.infer(cells), ColumnType.DATE)

    def test_date_ratio_below_threshold_is_text(self) -> None:
        cells = [TextCell("2024-01-01"), TextCell("2024-01-02"), TextCell("n/a")]
        self.assertEqual(self.inferencer.infer(cells), ColumnType.TEXT)

    def test_numbers_count_against_date_ratio(self) -> None:
        cells = [TextCell("2024-01-01"), NumberCell(3.0)]
        self.assertEqual(self.inferencer.infer(cells), ColumnType.TEXT)

    def test_non_iso_date_shape_is_text(self) -> None:
        cells = [TextCell("05/01/2024"), TextCell("06/01/2024")]
        self.assertEqual(self.inferencer.infer(cells), ColumnType.TEXT)

    def test_custom_threshold(self) -> None:
        inferencer = TypeInferencer(date_ratio_threshold=0.5)
        cells = [TextCell("2024-01-01"), TextCell("later")]
        self.assertEqual(inferencer.infer(cells), ColumnType.DATE)

    def test_adding_text_never_narrows_the_type(self) -> None:
        widening = [
            [NumberCell(1.0), NumberCell(2.0)],
            [BooleanCell(True)],
            [TextCell("2024-01-01")],
        ]
        for cells in widening:
            with self.subTest(cells=cells):
                before = self.inferencer.infer(cells)
                after = self.inferencer.infer([*cells, TextCell("plain words")])
                self.assertIn(after, {before, ColumnType.TEXT, ColumnType.DATE})
                self.assertNotEqual(after, ColumnType.NUMBER)
                self.assertNotEqual(after, ColumnType.BOOLEAN)

    def test_infer_columns(self) -> None:
        columns = [[NumberCell(1.0)], [TextCell("x")], []]
        self.assertEqual(
            self.inferencer.infer_columns(columns),
            [ColumnType.NUMBER, ColumnType.TEXT, ColumnType.UNKNOWN],
        )


if __name__ == "__main__":
    unittest.main()
