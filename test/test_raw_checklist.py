import os
import tempfile
import unittest
from unittest.mock import MagicMock, patch

import polars as pl
import requests

from alien_checklist.constants import RAW_COLUMNS
from alien_checklist.dataframes.raw_checklist import (
    RawChecklistSchema,
    read_raw_checklist,
)

CSV_CONTENT = (
    "scientific_name,kingdom,first_observation,last_observation,native_range,"
    "confidential_notes\n"
    "\"Dreissena polymorpha (Pallas, 1771)\",Animalia,1835,2018,Europe | Asia,x\n"
    "\"Procambarus clarkii (Girard, 1852)\",Animalia,,0042,,y\n"
)


class TestRawChecklistSchema(unittest.TestCase):
    def test_build_adds_missing_and_drops_extra_columns(self):
        df = pl.DataFrame(
            {
                "scientific_name": ["Gammarus tigrinus Sexton, 1939"],
                "kingdom": ["Animalia"],
                "unused": ["dropped"],
            }
        )

        result = RawChecklistSchema.build(df)

        self.assertEqual(result.columns, RAW_COLUMNS)
        self.assertEqual(result.get_column("kingdom").item(), "Animalia")
        self.assertIsNone(result.get_column("realm").item())
        self.assertTrue(all(dtype == pl.String for dtype in result.dtypes))

    def test_build_does_not_mutate_input(self):
        df = pl.DataFrame({"scientific_name": ["Gammarus tigrinus"]})
        RawChecklistSchema.build(df)
        self.assertEqual(df.columns, ["scientific_name"])


class TestReadRawChecklist(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.csv_path = os.path.join(self.tmp_dir.name, "checklist.csv")
        with open(self.csv_path, "w", encoding="utf-8") as f:
            f.write(CSV_CONTENT)

    def tearDown(self):
        self.tmp_dir.cleanup()

    def test_reads_every_cell_as_string(self):
        result = read_raw_checklist(self.csv_path)

        self.assertEqual(result.height, 2)
        self.assertEqual(result.columns, RAW_COLUMNS)
        # No type inference, leading zeros survive
        self.assertEqual(result.get_column("last_observation").to_list(), ["2018", "0042"])
        self.assertEqual(
            result.get_column("scientific_name").to_list(),
            ["Dreissena polymorpha (Pallas, 1771)", "Procambarus clarkii (Girard, 1852)"],
        )

    def test_blank_cells_are_null(self):
        result = read_raw_checklist(self.csv_path)
        self.assertIsNone(result.get_column("first_observation")[1])
        self.assertIsNone(result.get_column("native_range")[1])

    @patch("alien_checklist.spreadsheet.requests.get")
    def test_reads_from_url(self, mock_get):
        response = MagicMock()
        response.content = CSV_CONTENT.encode("utf-8")
        mock_get.return_value = response

        result = read_raw_checklist("https://docs.google.com/spreadsheets/d/abc/export?format=csv")

        mock_get.assert_called_once()
        response.raise_for_status.assert_called_once()
        self.assertEqual(result.height, 2)

    @patch("alien_checklist.spreadsheet.requests.get")
    def test_url_error_is_raised(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("unreachable")

        with self.assertRaises(requests.ConnectionError):
            read_raw_checklist("https://docs.google.com/spreadsheets/d/abc/export?format=csv")


if __name__ == "__main__":
    unittest.main()
