import os
import tempfile
import unittest
from unittest.mock import patch

import polars as pl
import requests

import run
from alien_checklist import output
from test.fixtures.checklist import (
    StubNameMatcher,
    mock_dataset_metadata,
    mock_raw_checklist_dataframe,
)

OUTPUT_FILENAMES = [
    output.TAXON_FILENAME,
    output.DISTRIBUTION_FILENAME,
    output.SPECIES_PROFILE_FILENAME,
    output.DESCRIPTION_FILENAME,
]


class TestRun(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.source = os.path.join(self.tmp_dir.name, "checklist.csv")
        mock_raw_checklist_dataframe().write_csv(self.source)

    def tearDown(self):
        self.tmp_dir.cleanup()

    def _run(self, output_dir: str, name_matcher=None) -> run.DarwinCoreTables:
        return run.run(
            source=self.source,
            metadata=mock_dataset_metadata(),
            name_matcher=name_matcher or StubNameMatcher(),
            output_dir=output_dir,
            raw_data_path=os.path.join(output_dir, "raw", "checklist.csv"),
        )

    def _read(self, path: str) -> bytes:
        with open(path, "rb") as f:
            return f.read()

    def test_writes_four_tables_and_snapshot(self):
        output_dir = os.path.join(self.tmp_dir.name, "processed")

        tables = self._run(output_dir)

        for filename in OUTPUT_FILENAMES:
            self.assertTrue(os.path.exists(os.path.join(output_dir, filename)))
        self.assertTrue(
            os.path.exists(os.path.join(output_dir, "raw", "checklist.csv"))
        )

        self.assertEqual(tables.taxon.height, 4)
        self.assertEqual(tables.distribution.height, 5)
        self.assertEqual(tables.species_profile.height, 4)
        self.assertEqual(tables.description.height, 13)

        taxon_csv = pl.read_csv(
            os.path.join(output_dir, output.TAXON_FILENAME), infer_schema=False
        )
        self.assertEqual(taxon_csv.columns, tables.taxon.columns)
        self.assertEqual(
            taxon_csv.get_column("taxonID").to_list(),
            tables.taxon.get_column("taxonID").to_list(),
        )

        snapshot = pl.read_csv(
            os.path.join(output_dir, "raw", "checklist.csv"), infer_schema=False
        )
        self.assertIn("gbifapi_canonicalName", snapshot.columns)
        self.assertIn("taxon_id", snapshot.columns)

    def test_output_is_byte_identical_across_runs(self):
        first_dir = os.path.join(self.tmp_dir.name, "first")
        second_dir = os.path.join(self.tmp_dir.name, "second")

        self._run(first_dir)
        self._run(second_dir)

        for filename in OUTPUT_FILENAMES:
            self.assertEqual(
                self._read(os.path.join(first_dir, filename)),
                self._read(os.path.join(second_dir, filename)),
            )

    def test_failed_name_lookup_writes_nothing(self):
        output_dir = os.path.join(self.tmp_dir.name, "failed")

        def failing_matcher(scientific_name):
            raise requests.ConnectionError("GBIF unreachable")

        with self.assertRaises(requests.ConnectionError):
            self._run(output_dir, name_matcher=failing_matcher)

        self.assertFalse(os.path.exists(output_dir))

    @patch("run.write_to_spreadsheet")
    def test_failed_write_back_writes_nothing(self, mock_write):
        mock_write.side_effect = requests.ConnectionError("Sheets unreachable")
        output_dir = os.path.join(self.tmp_dir.name, "failed")
        raw_data_path = os.path.join(self.tmp_dir.name, "raw", "checklist.csv")

        with self.assertRaises(requests.ConnectionError):
            run.run(
                source=self.source,
                metadata=mock_dataset_metadata(),
                name_matcher=StubNameMatcher(),
                output_dir=output_dir,
                raw_data_path=raw_data_path,
                spreadsheet_key="abc123",
                credentials="service.json",
                worksheet_title="checklist",
            )

        self.assertFalse(os.path.exists(raw_data_path))
        self.assertFalse(os.path.exists(output_dir))

    @patch("run.write_to_spreadsheet")
    def test_writes_back_to_spreadsheet_with_credentials(self, mock_write):
        output_dir = os.path.join(self.tmp_dir.name, "processed")

        run.run(
            source=self.source,
            metadata=mock_dataset_metadata(),
            name_matcher=StubNameMatcher(),
            output_dir=output_dir,
            raw_data_path=os.path.join(output_dir, "raw", "checklist.csv"),
            spreadsheet_key="abc123",
            credentials="service.json",
            worksheet_title="checklist",
        )

        mock_write.assert_called_once()
        args = mock_write.call_args.args
        self.assertEqual(args[1:], ("abc123", "service.json", "checklist"))
        self.assertIn("taxon_id", args[0].columns)

    @patch("run.write_to_spreadsheet")
    def test_no_write_back_without_credentials(self, mock_write):
        self._run(os.path.join(self.tmp_dir.name, "processed"))
        mock_write.assert_not_called()


if __name__ == "__main__":
    unittest.main()
