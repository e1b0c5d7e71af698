"""Command-line argument parser for the checklist pipeline."""

import argparse
from typing import Optional, Sequence

from alien_checklist import defaults
from alien_checklist.spreadsheet import spreadsheet_csv_url
from alien_checklist.types import DatasetMetadata


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the CLI argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Map an alien species checklist to Darwin Core tables."
    )

    # Source options
    parser.add_argument(
        "--spreadsheet-key",
        type=str,
        default=defaults.SPREADSHEET_KEY,
        help="Key of the Google spreadsheet holding the checklist",
    )
    parser.add_argument(
        "--worksheet-title",
        type=str,
        default=defaults.WORKSHEET_TITLE,
        help="Worksheet the enriched checklist is written back to",
    )
    parser.add_argument(
        "--credentials",
        type=str,
        default=None,
        help="Google service account file, enables writing back to the spreadsheet",
    )
    parser.add_argument(
        "--gbif-endpoint",
        type=str,
        default=defaults.GBIF_SPECIES_MATCH_ENDPOINT,
        help="GBIF species match endpoint",
    )

    # Output options
    parser.add_argument(
        "--log-file", type=str, default=defaults.LOG_FILE, help="Path to the log file"
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=defaults.OUTPUT_DIR,
        help="Directory the Darwin Core tables are written to",
    )
    parser.add_argument(
        "--raw-data-path",
        type=str,
        default=defaults.RAW_DATA_PATH,
        help="Path of the enriched checklist snapshot",
    )

    # Dataset metadata
    parser.add_argument(
        "--dataset-shortname", type=str, default=defaults.DATASET_SHORTNAME
    )
    parser.add_argument("--dataset-name", type=str, default=defaults.DATASET_NAME)
    parser.add_argument("--dataset-id", type=str, default=defaults.DATASET_ID)
    parser.add_argument("--rights-holder", type=str, default=defaults.RIGHTS_HOLDER)
    parser.add_argument(
        "--institution-code", type=str, default=defaults.INSTITUTION_CODE
    )
    parser.add_argument("--location-id", type=str, default=defaults.LOCATION_ID)

    # Positional arguments
    parser.add_argument(
        "source",
        type=str,
        nargs="?",
        default=None,
        help="URL or path of the checklist CSV, defaults to the spreadsheet export",
    )

    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments and resolve the checklist source.

    Exits with a usage error when neither a source nor a spreadsheet key is
    given.
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    if args.source is None:
        if args.spreadsheet_key is None:
            parser.error("either a source or --spreadsheet-key is required")
        args.source = spreadsheet_csv_url(args.spreadsheet_key)
    return args


def dataset_metadata_from_args(args: argparse.Namespace) -> DatasetMetadata:
    return DatasetMetadata(
        shortname=args.dataset_shortname,
        dataset_name=args.dataset_name,
        dataset_id=args.dataset_id,
        rights_holder=args.rights_holder,
        institution_code=args.institution_code,
        location_id=args.location_id,
        license=defaults.LICENSE,
        language=defaults.LANGUAGE,
    )
