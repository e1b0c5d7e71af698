"""
Output module for managing file paths and writing the published tables.

This module centralizes output directory handling so every table lands in
the same directory, with the same CSV dialect.
"""

import logging
import os

import polars as pl

from alien_checklist.defaults import OUTPUT_DIR

logger = logging.getLogger(__name__)

# Fixed output filenames
TAXON_FILENAME = "taxon.csv"
DISTRIBUTION_FILENAME = "distribution.csv"
SPECIES_PROFILE_FILENAME = "speciesprofile.csv"
DESCRIPTION_FILENAME = "description.csv"


def ensure_output_dir(output_dir: str = OUTPUT_DIR) -> None:
    """
    Create the output directory if it doesn't exist.
    """
    os.makedirs(output_dir, exist_ok=True)


def get_output_path(filename: str, output_dir: str = OUTPUT_DIR) -> str:
    """
    Gets the full path for an output file in the output directory.

    Args:
        filename: The filename to place in the output directory
        output_dir: The output directory

    Returns:
        The full path to the file in the output directory
    """
    ensure_output_dir(output_dir)
    return os.path.join(output_dir, filename)


def prepare_file_path(path: str) -> str:
    """
    Prepare a file path for writing by ensuring its directory exists.

    Args:
        path: The path to prepare

    Returns:
        The same path after ensuring its directory exists
    """
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    return path


def write_csv(df: pl.DataFrame, path: str) -> str:
    """
    Write a frame as UTF-8, comma-separated CSV with a header row.

    Missing values are written as empty strings.
    """
    output_file = prepare_file_path(path)
    df.write_csv(output_file, include_header=True, separator=",", null_value="")
    logger.info(f"Wrote {df.height} rows to {output_file}")
    return output_file


def write_dwc_table(
    df: pl.DataFrame, filename: str, output_dir: str = OUTPUT_DIR
) -> str:
    """
    Write a published Darwin Core table to the output directory.

    Args:
        df: A finalized Darwin Core table
        filename: One of the fixed output filenames
        output_dir: The output directory

    Returns:
        The path of the written file
    """
    return write_csv(df, get_output_path(filename, output_dir))


def write_raw_snapshot(df: pl.DataFrame, path: str) -> str:
    """Write the enriched checklist as a raw data snapshot."""
    return write_csv(df, path)
