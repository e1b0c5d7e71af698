"""Reading the checklist from, and writing it back to, a Google spreadsheet."""

import io
import logging

import polars as pl
import pygsheets
from pygsheets.exceptions import WorksheetNotFound
import requests

from alien_checklist.defaults import HTTP_TIMEOUT

logger = logging.getLogger(__name__)


def spreadsheet_csv_url(spreadsheet_key: str) -> str:
    """Returns the CSV export URL of the first worksheet of a Google spreadsheet."""
    return f"https://docs.google.com/spreadsheets/d/{spreadsheet_key}/export?format=csv"


def read_csv_source(source: str) -> pl.DataFrame:
    """
    Read a CSV from a URL or a local path without any type inference.

    Every cell is read as a string. Blank cells become nulls.

    Args:
        source: An ``http(s)://`` URL or a path to a local CSV file

    Returns:
        A DataFrame with only String columns
    """
    if source.startswith(("http://", "https://")):
        logger.info(f"Downloading checklist from {source}")
        response = requests.get(source, timeout=HTTP_TIMEOUT)
        response.raise_for_status()
        return pl.read_csv(io.BytesIO(response.content), infer_schema=False)

    logger.info(f"Reading checklist from {source}")
    return pl.read_csv(source, infer_schema=False)


def _to_sheet_values(df: pl.DataFrame) -> list[list[str]]:
    values: list[list[str]] = [list(df.columns)]
    for row in df.iter_rows():
        values.append(["" if value is None else str(value) for value in row])
    return values


def write_to_spreadsheet(
    df: pl.DataFrame,
    spreadsheet_key: str,
    credentials_path: str,
    worksheet_title: str,
) -> None:
    """
    Replace the contents of a worksheet with a DataFrame.

    The worksheet is created when the spreadsheet doesn't have it yet.

    Args:
        df: The DataFrame to upload, header included
        spreadsheet_key: Key of the Google spreadsheet
        credentials_path: Path to a service account JSON file
        worksheet_title: Title of the worksheet to overwrite
    """
    gc = pygsheets.authorize(service_file=credentials_path)
    sh = gc.open_by_key(spreadsheet_key)
    try:
        wks = sh.worksheet_by_title(worksheet_title)
    except WorksheetNotFound:
        wks = sh.add_worksheet(
            worksheet_title, rows=df.height + 1, cols=max(df.width, 1)
        )

    values = _to_sheet_values(df)
    wks.clear()
    wks.update_values("A1", values, extend=True)
    logger.info(
        f"Wrote {df.height} rows to worksheet {worksheet_title!r} of {spreadsheet_key}"
    )
