"""Helpers shared by the Darwin Core table builders.

Builders name every published column ``dwc_<term>`` while they work, so
staging columns can live next to them in the same frame. Right before
publishing, only the prefixed columns are kept and the prefix is dropped.
"""

import polars as pl

from alien_checklist.constants import DWC_PREFIX


def dwc_columns(df: pl.DataFrame) -> list[str]:
    """Returns the names of the columns carrying the Darwin Core prefix."""
    return [col for col in df.columns if col.startswith(DWC_PREFIX)]


def finalize_dwc_columns(df: pl.DataFrame) -> pl.DataFrame:
    """
    Turn a builder frame into a publishable Darwin Core table.

    Staging columns are dropped, the ``dwc_`` prefix is removed and rows are
    sorted by ``taxonID``. The sort is stable, so rows of the same taxon keep
    the order the builder produced them in.

    Args:
        df: A DataFrame with ``dwc_``-prefixed columns, including ``dwc_taxonID``

    Returns:
        A new DataFrame with only the Darwin Core columns
    """
    columns = dwc_columns(df)
    return (
        df.select(columns)
        .rename({col: col.removeprefix(DWC_PREFIX) for col in columns})
        .sort("taxonID", maintain_order=True)
    )
