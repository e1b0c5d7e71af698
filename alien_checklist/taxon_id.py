"""Stable taxon identifiers.

A taxon identifier is derived from the backbone canonical name and the
kingdom, so the same taxon keeps the same identifier across data refreshes
as long as those two values don't change. Names GBIF could only match to a
higher rank keep their verbatim name.
"""

import hashlib
from typing import Optional

import polars as pl

from alien_checklist.constants import HIGHERRANK_MATCH_TYPE
from alien_checklist.types import TaxonId


def _md5_hexdigest(value: str) -> str:
    return hashlib.md5(value.encode("utf-8")).hexdigest()


def taxon_id(
    scientific_name: Optional[str], kingdom: Optional[str], dataset_shortname: str
) -> TaxonId:
    """
    Build the identifier of a taxon.

    Args:
        scientific_name: Canonical scientific name of the taxon
        kingdom: Kingdom of the taxon, ``None`` is treated as an empty string
        dataset_shortname: Short name of the dataset, used as namespace

    Returns:
        An identifier like ``<dataset_shortname>:taxon:<md5 hexdigest>``
    """
    key = f"{scientific_name or ''} {kingdom or ''}"
    return f"{dataset_shortname}:taxon:{_md5_hexdigest(key)}"


def taxon_id_expr(
    dataset_shortname: str,
    name_col: str = "gbifapi_canonicalName",
    fallback_name_col: str = "scientific_name",
    kingdom_col: str = "kingdom",
    match_type_col: str = "gbifapi_matchType",
) -> pl.Expr:
    """
    Polars expression computing the taxon identifier of every row.

    Rows without a backbone match fall back to the verbatim scientific name,
    otherwise all unmatched names of a kingdom would collapse into one taxon.
    The same goes for ``HIGHERRANK`` matches, whose canonical name is the
    genus or family the name was matched to.
    """
    name = (
        pl.when(pl.col(match_type_col) == HIGHERRANK_MATCH_TYPE)
        .then(pl.col(fallback_name_col))
        .otherwise(pl.coalesce(pl.col(name_col), pl.col(fallback_name_col)))
    )
    key = pl.concat_str(
        [
            name.fill_null(""),
            pl.col(kingdom_col).fill_null(""),
        ],
        separator=" ",
    )
    return pl.lit(f"{dataset_shortname}:taxon:") + key.map_elements(
        _md5_hexdigest, return_dtype=pl.String
    )


def with_taxon_id(df: pl.DataFrame, dataset_shortname: str) -> pl.DataFrame:
    """Adds a ``taxon_id`` column to a frame with name, match type and kingdom columns."""
    return df.with_columns(taxon_id_expr(dataset_shortname).alias("taxon_id"))
