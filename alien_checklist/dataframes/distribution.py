import dataframely as dy
import polars as pl

from alien_checklist.constants import APPROXIMATE_DATE_MARKERS
from alien_checklist.darwin_core import finalize_dwc_columns
from alien_checklist.dataframes.enriched_checklist import EnrichedChecklistSchema
from alien_checklist.types import DatasetMetadata


def _clean_observation(col: str) -> pl.Expr:
    """Drops approximation markers; a value left empty counts as absent."""
    cleaned = pl.col(col).str.replace_all(APPROXIMATE_DATE_MARKERS, "")
    return pl.when(cleaned == "").then(None).otherwise(cleaned)


def event_date_expr(
    first_col: str = "first_observation", last_col: str = "last_observation"
) -> pl.Expr:
    """
    Build the Darwin Core eventDate from first and last observation years.

    Markers like ``<1995`` or ``2001?`` are stripped first. The result is
    an ISO 8601 interval when both dates are known and differ, a single
    date when only one is known or both are equal, and an empty string when
    neither is known. Dates are not validated.

    Args:
        first_col: Column holding the first observation
        last_col: Column holding the last observation

    Returns:
        A string expression
    """
    first = _clean_observation(first_col)
    last = _clean_observation(last_col)
    return (
        pl.when(first.is_null() & last.is_null())
        .then(pl.lit(""))
        .when(first.is_null())
        .then(last)
        .when(last.is_null())
        .then(first)
        .when(first == last)
        .then(first)
        .otherwise(pl.concat_str([first, last], separator="/"))
    )


class DistributionSchema(dy.Schema):
    """
    The Darwin Core distribution extension. One row per record in the
    checklist, so a taxon present in several locations has several rows.
    """

    taxonID = dy.String(nullable=False)
    locationID = dy.String(nullable=False)
    locality = dy.String(nullable=True)
    countryCode = dy.String(nullable=True)
    occurrenceStatus = dy.String(nullable=True)
    establishmentMeans = dy.String(nullable=True)
    eventDate = dy.String(nullable=False)
    source = dy.String(nullable=True)
    occurrenceRemarks = dy.String(nullable=True)

    @classmethod
    def build(
        cls,
        enriched_checklist_df: dy.DataFrame[EnrichedChecklistSchema],
        metadata: DatasetMetadata,
    ) -> dy.DataFrame["DistributionSchema"]:
        df = enriched_checklist_df.select(
            pl.col("taxon_id").alias("dwc_taxonID"),
            pl.lit(metadata.location_id).alias("dwc_locationID"),
            pl.col("location").alias("dwc_locality"),
            pl.col("country_code").alias("dwc_countryCode"),
            pl.col("occurrence_status").alias("dwc_occurrenceStatus"),
            pl.col("origin").alias("dwc_establishmentMeans"),
            event_date_expr().alias("dwc_eventDate"),
            pl.col("source").alias("dwc_source"),
            pl.col("remarks").alias("dwc_occurrenceRemarks"),
        ).pipe(finalize_dwc_columns)
        return cls.validate(df)
