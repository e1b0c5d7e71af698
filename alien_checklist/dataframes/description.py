import logging
from typing import NamedTuple

import dataframely as dy
import polars as pl

from alien_checklist.constants import (
    DEGREE_OF_ESTABLISHMENT,
    MULTI_VALUE_DELIMITER,
    NATIVE_RANGE,
    PATHWAY_OF_INTRODUCTION,
)
from alien_checklist.darwin_core import finalize_dwc_columns
from alien_checklist.defaults import LANGUAGE
from alien_checklist.dataframes.enriched_checklist import EnrichedChecklistSchema

logger = logging.getLogger(__name__)


class DescriptorSource(NamedTuple):
    """A multi-valued checklist column published as description rows."""

    field: str
    max_values: int
    delimiter: str
    recode: dict[str, str]
    type_label: str


# Order of this tuple is the order of the rows of a taxon in the output
DESCRIPTOR_SOURCES: tuple[DescriptorSource, ...] = (
    DescriptorSource(
        field="native_range",
        max_values=3,
        delimiter=MULTI_VALUE_DELIMITER,
        recode={"probably the Americas": "America"},
        type_label=NATIVE_RANGE,
    ),
    DescriptorSource(
        field="degree_of_establishment",
        max_values=1,
        delimiter=MULTI_VALUE_DELIMITER,
        recode={},
        type_label=DEGREE_OF_ESTABLISHMENT,
    ),
    DescriptorSource(
        field="introduction_pathway",
        max_values=2,
        delimiter=MULTI_VALUE_DELIMITER,
        recode={},
        type_label=PATHWAY_OF_INTRODUCTION,
    ),
)


def count_truncated(df: pl.DataFrame, source: DescriptorSource) -> int:
    """Counts the rows holding more values than ``source`` publishes."""
    if source.max_values == 1:
        # Single-valued fields are never split
        return 0
    return df.filter(
        pl.col(source.field).str.count_matches(source.delimiter, literal=True)
        >= source.max_values
    ).height


def explode_descriptor(df: pl.DataFrame, source: DescriptorSource) -> pl.DataFrame:
    """
    Turn one wide checklist column into one row per taxon and value.

    The column is split on the delimiter into at most ``max_values`` slots,
    values beyond that are dropped. Empty slots are not published, and a value
    is published once per taxon even when recoding makes two slots equal.

    Args:
        df: A frame with ``taxon_id`` and the ``source.field`` column
        source: How to split, recode and label the column

    Returns:
        A DataFrame with ``dwc_taxonID``, ``dwc_description``, ``dwc_type``
        and ``dwc_language``
    """
    truncated = count_truncated(df, source)
    if truncated > 0:
        logger.warning(
            f"{truncated} rows have more than {source.max_values} values in "
            f"{source.field}, the extra values are dropped"
        )

    slots = [f"{source.field}_{i}" for i in range(source.max_values)]
    if source.max_values == 1:
        values = pl.col(source.field).alias(slots[0])
        split = df.select(pl.col("taxon_id"), values)
    else:
        split = df.select(
            pl.col("taxon_id"),
            pl.col(source.field)
            .str.split_exact(source.delimiter, source.max_values - 1)
            .struct.rename_fields(slots)
            .alias("_slots"),
        ).unnest("_slots")

    description = pl.col("value")
    if source.recode:
        description = description.replace(source.recode)

    return (
        split.unpivot(
            index="taxon_id", on=slots, variable_name="slot", value_name="value"
        )
        .filter(pl.col("value").is_not_null() & (pl.col("value") != ""))
        .select(
            pl.col("taxon_id").alias("dwc_taxonID"),
            description.alias("dwc_description"),
            pl.lit(source.type_label).alias("dwc_type"),
            pl.lit(LANGUAGE).alias("dwc_language"),
        )
        # Recoding can turn two slots into the same value
        .unique(keep="first", maintain_order=True)
    )


class DescriptionSchema(dy.Schema):
    """
    The Darwin Core description extension. One row per taxon, descriptor
    type and value.
    """

    taxonID = dy.String(primary_key=True)
    description = dy.String(primary_key=True)
    type_ = dy.String(primary_key=True, alias="type")
    language = dy.String(nullable=False)

    @dy.rule()
    def known_type(cls) -> pl.Expr:
        """Validate that every row has one of the published descriptor types."""
        return pl.col("type").is_in([source.type_label for source in DESCRIPTOR_SOURCES])

    @dy.rule()
    def non_empty_description(cls) -> pl.Expr:
        return pl.col("description") != ""

    @classmethod
    def build(
        cls,
        enriched_checklist_df: dy.DataFrame[EnrichedChecklistSchema],
        descriptor_sources: tuple[DescriptorSource, ...] = DESCRIPTOR_SOURCES,
    ) -> dy.DataFrame["DescriptionSchema"]:
        taxa = enriched_checklist_df.unique(
            subset=["taxon_id"], keep="first", maintain_order=True
        )
        df = pl.concat(
            [explode_descriptor(taxa, source) for source in descriptor_sources]
        ).pipe(finalize_dwc_columns)
        return cls.validate(df)
