import logging

import dataframely as dy
import polars as pl

from alien_checklist.darwin_core import finalize_dwc_columns
from alien_checklist.dataframes.enriched_checklist import EnrichedChecklistSchema

logger = logging.getLogger(__name__)


class SpeciesProfileSchema(dy.Schema):
    """
    The Darwin Core species profile extension. One row per taxon.

    The habitat flags are the same for every taxon. The ``realm`` column of
    the checklist is only logged, it does not drive the flags.
    """

    taxonID = dy.String(primary_key=True)
    isMarine = dy.Bool(nullable=False)
    isFreshwater = dy.Bool(nullable=False)
    isTerrestrial = dy.Bool(nullable=False)

    # TODO: derive the flags from realm once the dataset owners confirm the mapping
    IS_MARINE = True
    IS_FRESHWATER = True
    IS_TERRESTRIAL = False

    @classmethod
    def build(
        cls,
        enriched_checklist_df: dy.DataFrame[EnrichedChecklistSchema],
    ) -> dy.DataFrame["SpeciesProfileSchema"]:
        taxa = enriched_checklist_df.unique(
            subset=["taxon_id"], keep="first", maintain_order=True
        )

        realms = taxa.get_column("realm").value_counts(sort=True)
        for realm, count in realms.iter_rows():
            logger.info(f"realm {realm!r}: {count} taxa")

        df = taxa.select(
            pl.col("taxon_id").alias("dwc_taxonID"),
            pl.lit(cls.IS_MARINE).alias("dwc_isMarine"),
            pl.lit(cls.IS_FRESHWATER).alias("dwc_isFreshwater"),
            pl.lit(cls.IS_TERRESTRIAL).alias("dwc_isTerrestrial"),
        ).pipe(finalize_dwc_columns)
        return cls.validate(df)
