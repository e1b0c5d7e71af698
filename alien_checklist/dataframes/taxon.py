import dataframely as dy
import polars as pl

from alien_checklist.darwin_core import finalize_dwc_columns
from alien_checklist.dataframes.enriched_checklist import EnrichedChecklistSchema
from alien_checklist.types import DatasetMetadata


class TaxonSchema(dy.Schema):
    """
    The Darwin Core taxon core. One row per taxon, the first record of each
    taxon in the checklist provides the taxonomic fields.
    """

    taxonID = dy.String(primary_key=True)
    language = dy.String(nullable=False)
    license = dy.String(nullable=False)
    rightsHolder = dy.String(nullable=False)
    datasetID = dy.String(nullable=False)
    institutionCode = dy.String(nullable=False)
    datasetName = dy.String(nullable=False)
    scientificName = dy.String(nullable=True)
    kingdom = dy.String(nullable=True)
    phylum = dy.String(nullable=True)
    class_ = dy.String(nullable=True, alias="class")
    order = dy.String(nullable=True)
    family = dy.String(nullable=True)
    genus = dy.String(nullable=True)
    taxonRank = dy.String(nullable=True)
    nomenclaturalCode = dy.String(nullable=True)

    @classmethod
    def build(
        cls,
        enriched_checklist_df: dy.DataFrame[EnrichedChecklistSchema],
        metadata: DatasetMetadata,
    ) -> dy.DataFrame["TaxonSchema"]:
        df = (
            enriched_checklist_df.unique(
                subset=["taxon_id"], keep="first", maintain_order=True
            )
            .select(
                pl.col("taxon_id").alias("dwc_taxonID"),
                pl.lit(metadata.language).alias("dwc_language"),
                pl.lit(metadata.license).alias("dwc_license"),
                pl.lit(metadata.rights_holder).alias("dwc_rightsHolder"),
                pl.lit(metadata.dataset_id).alias("dwc_datasetID"),
                pl.lit(metadata.institution_code).alias("dwc_institutionCode"),
                pl.lit(metadata.dataset_name).alias("dwc_datasetName"),
                pl.col("scientific_name").alias("dwc_scientificName"),
                pl.col("kingdom").alias("dwc_kingdom"),
                pl.col("phylum").alias("dwc_phylum"),
                pl.col("class").alias("dwc_class"),
                pl.col("order").alias("dwc_order"),
                pl.col("family").alias("dwc_family"),
                pl.col("genus").alias("dwc_genus"),
                pl.col("taxon_rank").alias("dwc_taxonRank"),
                pl.col("nomenclatural_code").alias("dwc_nomenclaturalCode"),
            )
            .pipe(finalize_dwc_columns)
        )
        return cls.validate(df)
