import logging

import dataframely as dy
import polars as pl

from alien_checklist.constants import RAW_COLUMNS
from alien_checklist.spreadsheet import read_csv_source

logger = logging.getLogger(__name__)


class RawChecklistSchema(dy.Schema):
    """
    The checklist as maintained in the source spreadsheet. One row per taxon
    per location. Every value is kept as the string typed in the spreadsheet.
    """

    scientific_name = dy.String(nullable=True)
    kingdom = dy.String(nullable=True)
    phylum = dy.String(nullable=True)
    class_ = dy.String(nullable=True, alias="class")
    order = dy.String(nullable=True)
    family = dy.String(nullable=True)
    genus = dy.String(nullable=True)
    taxon_rank = dy.String(nullable=True)
    nomenclatural_code = dy.String(nullable=True)
    location = dy.String(nullable=True)
    country_code = dy.String(nullable=True)
    occurrence_status = dy.String(nullable=True)
    origin = dy.String(nullable=True)
    first_observation = dy.String(nullable=True)
    last_observation = dy.String(nullable=True)
    remarks = dy.String(nullable=True)
    source = dy.String(nullable=True)
    realm = dy.String(nullable=True)
    native_range = dy.String(nullable=True)
    introduction_pathway = dy.String(nullable=True)
    degree_of_establishment = dy.String(nullable=True)

    @classmethod
    def build(cls, df: pl.DataFrame) -> dy.DataFrame["RawChecklistSchema"]:
        """
        Conform a frame read from the spreadsheet to the checklist layout.

        Columns the spreadsheet doesn't have are added as nulls, columns the
        pipeline doesn't use are dropped.
        """
        missing = [col for col in RAW_COLUMNS if col not in df.columns]
        if missing:
            logger.warning(f"Checklist is missing columns {missing}, filling with nulls")

        return cls.validate(
            df.with_columns(
                [pl.lit(None, dtype=pl.String).alias(col) for col in missing]
            ).select([pl.col(col).cast(pl.String) for col in RAW_COLUMNS])
        )


def read_raw_checklist(source: str) -> dy.DataFrame[RawChecklistSchema]:
    """
    Load the checklist from a spreadsheet CSV export URL or a local CSV file.

    Args:
        source: URL or path of the checklist CSV

    Returns:
        A validated DataFrame conforming to RawChecklistSchema
    """
    return RawChecklistSchema.build(read_csv_source(source))
