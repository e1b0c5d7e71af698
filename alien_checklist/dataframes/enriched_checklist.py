import logging

import dataframely as dy
import polars as pl

from alien_checklist.constants import (
    GBIF_COLUMNS,
    HIGHERRANK_MATCH_TYPE,
    RAW_COLUMNS,
)
from alien_checklist.dataframes.raw_checklist import RawChecklistSchema
from alien_checklist.taxon_id import with_taxon_id
from alien_checklist.types import NameMatcher

logger = logging.getLogger(__name__)

MATCHES_SCHEMA = {
    "scientific_name": pl.String(),
    "gbifapi_canonicalName": pl.String(),
    "gbifapi_rank": pl.String(),
    "gbifapi_confidence": pl.Int64(),
    "gbifapi_matchType": pl.String(),
}


class EnrichedChecklistSchema(RawChecklistSchema):
    """
    The checklist with the GBIF backbone match of every scientific name and
    the derived taxon identifier. This is the input of every Darwin Core
    table builder.
    """

    gbifapi_canonicalName = dy.String(nullable=True)
    gbifapi_rank = dy.String(nullable=True)
    gbifapi_confidence = dy.Int64(nullable=True)
    gbifapi_matchType = dy.String(nullable=True)
    taxon_id = dy.String(nullable=False)

    @classmethod
    def build(  # type: ignore[override]
        cls,
        raw_checklist_df: dy.DataFrame[RawChecklistSchema],
        name_matcher: NameMatcher,
        dataset_shortname: str,
    ) -> dy.DataFrame["EnrichedChecklistSchema"]:
        """
        Match every scientific name against the backbone and assign taxon ids.

        Each distinct name is looked up once, in order of first appearance.

        Args:
            raw_checklist_df: The checklist as read from the spreadsheet
            name_matcher: Callable returning the backbone match of a name
            dataset_shortname: Namespace of the generated taxon ids

        Returns:
            A validated DataFrame conforming to EnrichedChecklistSchema
        """
        names = (
            raw_checklist_df.get_column("scientific_name")
            .drop_nulls()
            .unique(maintain_order=True)
            .to_list()
        )
        logger.info(f"Matching {len(names)} distinct names against the GBIF backbone")

        rows = []
        for name in names:
            match = name_matcher(name)
            rows.append(
                {
                    "scientific_name": name,
                    "gbifapi_canonicalName": match.canonical_name,
                    "gbifapi_rank": match.rank,
                    "gbifapi_confidence": match.confidence,
                    "gbifapi_matchType": match.match_type,
                }
            )
        matches_df = pl.DataFrame(rows, schema=MATCHES_SCHEMA)

        enriched = (
            raw_checklist_df.with_row_index("_row")
            .join(matches_df, on="scientific_name", how="left")
            .sort("_row")
            .drop("_row")
            .pipe(with_taxon_id, dataset_shortname=dataset_shortname)
            .select(RAW_COLUMNS + GBIF_COLUMNS + ["taxon_id"])
        )

        log_match_summary(matches_df)

        return cls.validate(enriched)


def log_match_summary(matches_df: pl.DataFrame) -> None:
    """Logs how many names got each GBIF match type."""
    counts = (
        matches_df.get_column("gbifapi_matchType")
        .fill_null("UNKNOWN")
        .value_counts(sort=True)
    )
    for match_type, count in counts.iter_rows():
        logger.info(f"GBIF match type {match_type}: {count} names")

    unmatched = matches_df.filter(pl.col("gbifapi_canonicalName").is_null())
    if unmatched.height > 0:
        logger.warning(
            f"{unmatched.height} names have no backbone match and keep their verbatim name: "
            f"{unmatched.get_column('scientific_name').to_list()}"
        )

    higher_rank = matches_df.filter(
        pl.col("gbifapi_matchType") == HIGHERRANK_MATCH_TYPE
    )
    if higher_rank.height > 0:
        logger.warning(
            f"{higher_rank.height} names only match a higher rank and keep their verbatim name: "
            f"{higher_rank.get_column('scientific_name').to_list()}"
        )
