import logging
from typing import NamedTuple, Optional

import dataframely as dy

from alien_checklist import output
from alien_checklist.cli import dataset_metadata_from_args, parse_args
from alien_checklist.dataframes.description import DescriptionSchema
from alien_checklist.dataframes.distribution import DistributionSchema
from alien_checklist.dataframes.enriched_checklist import EnrichedChecklistSchema
from alien_checklist.dataframes.raw_checklist import read_raw_checklist
from alien_checklist.dataframes.species_profile import SpeciesProfileSchema
from alien_checklist.dataframes.taxon import TaxonSchema
from alien_checklist.logging import configure_logging, log_action
from alien_checklist.name_matching import GbifNameMatcher
from alien_checklist.spreadsheet import write_to_spreadsheet
from alien_checklist.types import DatasetMetadata, NameMatcher

logger = logging.getLogger(__name__)


class DarwinCoreTables(NamedTuple):
    taxon: dy.DataFrame[TaxonSchema]
    distribution: dy.DataFrame[DistributionSchema]
    species_profile: dy.DataFrame[SpeciesProfileSchema]
    description: dy.DataFrame[DescriptionSchema]


def build_tables(
    enriched_checklist_df: dy.DataFrame[EnrichedChecklistSchema],
    metadata: DatasetMetadata,
) -> DarwinCoreTables:
    return DarwinCoreTables(
        taxon=log_action(
            "TaxonSchema.build",
            lambda: TaxonSchema.build(enriched_checklist_df, metadata),
        ),
        distribution=log_action(
            "DistributionSchema.build",
            lambda: DistributionSchema.build(enriched_checklist_df, metadata),
        ),
        species_profile=log_action(
            "SpeciesProfileSchema.build",
            lambda: SpeciesProfileSchema.build(enriched_checklist_df),
        ),
        description=log_action(
            "DescriptionSchema.build",
            lambda: DescriptionSchema.build(enriched_checklist_df),
        ),
    )


def write_tables(tables: DarwinCoreTables, output_dir: str) -> None:
    output.write_dwc_table(tables.taxon, output.TAXON_FILENAME, output_dir)
    output.write_dwc_table(
        tables.distribution, output.DISTRIBUTION_FILENAME, output_dir
    )
    output.write_dwc_table(
        tables.species_profile, output.SPECIES_PROFILE_FILENAME, output_dir
    )
    output.write_dwc_table(tables.description, output.DESCRIPTION_FILENAME, output_dir)


def run(
    source: str,
    metadata: DatasetMetadata,
    name_matcher: NameMatcher,
    output_dir: str,
    raw_data_path: str,
    spreadsheet_key: Optional[str] = None,
    credentials: Optional[str] = None,
    worksheet_title: Optional[str] = None,
) -> DarwinCoreTables:
    raw_checklist_df = log_action(
        "read_raw_checklist", lambda: read_raw_checklist(source)
    )

    enriched_checklist_df = log_action(
        "EnrichedChecklistSchema.build",
        lambda: EnrichedChecklistSchema.build(
            raw_checklist_df, name_matcher, metadata.shortname
        ),
    )

    # All tables are built and all network calls are done before the first
    # local file is written, so a failure leaves no partial output
    tables = build_tables(enriched_checklist_df, metadata)

    if credentials and spreadsheet_key and worksheet_title:
        log_action(
            "write_to_spreadsheet",
            lambda: write_to_spreadsheet(
                enriched_checklist_df, spreadsheet_key, credentials, worksheet_title
            ),
        )

    output.write_raw_snapshot(enriched_checklist_df, raw_data_path)
    write_tables(tables, output_dir)
    logger.info(f"Darwin Core tables written to {output_dir}")
    return tables


def main() -> None:
    args = parse_args()

    output.prepare_file_path(args.log_file)
    configure_logging(args.log_file)

    run(
        source=args.source,
        metadata=dataset_metadata_from_args(args),
        name_matcher=GbifNameMatcher(endpoint=args.gbif_endpoint),
        output_dir=args.output_dir,
        raw_data_path=args.raw_data_path,
        spreadsheet_key=args.spreadsheet_key,
        credentials=args.credentials,
        worksheet_title=args.worksheet_title,
    )


if __name__ == "__main__":
    main()
