"""Constants for the alien species checklist.

This module defines the column layout of the source spreadsheet and the
fixed values used when mapping it to Darwin Core.
"""

# Columns of the source spreadsheet, in the order they are read
RAW_COLUMNS: list[str] = [
    "scientific_name",
    "kingdom",
    "phylum",
    "class",
    "order",
    "family",
    "genus",
    "taxon_rank",
    "nomenclatural_code",
    "location",
    "country_code",
    "occurrence_status",
    "origin",
    "first_observation",
    "last_observation",
    "remarks",
    "source",
    "realm",
    "native_range",
    "introduction_pathway",
    "degree_of_establishment",
]

# Columns added by the GBIF backbone lookup
GBIF_COLUMNS: list[str] = [
    "gbifapi_canonicalName",
    "gbifapi_rank",
    "gbifapi_confidence",
    "gbifapi_matchType",
]

# GBIF match type of names only matched to a genus or higher taxon
HIGHERRANK_MATCH_TYPE = "HIGHERRANK"

# Prefix of mapped columns that end up in the published tables
DWC_PREFIX = "dwc_"

# Characters marking an approximate observation date, e.g. "<1995" or "2001?"
APPROXIMATE_DATE_MARKERS = r"[?<>]"

# Separator of multi-valued cells such as "Europe | Asia"
MULTI_VALUE_DELIMITER = " | "

CC0_LICENSE = "http://creativecommons.org/publicdomain/zero/1.0/"

NATIVE_RANGE = "native range"
PATHWAY_OF_INTRODUCTION = "pathway of introduction"
DEGREE_OF_ESTABLISHMENT = "degree of establishment"
