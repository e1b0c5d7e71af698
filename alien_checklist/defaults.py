"""Centralized default configuration values for the checklist pipeline.

These defaults are used by CLI argument parsing as fallbacks when arguments
aren't provided.
"""

from alien_checklist.constants import CC0_LICENSE

# Data source defaults
SPREADSHEET_KEY: str | None = None
WORKSHEET_TITLE = "checklist"
LOG_FILE = "run.log"
HTTP_TIMEOUT = 30.0

# GBIF backbone lookup
GBIF_SPECIES_MATCH_ENDPOINT = "https://api.gbif.org/v1/species/match"

# Output defaults
OUTPUT_DIR = "data/processed"
RAW_DATA_PATH = "data/raw/checklist.csv"

# Dataset metadata
DATASET_SHORTNAME = "alien-scheldt-checklist"
DATASET_NAME = (
    "Checklist of alien species in the Scheldt estuary in Flanders and the Netherlands"
)
DATASET_ID = ""
RIGHTS_HOLDER = "INBO"
INSTITUTION_CODE = "INBO"
# The estuary spans Flanders and the Dutch province of Zeeland
LOCATION_ID = "ISO_3166-2:BE-VLG|ISO_3166-2:NL-ZE"
LICENSE = CC0_LICENSE
LANGUAGE = "en"
