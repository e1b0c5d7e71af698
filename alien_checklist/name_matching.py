"""Scientific name lookup against the GBIF backbone taxonomy.

The pipeline only needs four values per name (canonical name, match type,
confidence and rank), so the matcher is a plain callable that can be
swapped for a stub in tests.
"""

import logging
from typing import Any, Dict, Optional

import requests

from alien_checklist.defaults import GBIF_SPECIES_MATCH_ENDPOINT, HTTP_TIMEOUT
from alien_checklist.types import NameMatch

logger = logging.getLogger(__name__)

USER_AGENT = "AlienChecklistDarwinCore/1.0"


def parse_species_match(data: Dict[str, Any]) -> NameMatch:
    """
    Convert a GBIF ``species/match`` response into a NameMatch.

    A ``NONE`` match carries no usable name, so its canonical name and rank
    are dropped even if GBIF returns them.
    """
    match_type = data.get("matchType")
    if match_type == "NONE":
        return NameMatch(
            canonical_name=None,
            match_type=match_type,
            confidence=data.get("confidence"),
            rank=None,
        )
    return NameMatch(
        canonical_name=data.get("canonicalName"),
        match_type=match_type,
        confidence=data.get("confidence"),
        rank=data.get("rank"),
    )


class GbifNameMatcher:
    """Matches scientific names with the GBIF species match API."""

    def __init__(
        self,
        endpoint: str = GBIF_SPECIES_MATCH_ENDPOINT,
        timeout: Optional[float] = HTTP_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.endpoint = endpoint
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})

    def __call__(self, scientific_name: str) -> NameMatch:
        response = self.session.get(
            self.endpoint,
            params={"name": scientific_name, "strict": "false"},
            timeout=self.timeout,
        )
        # A failed lookup aborts the run, there is no partial output
        response.raise_for_status()
        match = parse_species_match(response.json())
        logger.debug(f"{scientific_name!r} matched as {match.match_type}")
        return match
