from typing import Callable, NamedTuple, Optional, TypeAlias

TaxonId: TypeAlias = str


class NameMatch(NamedTuple):
    """Result of matching a scientific name against the GBIF backbone."""

    canonical_name: Optional[str]
    match_type: Optional[str]
    confidence: Optional[int]
    rank: Optional[str]


NameMatcher: TypeAlias = Callable[[str], NameMatch]


class DatasetMetadata(NamedTuple):
    """Literal values stamped onto every row of the taxon core."""

    shortname: str
    dataset_name: str
    dataset_id: str
    rights_holder: str
    institution_code: str
    location_id: str
    license: str
    language: str = "en"
