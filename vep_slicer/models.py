"""Data models for VCF slicing.

Header bundle, output mode and range-gate decisions shared by the
parsers, encoders and the pipeline driver.
"""

from dataclasses import dataclass, field
from enum import Enum, auto

# A normalized row: column name -> value. Missing values are absent keys.
Row = dict[str, str]

# Synthetic column inserted at index 1 of the combined columns
LOCATION_COLUMN = "Location"

# Fixed leading schema of the VEP default output format
OUTPUT_COLS: tuple[str, ...] = (
    "Uploaded_variation",
    "Location",
    "Allele",
    "Gene",
    "Feature",
    "Feature_type",
    "Consequence",
    "cDNA_position",
    "CDS_position",
    "Protein_position",
    "Amino_acids",
    "Codons",
    "Existing_variation",
    "Extra",
)

# Raw VCF columns never carried into the combined columns
EXCLUDED_COLUMNS: frozenset[str] = frozenset(
    {"CHROM", "POS", "REF", "ALT", "INFO", "QUAL", "FILTER"}
)


class OutputMode(str, Enum):
    """Output encoding of a slice."""

    RAW = "vcf"
    STRUCTURED = "parsed"
    TEXT = "txt"
    ANNOTATION_TABLE = "vep"


class GateDecision(Enum):
    """Outcome of the range gate for one line."""

    EMIT = auto()
    SKIP = auto()
    STOP = auto()


@dataclass(frozen=True)
class HeaderBundle:
    """Structured view of the comment lines preceding the data.

    Attributes:
        raw_columns: Columns of the ``#CHROM`` line, in file order
        csq_columns: Sub-fields declared by the CSQ ``Format:`` fragment
        combined_columns: Output schema for parsed and flat formats
        descriptions: Meta-header key -> description text
        excluded_columns: Raw columns left out of the combined columns
    """

    raw_columns: tuple[str, ...] = ()
    csq_columns: tuple[str, ...] = ()
    combined_columns: tuple[str, ...] = ()
    descriptions: dict[str, str] = field(default_factory=dict)
    excluded_columns: frozenset[str] = EXCLUDED_COLUMNS

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-serialisable view of the header."""
        return {
            "combined": list(self.combined_columns),
            "headers": list(self.raw_columns),
            "csq": list(self.csq_columns),
            "descriptions": dict(self.descriptions),
        }
