"""Utility functions for VCF row normalization.

Chromosome clean-up, location span and variant identifier synthesis
used by the row expander.
"""

import re

# Leading "chr", "chrom" or "chromosome", any case
CHROM_PREFIX = re.compile(r"^chr(om)?(osome)?", re.IGNORECASE)

# Values of the ID column that mean "no identifier"
MISSING_IDS = {"", "."}


def is_comment(line: str) -> bool:
    """Check if a line is a header/comment line.

    Args:
        line: Raw line from the VCF stream

    Returns:
        True if the line starts with ``#``
    """
    return line.startswith("#")


def is_missing(value: str | None) -> bool:
    """Check if a value renders as missing in flat outputs.

    Args:
        value: Column value (may be None)

    Returns:
        True for None and the empty string

    Example:
        >>> is_missing("")
        True
        >>> is_missing(".")
        False
    """
    return value is None or value == ""


def normalize_chromosome(chr_val: str) -> str:
    """Strip a leading chr/chrom/chromosome prefix from a chromosome name.

    Names starting with ``chr_`` are contig names and are kept as-is.

    Args:
        chr_val: Chromosome value from the CHROM column

    Returns:
        Normalized chromosome value

    Example:
        >>> normalize_chromosome("chr1")
        "1"
        >>> normalize_chromosome("Chromosome7")
        "7"
        >>> normalize_chromosome("CHR_HSCHR6_CTG1")
        "CHR_HSCHR6_CTG1"
    """
    if chr_val.lower().startswith("chr_"):
        return chr_val
    return CHROM_PREFIX.sub("", chr_val, count=1)


def make_location(chr_val: str, start: int, end: int) -> str:
    """Create a ``chrom:start-end`` location with ordered coordinates.

    Args:
        chr_val: Chromosome value
        start: First coordinate
        end: Second coordinate (may be lower than start)

    Returns:
        Location string with the lower coordinate first

    Example:
        >>> make_location("1", 120, 100)
        "1:100-120"
    """
    low, high = sorted((start, end))
    return f"{chr_val}:{low}-{high}"


def trim_indel_alleles(ref: str, alt: str) -> tuple[str, str]:
    """Drop the shared padding base of an indel's alleles.

    Only applied when REF and ALT differ in length; an allele left
    empty becomes ``-``.

    Args:
        ref: Reference allele
        alt: Alternate allele

    Returns:
        Tuple of (ref, alt) as used in synthesized identifiers

    Example:
        >>> trim_indel_alleles("AT", "A")
        ("T", "-")
        >>> trim_indel_alleles("A", "G")
        ("A", "G")
    """
    if len(ref) == len(alt):
        return ref, alt
    return ref[1:] or "-", alt[1:] or "-"


def make_variant_id(chr_val: str, pos: str, ref: str, alt: str) -> str:
    """Create a ``chrom_pos_ref/alt`` identifier for an unnamed variant.

    Args:
        chr_val: Normalized chromosome
        pos: Position as found in the POS column
        ref: Reference allele
        alt: Alternate allele

    Returns:
        Synthetic variant identifier

    Example:
        >>> make_variant_id("1", "100", "AT", "A")
        "1_100_T/-"
    """
    ref, alt = trim_indel_alleles(ref, alt)
    return f"{chr_val}_{pos}_{ref}/{alt}"
