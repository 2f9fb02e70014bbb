"""VCF header model builder.

Builds a HeaderBundle from the comment lines that precede the first data
line. Lines are scanned from the last one backwards so the ``#CHROM``
column line nearest the data wins over any earlier single-``#`` line,
and the CSQ declaration is found wherever it sits.

Recognised lines:
    ##INFO=<ID=CSQ,...,Description="... Format: Allele|Gene|...">
    #CHROM  POS  ID  REF  ALT  QUAL  FILTER  INFO  [FORMAT  samples...]
    ##key=value   (any other meta line, kept as a description)
"""

import logging
import re
from collections.abc import Iterable

from vep_slicer.models import EXCLUDED_COLUMNS, LOCATION_COLUMN, HeaderBundle

logger = logging.getLogger(__name__)

CSQ_DECLARATION = re.compile(r"INFO=<ID=CSQ")
CSQ_FORMAT = re.compile(r'Format: (.+?)"')
META_KEY_VALUE = re.compile(r"(.+?)=(.+)")
FILE_SUFFIX = re.compile(r" file .+$")


def parse_csq_format(line: str) -> list[str]:
    """Extract the CSQ sub-field names from an INFO declaration.

    Args:
        line: ``##INFO=<ID=CSQ...>`` meta line

    Returns:
        Ordered list of sub-field names (empty if no Format fragment)

    Example:
        >>> parse_csq_format('##INFO=<ID=CSQ,Description="x. Format: Allele|Gene">')
        ["Allele", "Gene"]
    """
    match = CSQ_FORMAT.search(line)
    if not match:
        return []
    return match.group(1).split("|")


def excluded_columns(raw_columns: list[str]) -> set[str]:
    """Get the raw columns left out of the combined columns.

    The fixed VCF fields are always excluded, as is every column from
    INFO to the end of the line (FORMAT and sample columns).

    Args:
        raw_columns: Columns of the ``#CHROM`` line

    Returns:
        Set of excluded column names
    """
    excluded = set(EXCLUDED_COLUMNS)
    for column in reversed(raw_columns):
        if column == "INFO":
            break
        excluded.add(column)
    return excluded


def build_header(header_lines: Iterable[str]) -> HeaderBundle:
    """Build the header bundle from comment lines in file order.

    Args:
        header_lines: Comment lines preceding the first data line

    Returns:
        HeaderBundle with raw, CSQ and combined columns and descriptions
    """
    raw_columns: list[str] = []
    csq_columns: list[str] = []
    descriptions: dict[str, str] = {}
    csq_found = False
    columns_found = False

    for line in reversed(list(header_lines)):
        if not csq_found and line.startswith("##") and CSQ_DECLARATION.search(line):
            csq_columns = parse_csq_format(line)
            csq_found = bool(csq_columns)
        elif not columns_found and line.startswith("#") and not line.startswith("##"):
            raw_columns = line[1:].split()
            columns_found = True
        else:
            # Other meta lines, e.g. plugin descriptions
            match = META_KEY_VALUE.match(line.lstrip("#"))
            if match:
                key, value = match.groups()
                descriptions[key] = FILE_SUFFIX.sub("", value)

    excluded = excluded_columns(raw_columns)
    combined: list[str] = []
    for column in raw_columns + csq_columns:
        if column in excluded or column == LOCATION_COLUMN or column in combined:
            continue
        combined.append(column)
    combined.insert(1, LOCATION_COLUMN)

    logger.debug(
        "Header built: %d raw, %d CSQ, %d combined columns",
        len(raw_columns), len(csq_columns), len(combined),
    )

    return HeaderBundle(
        raw_columns=tuple(raw_columns),
        csq_columns=tuple(csq_columns),
        combined_columns=tuple(combined),
        descriptions=descriptions,
        excluded_columns=frozenset(excluded),
    )
