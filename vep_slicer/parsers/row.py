"""VCF data line expander.

Turns one data line into one normalized row per CSQ annotation entry,
or a single row built from the raw columns when the line carries no
CSQ field.

CSQ payload format (INFO column):
    CSQ=T|missense_variant|GENE1,T|intron_variant|GENE2;DP=10
Entries are comma-separated, fields pipe-separated, and a literal ``&``
inside a field stands for an escaped comma.
"""

import logging
import re
from collections.abc import Iterator

from vep_slicer.models import LOCATION_COLUMN, HeaderBundle, Row
from vep_slicer.utils import (
    MISSING_IDS,
    make_location,
    make_variant_id,
    normalize_chromosome,
)

logger = logging.getLogger(__name__)

CSQ_FIELD = re.compile(r"CSQ=(.+?)(?:;|$|\s)")
END_TOKEN = re.compile(r"(?:^|[;\s])END=(\d+)")


def iter_csq_entries(line: str) -> Iterator[list[str]]:
    """Iterate over the CSQ annotation entries of a data line.

    Every ``CSQ=`` occurrence on the line contributes its entries.
    Trailing empty fields of an entry are dropped.

    Args:
        line: VCF data line

    Yields:
        Pipe-split field values of each annotation entry

    Example:
        >>> list(iter_csq_entries("1 100 . A G . . CSQ=T|G1,C|G2&G3"))
        [["T", "G1"], ["C", "G2,G3"]]
    """
    for match in CSQ_FIELD.finditer(line):
        for entry in match.group(1).split(","):
            values = entry.replace("&", ",").split("|")
            while values and values[-1] == "":
                values.pop()
            yield values


def parse_raw_fields(line: str, header: HeaderBundle) -> Row:
    """Map a data line onto the raw columns and add synthetic fields.

    Normalizes CHROM, adds the ``Location`` span and fills in a
    ``chrom_pos_ref/alt`` ID when the line has none.

    Args:
        line: VCF data line
        header: Header bundle of the stream

    Returns:
        Raw field mapping including Location and ID
    """
    raw: Row = dict(zip(header.raw_columns, line.split()))

    chrom = raw.get("CHROM")
    if chrom is not None:
        chrom = raw["CHROM"] = normalize_chromosome(chrom)
    pos = raw.get("POS")
    ref = raw.get("REF", "")
    alt = raw.get("ALT", "")

    if chrom is None or pos is None or not pos.isdecimal():
        logger.warning("Cannot derive location for line: %s", line[:80])
        return raw

    start = int(pos)
    end_match = END_TOKEN.search(line)
    if end_match:
        end = int(end_match.group(1))
    else:
        end = start + len(ref) - 1
    raw[LOCATION_COLUMN] = make_location(chrom, start, end)

    if raw.get("ID", "") in MISSING_IDS:
        raw["ID"] = make_variant_id(chrom, pos, ref, alt)

    return raw


def expand_row(line: str, header: HeaderBundle) -> list[Row]:
    """Expand a data line into normalized rows.

    Args:
        line: VCF data line
        header: Header bundle of the stream

    Returns:
        One row per CSQ entry, or the raw field mapping when the line
        has no CSQ field. Never empty.

    Example:
        >>> rows = expand_row("1\\t100\\t.\\tA\\tG\\t.\\t.\\tCSQ=T|GENE1", header)
        >>> rows[0]["Location"], rows[0]["Gene"], rows[0]["ID"]
        ("1:100-100", "GENE1", "1_100_A/G")
    """
    raw = parse_raw_fields(line, header)

    rows: list[Row] = []
    for values in iter_csq_entries(line):
        annotation = dict(zip(header.csq_columns, values))
        row: Row = {}
        for column in header.combined_columns:
            value = annotation[column] if column in annotation else raw.get(column)
            if value is not None:
                row[column] = value
        rows.append(row)

    if not rows:
        rows.append(raw)

    return rows
