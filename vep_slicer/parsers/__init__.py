"""Header and data line parsers for CSQ-annotated VCF streams."""

from vep_slicer.parsers.header import build_header, parse_csq_format
from vep_slicer.parsers.row import expand_row, iter_csq_entries, parse_raw_fields

__all__ = [
    "build_header",
    "parse_csq_format",
    "expand_row",
    "iter_csq_entries",
    "parse_raw_fields",
]
