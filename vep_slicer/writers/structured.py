"""Structured (parsed) output: header bundle and row mappings as-is."""

from vep_slicer.models import HeaderBundle, Row
from vep_slicer.writers.base import Encoder


class StructuredEncoder(Encoder):
    """Pass the header bundle and rows through without rendering."""

    def header(self, header: HeaderBundle) -> list[object]:
        return [header]

    def rows(self, header: HeaderBundle, rows: list[Row]) -> list[object]:
        return list(rows)
