"""Flat tab-separated text output over the combined columns.

Header:
    #Uploaded_variation  Location  Allele  Gene  ...
Rows render missing values as ``-``.
"""

from vep_slicer.models import HeaderBundle, Row
from vep_slicer.writers.base import Encoder, render_value


class TextEncoder(Encoder):
    """Tab-separated lines in combined-column order."""

    def header(self, header: HeaderBundle) -> list[object]:
        columns = [
            "Uploaded_variation" if column == "ID" else column
            for column in header.combined_columns
        ]
        return ["#" + "\t".join(columns)]

    def rows(self, header: HeaderBundle, rows: list[Row]) -> list[object]:
        lines: list[object] = []
        for source_row in rows:
            row = dict(source_row)
            if not row.get("Uploaded_variation") and row.get("ID"):
                row["Uploaded_variation"] = row["ID"]
            lines.append(
                "\t".join(render_value(row.get(column)) for column in header.combined_columns)
            )
        return lines
