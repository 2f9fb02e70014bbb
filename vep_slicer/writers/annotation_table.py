"""VEP default output format.

Fixed leading columns (OUTPUT_COLS) followed by an ``Extra`` column that
carries every other non-empty combined column as ``key=value`` pairs:

    #Uploaded_variation  Location  Allele  Gene  ...  Existing_variation  Extra
    rs123  1:100-100  T  GENE1  ...  -  IMPACT=HIGH;SYMBOL=ABC
"""

from vep_slicer.models import OUTPUT_COLS, HeaderBundle, Row
from vep_slicer.utils import is_missing
from vep_slicer.writers.base import Encoder, render_value


class AnnotationTableEncoder(Encoder):
    """VEP-style annotation table with a catch-all Extra column."""

    def __init__(self, output_cols: tuple[str, ...] = OUTPUT_COLS) -> None:
        self.output_cols = output_cols

    def header(self, header: HeaderBundle) -> list[object]:
        return ["#" + "\t".join(self.output_cols)]

    def rows(self, header: HeaderBundle, rows: list[Row]) -> list[object]:
        lines: list[object] = []
        for source_row in rows:
            row = dict(source_row)
            if not row.get("Uploaded_variation") and row.get("ID"):
                row["Uploaded_variation"] = row.pop("ID")

            # Leading fields are consumed so they never repeat in Extra
            fields = [
                render_value(row.pop(column, None))
                for column in self.output_cols
                if column != "Extra"
            ]

            extra = [
                f"{column}={row[column]}"
                for column in header.combined_columns
                if not is_missing(row.get(column))
            ]

            lines.append("\t".join(fields + [";".join(extra)]))
        return lines
