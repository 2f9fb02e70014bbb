"""Tests for the VCF header model builder."""

import pytest

from vep_slicer.models import HeaderBundle
from vep_slicer.parsers.header import build_header, excluded_columns, parse_csq_format

CSQ_LINE = (
    '##INFO=<ID=CSQ,Number=.,Type=String,Description="Consequence annotations '
    'from Ensembl VEP. Format: Allele|Gene">'
)


class TestBuildHeader:
    """Tests for build_header."""

    def test_columns(self, header: HeaderBundle) -> None:
        """Test raw, CSQ and combined columns of a VEP header."""
        assert header.raw_columns == (
            "CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER", "INFO",
        )
        assert header.csq_columns == (
            "Allele", "Consequence", "IMPACT", "SYMBOL", "Gene", "Feature_type", "Feature",
        )
        assert header.combined_columns == (
            "ID", "Location", "Allele", "Consequence", "IMPACT",
            "SYMBOL", "Gene", "Feature_type", "Feature",
        )

    def test_descriptions(self, header: HeaderBundle) -> None:
        """Test that meta lines become descriptions with file paths removed."""
        assert header.descriptions["fileformat"] == "VCFv4.2"
        assert header.descriptions["IMPACT"] == "Subjective impact classification"
        assert header.descriptions["VEP"] == '"v110" time="2023-06-01 10:00:00"'

    def test_csq_declaration_not_a_description(self, header: HeaderBundle) -> None:
        """Test that the CSQ declaration only supplies CSQ columns."""
        assert "INFO" not in header.descriptions

    def test_columns_after_info_excluded(self) -> None:
        """Test that FORMAT and sample columns are excluded."""
        header = build_header([
            CSQ_LINE,
            "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tSAMPLE1\tSAMPLE2",
        ])

        assert header.combined_columns == ("ID", "Location", "Allele", "Gene")
        assert {"FORMAT", "SAMPLE1", "SAMPLE2"} <= header.excluded_columns

    def test_last_column_line_wins(self) -> None:
        """Test that the column line closest to the data is used."""
        header = build_header([
            "#OLD\tCOLUMNS",
            CSQ_LINE,
            "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO",
        ])

        assert header.raw_columns[0] == "CHROM"
        assert "OLD" not in header.combined_columns

    def test_csq_line_position_independent(self) -> None:
        """Test that the CSQ declaration is found after the column line."""
        header = build_header([
            "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO",
            CSQ_LINE,
        ])

        assert header.csq_columns == ("Allele", "Gene")

    def test_no_csq_declaration(self) -> None:
        """Test header of an unannotated VCF."""
        header = build_header([
            "##fileformat=VCFv4.2",
            "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO",
        ])

        assert header.csq_columns == ()
        assert header.combined_columns == ("ID", "Location")

    def test_space_separated_column_line(self) -> None:
        """Test that the column line is split on any whitespace."""
        header = build_header([CSQ_LINE, "#CHROM POS ID REF ALT QUAL FILTER INFO"])

        assert header.combined_columns == ("ID", "Location", "Allele", "Gene")

    @pytest.mark.parametrize(
        "column_line",
        [
            "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO",
            "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tS1",
            "#CHROM\tPOS\tREF\tALT\tID\tQUAL\tFILTER\tINFO",
        ],
    )
    def test_fixed_columns_never_combined(self, column_line: str) -> None:
        """Test that fixed VCF columns are excluded and Location is second."""
        header = build_header([CSQ_LINE, column_line])

        for column in ("CHROM", "POS", "REF", "ALT", "QUAL", "FILTER", "INFO"):
            assert column not in header.combined_columns
        assert header.combined_columns[1] == "Location"

    def test_to_dict(self, header: HeaderBundle) -> None:
        """Test JSON view of the header."""
        data = header.to_dict()

        assert data["combined"][1] == "Location"
        assert data["headers"][0] == "CHROM"
        assert data["csq"][0] == "Allele"
        assert data["descriptions"]["fileformat"] == "VCFv4.2"


class TestParseCsqFormat:
    """Tests for CSQ Format fragment extraction."""

    def test_parse(self) -> None:
        assert parse_csq_format(CSQ_LINE) == ["Allele", "Gene"]

    def test_missing_format(self) -> None:
        """Test declaration without a Format fragment."""
        assert parse_csq_format('##INFO=<ID=CSQ,Description="no format">') == []

    def test_missing_format_leaves_csq_empty(self) -> None:
        header = build_header([
            '##INFO=<ID=CSQ,Description="no format">',
            "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO",
        ])

        assert header.csq_columns == ()


class TestExcludedColumns:
    """Tests for the combined-column exclusion set."""

    def test_without_info_column(self) -> None:
        """Test that every raw column is excluded when INFO is absent."""
        assert excluded_columns(["CHROM", "POS", "ID"]) >= {"CHROM", "POS", "ID"}

    def test_id_kept(self) -> None:
        assert "ID" not in excluded_columns(
            ["CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER", "INFO"]
        )
