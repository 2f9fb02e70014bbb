"""Tests for io_utils module (gzip support)."""

import gzip
from pathlib import Path

from vep_slicer.io_utils import is_gzipped, iter_lines, smart_open


class TestIsGzipped:
    """Test gzip file detection."""

    def test_gzipped_file(self, tmp_path: Path) -> None:
        gz_file = tmp_path / "test.vcf.gz"
        with gzip.open(gz_file, "wt") as f:
            f.write("##fileformat=VCFv4.2\n")

        assert is_gzipped(gz_file) is True

    def test_plain_file(self, tmp_path: Path) -> None:
        vcf_file = tmp_path / "test.vcf"
        vcf_file.write_text("##fileformat=VCFv4.2\n")

        assert is_gzipped(vcf_file) is False

    def test_gz_extension_but_not_gzipped(self, tmp_path: Path) -> None:
        """Magic bytes win over the extension."""
        fake_gz = tmp_path / "fake.vcf.gz"
        fake_gz.write_text("not gzipped content")

        assert is_gzipped(fake_gz) is False

    def test_empty_file_falls_back_to_extension(self, tmp_path: Path) -> None:
        empty_gz = tmp_path / "empty.vcf.gz"
        empty_gz.write_bytes(b"")

        assert is_gzipped(empty_gz) is True


class TestSmartOpen:

    def test_open_gzipped(self, tmp_path: Path) -> None:
        gz_file = tmp_path / "test.vcf.gz"
        with gzip.open(gz_file, "wt") as f:
            f.write("line1\nline2\n")

        with smart_open(gz_file) as f:
            assert f.read() == "line1\nline2\n"

    def test_open_plain(self, tmp_path: Path) -> None:
        vcf_file = tmp_path / "test.vcf"
        vcf_file.write_text("line1\n")

        with smart_open(vcf_file) as f:
            assert f.readlines() == ["line1\n"]


class TestIterLines:
    """Test iter_lines."""

    def test_strips_terminators(self, tmp_path: Path) -> None:
        vcf_file = tmp_path / "test.vcf"
        vcf_file.write_bytes(b"line1\r\nline2\nline3")

        assert list(iter_lines(vcf_file)) == ["line1", "line2", "line3"]

    def test_gzipped(self, vep_vcf: Path, vcf_lines: list[str]) -> None:
        assert list(iter_lines(vep_vcf)) == vcf_lines

    def test_close_early(self, vep_vcf: Path) -> None:
        """Closing the generator early closes the file."""
        lines = iter_lines(vep_vcf)
        assert next(lines).startswith("##fileformat")

        lines.close()

        assert list(lines) == []
