"""Pytest fixtures for vep_slicer tests."""

import gzip
from pathlib import Path

import pytest

from vep_slicer.models import HeaderBundle
from vep_slicer.parsers import build_header

CSQ_FORMAT = "Allele|Consequence|IMPACT|SYMBOL|Gene|Feature_type|Feature"

HEADER_LINES = [
    "##fileformat=VCFv4.2",
    '##VEP="v110" time="2023-06-01 10:00:00"',
    "##INFO=<ID=CSQ,Number=.,Type=String,Description=\"Consequence annotations "
    f"from Ensembl VEP. Format: {CSQ_FORMAT}\">",
    "##IMPACT=Subjective impact classification file /data/plugins/impact.txt",
    "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO",
]

# Five data lines, six rows once CSQ entries are expanded:
# - line 1: two CSQ entries
# - line 2: chr prefix, deletion, no ID
# - line 3: no CSQ field
# - line 4: END= token, short CSQ entry
# - line 5: escaped comma (&) in SYMBOL
DATA_LINES = [
    "1\t100\trs1\tA\tG\t.\tPASS\t"
    "CSQ=G|missense_variant|MODERATE|ABC|ENSG1|Transcript|ENST1,"
    "G|intron_variant|MODIFIER|ABC|ENSG1|Transcript|ENST2",
    "chr2\t200\t.\tAT\tA\t50\tPASS\tDP=10;CSQ=-|frameshift_variant|HIGH|DEF|ENSG2|Transcript|ENST3",
    "3\t300\t.\tC\tT\t.\t.\tDP=5",
    "X\t400\t.\tN\t<DEL>\t.\t.\tSVTYPE=DEL;END=450;CSQ=<DEL>|feature_ablation|HIGH",
    "5\t500\trs5\tG\tC\t.\t.\tCSQ=C|synonymous_variant|LOW|GHI&JKL|ENSG5|Transcript|ENST5",
]


@pytest.fixture
def header_lines() -> list[str]:
    """Header comment lines of the sample VCF."""
    return list(HEADER_LINES)


@pytest.fixture
def data_lines() -> list[str]:
    """Data lines of the sample VCF."""
    return list(DATA_LINES)


@pytest.fixture
def vcf_lines() -> list[str]:
    """All lines of the sample VCF."""
    return HEADER_LINES + DATA_LINES


@pytest.fixture
def header() -> HeaderBundle:
    """Header bundle built from the sample VCF header."""
    return build_header(HEADER_LINES)


@pytest.fixture
def vep_vcf(tmp_path: Path) -> Path:
    """Gzipped sample VCF on disk."""
    vcf = tmp_path / "output.vcf.gz"
    with gzip.open(vcf, "wt") as f:
        f.write("\n".join(HEADER_LINES + DATA_LINES) + "\n")
    return vcf
