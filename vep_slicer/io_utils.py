"""I/O utilities for transparent gzip/bgzip handling.

Opens VCF files by magic bytes rather than extension, so bgzip-compressed
``.vcf.gz`` files and plain ``.vcf`` files are read the same way.

Example:
    for line in iter_lines(Path("output.vcf.gz")):
        process(line)
"""

import gzip
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator

# Gzip magic bytes (bgzip blocks share them)
GZIP_MAGIC = b"\x1f\x8b"


def is_gzipped(filepath: Path) -> bool:
    """Detect if a file is gzip-compressed.

    Checks magic bytes first, falls back to the extension if the file
    is too small or unreadable.

    Args:
        filepath: Path to file to check

    Returns:
        True if file is gzip-compressed
    """
    try:
        with open(filepath, "rb") as f:
            magic = f.read(2)
            if len(magic) >= 2:
                return magic == GZIP_MAGIC
    except OSError:
        pass

    return filepath.suffix == ".gz"


@contextmanager
def smart_open(filepath: Path) -> Iterator[IO[str]]:
    """Open a text file with automatic gzip detection.

    Args:
        filepath: Path to file (may be gzipped or bgzipped)

    Yields:
        Text file handle
    """
    if is_gzipped(filepath):
        f = gzip.open(filepath, "rt", encoding="utf-8")
    else:
        f = open(filepath, "rt", encoding="utf-8")

    try:
        yield f
    finally:
        f.close()


def iter_lines(filepath: Path) -> Iterator[str]:
    """Iterate over lines in a file with gzip auto-detection.

    Lines are stripped of trailing ``\\n`` and ``\\r``. The file is closed
    when the generator is exhausted or closed.

    Args:
        filepath: Path to file (may be gzipped)

    Yields:
        Lines from file
    """
    with smart_open(filepath) as f:
        for line in f:
            yield line.rstrip("\r\n")
