"""Streaming slice driver.

Wires a line source through the range gate, header builder, row
expander and output encoder, handing each output unit to the caller as
soon as it is produced. Nothing beyond the header comment lines is
buffered.

Stream states:
    1. First line must be a comment line (StructuralHeaderError otherwise)
    2. Comment lines are buffered until the first data line
    3. First data line builds the header bundle and emits the header unit
    4. Each data line emits its expanded rows
    5. A stream without data lines still emits the header unit at the end

Example:
    >>> vcf = VcfSlice(Path("output.vcf.gz"))
    >>> vcf.iterate({"from": 1, "to": 50, "format": "txt"}, print)
"""

import dataclasses
import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from pathlib import Path

from vep_slicer.config import FilterScript, SliceConfig
from vep_slicer.exceptions import ConfigurationError, StructuralHeaderError
from vep_slicer.models import GateDecision, HeaderBundle, OutputMode, Row
from vep_slicer.parsers import build_header, expand_row
from vep_slicer.range_gate import RangeGate
from vep_slicer.sources import LineSource, build_source
from vep_slicer.utils import is_comment
from vep_slicer.writers import get_encoder

logger = logging.getLogger(__name__)

Callback = Callable[[object], object]


def iter_batches(
    source: LineSource | Iterable[str],
    config: SliceConfig,
) -> Iterator[list[object]]:
    """Stream output units grouped by the source line that produced them.

    The range gate applies only when no filter is active; the filter
    program is invoked with the same window and applies it itself.
    The source is closed when the generator finishes, fails or is
    closed early.

    Args:
        source: Lines of the VCF (a LineSource or any iterable of str)
        config: Slice request

    Yields:
        Output units of the header, then of each emitted data line

    Raises:
        StructuralHeaderError: If the stream does not start with a header
    """
    gate = None if config.has_filter else RangeGate(config.from_line, config.to_line)
    encoder = get_encoder(config.mode) if config.is_parsed else None

    header_lines: list[str] = []
    header: HeaderBundle | None = None
    first_line = True

    try:
        for line in source:
            line = line.rstrip("\r\n")
            if not line.strip():
                continue

            if first_line:
                if not is_comment(line):
                    raise StructuralHeaderError(f"Header missing: {line[:200]}")
                first_line = False

            if gate is not None:
                decision = gate.check(line)
                if decision is GateDecision.SKIP:
                    continue
                if decision is GateDecision.STOP:
                    logger.debug("Reached end of window at data line %d", gate.to_line)
                    break

            if encoder is None:
                yield [line]
                continue

            if is_comment(line):
                if header is None:
                    header_lines.append(line)
                continue

            if header is None:
                header = build_header(header_lines)
                yield encoder.header(header)

            yield encoder.rows(header, expand_row(line, header))

        # A filter that matched nothing still has to surface the header
        if encoder is not None and header is None:
            header = build_header(header_lines)
            yield encoder.header(header)
    finally:
        if isinstance(source, LineSource):
            source.close()


def iter_units(
    source: LineSource | Iterable[str],
    config: SliceConfig,
) -> Iterator[object]:
    """Stream output units one at a time.

    Units are text lines for the vcf, txt and vep formats; for the
    parsed format the first unit is the HeaderBundle and every further
    unit a row mapping.
    """
    batches = iter_batches(source, config)
    try:
        for batch in batches:
            yield from batch
    finally:
        batches.close()


def content_iterate(
    source: LineSource | Iterable[str],
    config: SliceConfig,
    callback: Callback,
) -> None:
    """Invoke ``callback`` once per output unit of a slice.

    Args:
        source: Lines of the VCF
        config: Slice request
        callback: Sink called with each output unit
    """
    for unit in iter_units(source, config):
        callback(unit)


def as_config(config: SliceConfig | Mapping[str, object] | None) -> SliceConfig:
    """Accept a SliceConfig or request parameters."""
    if config is None:
        return SliceConfig()
    if isinstance(config, SliceConfig):
        return config
    return SliceConfig.from_params(config)


class VcfSlice:
    """Slicing and conversion access to one bgzipped VEP output VCF.

    Args:
        vcf_file: Path to the VCF (bgzipped and tabix-indexed for locations)
        filter_script: Settings of the filter program, needed for filters
    """

    def __init__(self, vcf_file: Path, filter_script: FilterScript | None = None) -> None:
        self.vcf_file = Path(vcf_file)
        self.filter_script = filter_script

    def open_source(self, config: SliceConfig) -> LineSource:
        """Create the line source for a request."""
        return build_source(self.vcf_file, config, self.filter_script)

    def iter_units(
        self, config: SliceConfig | Mapping[str, object] | None = None
    ) -> Iterator[object]:
        """Stream output units of a slice of the file."""
        config = as_config(config)
        return iter_units(self.open_source(config), config)

    def iterate(
        self,
        config: SliceConfig | Mapping[str, object] | None,
        callback: Callback,
    ) -> None:
        """Invoke ``callback`` once per output unit of a slice of the file."""
        for unit in self.iter_units(config):
            callback(unit)

    def content(self, config: SliceConfig | Mapping[str, object] | None = None) -> str:
        """Get a slice of the file as text in the requested format.

        Raises:
            ConfigurationError: If the parsed format is requested
        """
        config = as_config(config)
        if config.mode is OutputMode.STRUCTURED:
            raise ConfigurationError("Parsed output is not text, use content_parsed()")
        return "\n".join(str(unit) for unit in self.iter_units(config))

    def content_parsed(
        self, config: SliceConfig | Mapping[str, object] | None = None
    ) -> tuple[HeaderBundle, list[Row], int]:
        """Get a slice of the file as header bundle and row mappings.

        The output mode of ``config`` is ignored.

        Returns:
            Tuple of (header, rows, number of data lines the rows came from)
        """
        config = dataclasses.replace(as_config(config), mode=OutputMode.STRUCTURED)

        header: HeaderBundle | None = None
        rows: list[Row] = []
        line_count = 0

        for batch in iter_batches(self.open_source(config), config):
            if header is None:
                header = batch[0]  # type: ignore[assignment]
                continue
            line_count += 1
            rows.extend(batch)  # type: ignore[arg-type]

        assert header is not None  # The header unit is always emitted
        return header, rows, line_count
