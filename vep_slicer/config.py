"""Configuration dataclasses for VCF slicing.

SliceConfig describes one request (line window, region, filter and
output mode); FilterScript holds the site settings of the external
filter program the stream is piped through when a filter is requested.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from vep_slicer.exceptions import ConfigurationError
from vep_slicer.models import OutputMode
from vep_slicer.range_gate import MAX_LINE

# Values accepted for the "format" request key
FORMATS = {
    OutputMode.RAW.value: OutputMode.RAW,
    OutputMode.TEXT.value: OutputMode.TEXT,
    OutputMode.ANNOTATION_TABLE.value: OutputMode.ANNOTATION_TABLE,
}

# "<field> in <listname>" filter clauses reference uploaded list files
LIST_REFERENCE = re.compile(r"( in )([a-z0-9]+)")


@dataclass
class SliceConfig:
    """Options for one slice of a VCF file.

    Attributes:
        from_line: First data line to return (1-based, 0 = from the start)
        to_line: Last data line to return (None = no limit)
        location: Region to retrieve through the tabix index
        filter_expression: Predicate for the external filter program
        mode: Output encoding
    """

    from_line: int = 0
    to_line: int | None = None
    location: str | None = None
    filter_expression: str | None = None
    mode: OutputMode = OutputMode.RAW

    def __post_init__(self) -> None:
        """Normalize values and coerce the output mode."""
        if not isinstance(self.mode, OutputMode):
            try:
                self.mode = OutputMode(self.mode)
            except ValueError:
                raise ConfigurationError(f"Unknown output mode: {self.mode}")

        # A region needs at least one word character to be usable
        if self.location is not None and not re.search(r"\w", self.location):
            self.location = None

        if not self.filter_expression:
            self.filter_expression = None

    @classmethod
    def from_params(cls, params: Mapping[str, object]) -> "SliceConfig":
        """Create a config from request parameters.

        Accepted keys: ``from``, ``to``, ``location``, ``filter``,
        ``format`` (vcf, txt or vep) and ``parsed``. A missing or zero
        ``to`` means no upper limit.

        Args:
            params: Request parameters

        Returns:
            Validated SliceConfig

        Raises:
            ConfigurationError: If parameters are invalid or contradictory
        """
        output_format = params.get("format")
        parsed = bool(params.get("parsed"))

        if parsed and output_format:
            raise ConfigurationError("'parsed' cannot be combined with 'format'")

        if parsed:
            mode = OutputMode.STRUCTURED
        elif output_format:
            mode = FORMATS.get(str(output_format))
            if mode is None:
                raise ConfigurationError(
                    f"Unknown format '{output_format}'. "
                    f"Valid options: {sorted(FORMATS)}"
                )
        else:
            mode = OutputMode.RAW

        try:
            from_line = int(params.get("from") or 0)
            # Zero, given as a number or a string, means no upper limit
            to_line = int(params.get("to") or 0) or None
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Line range must be integers: {e}")

        location = params.get("location")
        filter_expression = params.get("filter")

        config = cls(
            from_line=from_line,
            to_line=to_line,
            location=str(location) if location is not None else None,
            filter_expression=str(filter_expression) if filter_expression else None,
            mode=mode,
        )
        errors = config.validate()
        if errors:
            raise ConfigurationError("; ".join(errors))
        return config

    @property
    def end_line(self) -> int:
        """Last data line to return, with MAX_LINE standing in for no limit."""
        return MAX_LINE if self.to_line is None else self.to_line

    @property
    def filter_limit(self) -> int:
        """Row limit handed to the external filter program."""
        return self.end_line - self.from_line + 1

    @property
    def has_filter(self) -> bool:
        return self.filter_expression is not None

    @property
    def is_parsed(self) -> bool:
        """Whether rows go through the header and row parsers."""
        return self.mode is not OutputMode.RAW

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors.

        Returns:
            List of error messages (empty if valid)
        """
        errors: list[str] = []

        if self.from_line < 0:
            errors.append(f"from must be >= 0: {self.from_line}")

        if self.to_line is not None and self.to_line < 0:
            errors.append(f"to must be >= 0: {self.to_line}")

        return errors


@dataclass
class FilterScript:
    """Site settings for the external filter program (filter_vep).

    Attributes:
        script: Path to the filter script
        interpreter: Command used to run the script
        include_dirs: Library directories passed as ``-I``
        options: Extra script options; options set to None are dropped
        list_dir: Directory holding list files referenced by ``in`` clauses
    """

    script: Path
    interpreter: list[str] = field(default_factory=lambda: ["perl"])
    include_dirs: list[Path] = field(default_factory=list)
    options: dict[str, str | None] = field(default_factory=dict)
    list_dir: Path | None = None

    def __post_init__(self) -> None:
        """Ensure paths are Path objects."""
        if isinstance(self.script, str):
            self.script = Path(self.script)
        self.include_dirs = [Path(d) for d in self.include_dirs]
        if isinstance(self.list_dir, str):
            self.list_dir = Path(self.list_dir)

    def expand_expression(self, expression: str) -> str:
        """Point ``in <list>`` clauses at files in the list directory.

        Example:
            >>> FilterScript(Path("f.pl"), list_dir=Path("/tmp")).expand_expression(
            ...     "Gene in mylist")
            "Gene in /tmp/mylist"
        """
        if self.list_dir is None or " in " not in expression:
            return expression
        return LIST_REFERENCE.sub(
            lambda m: f"{m.group(1)}{self.list_dir}/{m.group(2)}", expression
        )

    def build_command(self, expression: str, start: int, limit: int) -> list[str]:
        """Build the filter command line.

        Args:
            expression: Filter predicate
            start: Offset of the first matching row to output
            limit: Maximum number of matching rows to output

        Returns:
            Command argument list
        """
        cmd = list(self.interpreter)
        for include_dir in self.include_dirs:
            cmd += ["-I", str(include_dir)]
        cmd.append(str(self.script))
        for option, value in self.options.items():
            if value is not None:
                cmd += [option, value]
        cmd += [
            "-filter", self.expand_expression(expression),
            "-format", "vcf",
            "-ontology",
            "-only_matched",
            "-start", str(start),
            "-limit", str(limit),
        ]
        return cmd
