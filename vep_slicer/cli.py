"""Typer CLI for VCF slicing.

Usage:
    # Data lines 1-50 as a VEP-style annotation table
    vep-slicer slice output.vcf.gz --from 1 --to 50 --format vep

    # A region, filtered, as flat text
    vep-slicer slice output.vcf.gz -l 7:140453100-140453200 \\
        --filter "Consequence is missense_variant" --filter-script filter_vep

    # Parsed rows as JSON lines
    vep-slicer slice output.vcf.gz --parsed

    # Columns and descriptions of the header
    vep-slicer header output.vcf.gz
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="vep-slicer",
    help="Slice and convert VEP-annotated VCF files",
    add_completion=False,
)

console = Console(stderr=True)


class OutputFormat(str, Enum):
    """Text output format."""

    vcf = "vcf"
    txt = "txt"
    vep = "vep"


def _fail(error: Exception, verbose: bool) -> None:
    console.print(f"[red]ERROR:[/red] {error}")
    if verbose:
        import traceback
        console.print(traceback.format_exc())
    raise typer.Exit(code=1)


@app.command("slice")
def slice_vcf(
    vcf: Annotated[
        Path,
        typer.Argument(
            help="bgzipped VCF (tabix-indexed when --location is used)",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    from_line: Annotated[
        int,
        typer.Option(
            "--from",
            help="First data line to output (1-based)",
            min=0,
        ),
    ] = 0,
    to_line: Annotated[
        int | None,
        typer.Option(
            "--to",
            help="Last data line to output (default: no limit)",
            min=0,
        ),
    ] = None,
    location: Annotated[
        str | None,
        typer.Option(
            "--location", "-l",
            help="Region to retrieve with tabix, e.g. 7:140453100-140453200",
        ),
    ] = None,
    filter_expression: Annotated[
        str | None,
        typer.Option(
            "--filter",
            help="Filter expression passed to the filter script",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat | None,
        typer.Option(
            "--format", "-f",
            help="Output format: 'vcf', 'txt' (flat columns) or 'vep' (VEP default)",
        ),
    ] = None,
    parsed: Annotated[
        bool,
        typer.Option(
            "--parsed",
            help="Output the header and rows as JSON lines (not with --format)",
        ),
    ] = False,
    filter_script: Annotated[
        Path | None,
        typer.Option(
            "--filter-script",
            help="Path to the filter script (filter_vep)",
        ),
    ] = None,
    perl_include: Annotated[
        list[Path] | None,
        typer.Option(
            "--perl-include",
            help="Library directory for the filter script (repeatable)",
        ),
    ] = None,
    list_dir: Annotated[
        Path | None,
        typer.Option(
            "--list-dir",
            help="Directory holding list files used by 'in' filter clauses",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose", "-v",
            help="Enable verbose logging",
        ),
    ] = False,
    log_dir: Annotated[
        Path | None,
        typer.Option(
            "--log-dir",
            help="Write a debug log file to this directory",
        ),
    ] = None,
) -> None:
    """Stream a line range or region of a VEP output VCF.

    Without --filter the --from/--to window counts data lines of the
    retrieved stream; with --filter the window is applied by the filter
    script to matching lines.
    """
    from vep_slicer.config import FilterScript, SliceConfig
    from vep_slicer.exceptions import VcfSliceError
    from vep_slicer.logging_config import setup_logging
    from vep_slicer.models import HeaderBundle
    from vep_slicer.pipeline import VcfSlice

    setup_logging(verbose=verbose, log_dir=log_dir)

    params: dict[str, object] = {
        "from": from_line,
        "to": to_line,
        "location": location,
        "filter": filter_expression,
        "format": output_format.value if output_format else None,
        "parsed": parsed,
    }

    script = None
    if filter_script is not None:
        script = FilterScript(
            script=filter_script,
            include_dirs=perl_include or [],
            list_dir=list_dir,
        )

    try:
        config = SliceConfig.from_params(params)
        vcf_slice = VcfSlice(vcf, filter_script=script)
        for unit in vcf_slice.iter_units(config):
            if isinstance(unit, HeaderBundle):
                typer.echo(json.dumps(unit.to_dict()))
            elif isinstance(unit, dict):
                typer.echo(json.dumps(unit))
            else:
                typer.echo(unit)
    except VcfSliceError as e:
        _fail(e, verbose)


@app.command("header")
def show_header(
    vcf: Annotated[
        Path,
        typer.Argument(
            help="bgzipped or plain VCF",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose", "-v",
            help="Enable verbose logging",
        ),
    ] = False,
) -> None:
    """Show the output columns of a VEP output VCF and their descriptions."""
    from vep_slicer.config import SliceConfig
    from vep_slicer.exceptions import VcfSliceError
    from vep_slicer.logging_config import setup_logging
    from vep_slicer.pipeline import VcfSlice

    setup_logging(verbose=verbose)

    try:
        # An empty window stops at the first data line
        header, _, _ = VcfSlice(vcf).content_parsed(SliceConfig(to_line=0))
    except VcfSliceError as e:
        _fail(e, verbose)
        return

    table = Table(title=vcf.name)
    table.add_column("#", justify="right")
    table.add_column("Column")
    table.add_column("Source")
    table.add_column("Description")

    for index, column in enumerate(header.combined_columns, start=1):
        if column in header.csq_columns:
            source = "CSQ"
        elif column in header.raw_columns:
            source = "VCF"
        else:
            source = "derived"
        table.add_row(str(index), column, source, header.descriptions.get(column, ""))

    Console().print(table)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
