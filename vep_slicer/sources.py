"""Line sources feeding the slicing pipeline.

A line source yields the raw text lines of a VCF, either the whole file
or a tabix-indexed region, optionally piped through the external filter
program. Lines are yielded without their line terminator.

Sources:
    IterableLineSource  - lines already in memory
    FileLineSource      - whole file, decompressed in-process
    CommandLineSource   - chain of external processes (tabix, gzip, filter)
"""

import logging
import shutil
import signal
import subprocess
import tempfile
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from pathlib import Path
from types import TracebackType
from typing import IO

from vep_slicer.config import FilterScript, SliceConfig
from vep_slicer.exceptions import ConfigurationError, SourceUnavailableError
from vep_slicer.io_utils import iter_lines

logger = logging.getLogger(__name__)


def find_tabix() -> str | None:
    """Find tabix executable in PATH.

    Returns:
        Path to tabix, or None if not found
    """
    return shutil.which("tabix")


def find_gzip() -> str | None:
    """Find gzip executable in PATH.

    Returns:
        Path to gzip, or None if not found
    """
    return shutil.which("gzip")


class LineSource(ABC):
    """Abstract base class for line sources.

    Iterating a source opens it; close() releases it and is safe to
    call at any point, including mid-stream.
    """

    @abstractmethod
    def __iter__(self) -> Iterator[str]:
        """Yield lines without trailing newline."""
        pass

    def close(self) -> None:
        """Release underlying handles."""
        pass

    def __enter__(self) -> "LineSource":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()


class IterableLineSource(LineSource):
    """Line source over lines already in memory."""

    def __init__(self, lines: Iterable[str]) -> None:
        self.lines = lines

    def __iter__(self) -> Iterator[str]:
        for line in self.lines:
            yield line.rstrip("\r\n")


class FileLineSource(LineSource):
    """Whole-file line source with in-process gzip/bgzip decompression."""

    def __init__(self, filepath: Path) -> None:
        self.filepath = Path(filepath)
        self._lines: Iterator[str] | None = None

    def __iter__(self) -> Iterator[str]:
        if not self.filepath.exists():
            raise SourceUnavailableError(f"VCF file not found: {self.filepath}")
        self.close()
        self._lines = iter_lines(self.filepath)
        return self._lines

    def close(self) -> None:
        if self._lines is not None:
            self._lines.close()  # type: ignore[attr-defined]
            self._lines = None


class CommandLineSource(LineSource):
    """Line source reading the output of a chain of piped processes.

    Each command's stdout feeds the next command's stdin; lines are read
    from the last command. Each iteration starts the chain afresh.

    Example:
        >>> source = CommandLineSource([["tabix", "-h", "out.vcf.gz", "1:1-5000"]])
        >>> with source:
        ...     for line in source:
        ...         print(line)
    """

    def __init__(self, commands: list[list[str]]) -> None:
        if not commands:
            raise ValueError("At least one command is required")
        self.commands = commands
        self._processes: list[subprocess.Popen[str]] = []
        self._stderr_files: list[IO[bytes]] = []

    @property
    def command_line(self) -> str:
        """Shell-style rendering of the command chain, for messages."""
        return " | ".join(" ".join(cmd) for cmd in self.commands)

    def _start(self) -> tuple[list[subprocess.Popen[str]], list[IO[bytes]]]:
        self.close()
        processes: list[subprocess.Popen[str]] = []
        stderr_files: list[IO[bytes]] = []
        stdin: IO[str] | None = None
        for cmd in self.commands:
            stderr_file = tempfile.TemporaryFile()
            try:
                process = subprocess.Popen(
                    cmd,
                    stdin=stdin,
                    stdout=subprocess.PIPE,
                    stderr=stderr_file,
                    text=True,
                    encoding="utf-8",
                )
            except OSError as e:
                stderr_file.close()
                self._release(processes, stderr_files)
                raise SourceUnavailableError(f"Cannot start {cmd[0]}: {e}") from e

            # Only the downstream process keeps the pipe open
            if stdin is not None:
                stdin.close()
            processes.append(process)
            stderr_files.append(stderr_file)
            stdin = process.stdout

        logger.debug("Started line source: %s", self.command_line)
        self._processes = processes
        self._stderr_files = stderr_files
        return processes, stderr_files

    def _check_exit_status(
        self,
        processes: list[subprocess.Popen[str]],
        stderr_files: list[IO[bytes]],
    ) -> None:
        last = len(processes) - 1
        for index, process in enumerate(processes):
            returncode = process.wait()
            if returncode == 0:
                continue
            # Upstream processes are killed by SIGPIPE when downstream stops early
            if index < last and returncode == -signal.SIGPIPE:
                continue
            stderr_files[index].seek(0)
            stderr = stderr_files[index].read().decode("utf-8", errors="replace").strip()
            raise SourceUnavailableError(
                f"{self.commands[index][0]} exited with code {returncode}: "
                f"{stderr or 'no error output'}"
            )

    def __iter__(self) -> Iterator[str]:
        # A run releases only its own processes, never a later restart's
        processes, stderr_files = self._start()
        try:
            stdout = processes[-1].stdout
            assert stdout is not None  # Set by Popen(stdout=PIPE)
            for line in stdout:
                yield line.rstrip("\r\n")
            self._check_exit_status(processes, stderr_files)
        finally:
            self._release(processes, stderr_files)
            if self._processes is processes:
                self._processes = []
                self._stderr_files = []

    @staticmethod
    def _release(
        processes: list[subprocess.Popen[str]],
        stderr_files: list[IO[bytes]],
    ) -> None:
        for process in processes:
            if process.stdout is not None:
                process.stdout.close()
            if process.poll() is None:
                process.terminate()
        for process in processes:
            try:
                process.wait(timeout=5)
            except subprocess.TimeoutExpired:
                process.kill()
                process.wait()
        for stderr_file in stderr_files:
            stderr_file.close()

    def close(self) -> None:
        self._release(self._processes, self._stderr_files)
        self._processes = []
        self._stderr_files = []


def build_source(
    vcf_file: Path,
    config: SliceConfig,
    filter_script: FilterScript | None = None,
) -> LineSource:
    """Create the line source for a slice request.

    A location uses tabix on the indexed file; otherwise the whole file
    is read, in-process unless it has to be piped into the filter.

    Args:
        vcf_file: bgzip-compressed (and, for locations, tabix-indexed) VCF
        config: Slice request
        filter_script: Filter program settings (required with a filter)

    Returns:
        LineSource for the request

    Raises:
        SourceUnavailableError: If the file or a required tool is missing
        ConfigurationError: If a filter is requested without a filter script
    """
    vcf_file = Path(vcf_file)
    if not vcf_file.exists():
        raise SourceUnavailableError(f"VCF file not found: {vcf_file}")

    if config.has_filter and filter_script is None:
        raise ConfigurationError("Filtering requested but no filter script is configured")

    commands: list[list[str]] = []
    if config.location is not None:
        tabix = find_tabix()
        if not tabix:
            raise SourceUnavailableError("tabix not found in PATH")
        commands.append([tabix, "-h", str(vcf_file), config.location])
    elif config.has_filter:
        gzip = find_gzip()
        if not gzip:
            raise SourceUnavailableError("gzip not found in PATH")
        commands.append([gzip, "-dcq", str(vcf_file)])
    else:
        return FileLineSource(vcf_file)

    if config.has_filter:
        assert filter_script is not None and config.filter_expression is not None
        commands.append(
            filter_script.build_command(
                config.filter_expression,
                start=config.from_line,
                limit=config.filter_limit,
            )
        )

    return CommandLineSource(commands)
