"""Tests for logging setup."""

import logging
from pathlib import Path

import pytest

from vep_slicer.logging_config import reset_logging, setup_logging


@pytest.fixture(autouse=True)
def clean_logging():
    reset_logging()
    yield
    reset_logging()


class TestSetupLogging:
    """Test console and file handler setup."""

    def test_console_only(self) -> None:
        assert setup_logging() is None
        assert len(logging.getLogger().handlers) == 1

    def test_log_file_path_returned(self, tmp_path: Path) -> None:
        """Test that the log file path is returned and kept on repeat calls."""
        log_file = setup_logging(log_dir=tmp_path / "logs", job_name="slice")

        assert log_file is not None
        assert Path(log_file).exists()
        assert Path(log_file).name.startswith("slice_")
        assert setup_logging(verbose=True) == log_file
