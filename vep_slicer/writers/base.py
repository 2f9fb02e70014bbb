"""Abstract base class for output encoders.

Encoders turn the header bundle and normalized rows into output units:
text lines for the flat formats, the objects themselves for the
structured format.
"""

from abc import ABC, abstractmethod

from vep_slicer.models import HeaderBundle, Row
from vep_slicer.utils import is_missing


class Encoder(ABC):
    """Abstract base class for output encoders.

    Subclasses implement header() and rows() for their output format.
    """

    @abstractmethod
    def header(self, header: HeaderBundle) -> list[object]:
        """Encode the header.

        Args:
            header: Header bundle of the stream

        Returns:
            Output units for the header
        """
        pass

    @abstractmethod
    def rows(self, header: HeaderBundle, rows: list[Row]) -> list[object]:
        """Encode the rows expanded from one data line.

        Args:
            header: Header bundle of the stream
            rows: Normalized rows

        Returns:
            Output units, one per row
        """
        pass


def render_value(value: str | None) -> str:
    """Render a column value for flat output (missing -> ``-``)."""
    return "-" if is_missing(value) else value  # type: ignore[return-value]
