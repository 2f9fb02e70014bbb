"""Line-range window over the data lines of a VCF stream."""

from vep_slicer.models import GateDecision
from vep_slicer.utils import is_comment

# Upper bound used when no end line is requested
MAX_LINE = 10**12


class RangeGate:
    """Restrict emission to data lines ``from_line..to_line`` (1-based).

    Comment lines are never counted and always pass. Data lines before
    ``from_line`` are skipped; the first data line past ``to_line``
    stops the stream.

    Example:
        >>> gate = RangeGate(2, 3)
        >>> [gate.check(l) for l in ["#h", "a", "b", "c", "d"]]
        [EMIT, SKIP, EMIT, EMIT, STOP]
    """

    def __init__(self, from_line: int = 0, to_line: int | None = None) -> None:
        self.from_line = from_line
        self.to_line = MAX_LINE if to_line is None else to_line
        self.line_number = 0

    def check(self, line: str) -> GateDecision:
        """Count a line and decide whether it is emitted.

        Args:
            line: Next line of the stream

        Returns:
            GateDecision for the line
        """
        if is_comment(line):
            return GateDecision.EMIT

        self.line_number += 1
        if self.line_number > self.to_line:
            return GateDecision.STOP
        if self.line_number < self.from_line:
            return GateDecision.SKIP
        return GateDecision.EMIT
