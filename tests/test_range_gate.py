"""Tests for the data line range gate."""

from vep_slicer.models import GateDecision
from vep_slicer.range_gate import MAX_LINE, RangeGate


class TestRangeGate:
    """Tests for RangeGate."""

    def test_defaults_emit_everything(self) -> None:
        gate = RangeGate()

        decisions = [gate.check(line) for line in ["#h", "a", "b", "c"]]

        assert decisions == [GateDecision.EMIT] * 4
        assert gate.to_line == MAX_LINE

    def test_comments_not_counted(self) -> None:
        """Test that comment lines pass and do not advance the counter."""
        gate = RangeGate(2, 3)

        decisions = [gate.check(line) for line in ["##a", "#b", "d1", "#c", "d2", "d3", "d4"]]

        assert decisions == [
            GateDecision.EMIT,
            GateDecision.EMIT,
            GateDecision.SKIP,
            GateDecision.EMIT,
            GateDecision.EMIT,
            GateDecision.EMIT,
            GateDecision.STOP,
        ]
        assert gate.line_number == 4

    def test_single_line_window(self) -> None:
        """Test from=5, to=5 selects exactly the fifth data line."""
        gate = RangeGate(5, 5)
        lines = ["#h"] * 3 + [f"d{i}" for i in range(1, 8)]

        emitted = []
        for line in lines:
            decision = gate.check(line)
            if decision is GateDecision.STOP:
                break
            if decision is GateDecision.EMIT and not line.startswith("#"):
                emitted.append(line)

        assert emitted == ["d5"]

    def test_zero_to_line_stops_at_first_data_line(self) -> None:
        gate = RangeGate(0, 0)

        assert gate.check("#h") is GateDecision.EMIT
        assert gate.check("d1") is GateDecision.STOP
