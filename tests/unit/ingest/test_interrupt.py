"""Tests for catalogspine.ingest.interrupt."""

from __future__ import annotations

from catalogspine.ingest.interrupt import InterruptPolicy


class Oracle:
    def __init__(self, verdict: bool) -> None:
        self.verdict = verdict
        self.calls = 0

    def __call__(self) -> bool:
        self.calls += 1
        return self.verdict


class TestInterruptPolicy:
    """InterruptPolicy tests."""

    def test_suppressed_near_end_of_page(self) -> None:
        """With 5 entries left the oracle is not consulted."""
        oracle = Oracle(True)
        assert InterruptPolicy().may_interrupt(5, oracle) is False
        assert oracle.calls == 0

    def test_threshold_is_inclusive(self) -> None:
        """Exactly 10 entries left is still protected."""
        oracle = Oracle(True)
        assert InterruptPolicy().may_interrupt(10, oracle) is False
        assert oracle.calls == 0

    def test_consults_oracle_above_threshold(self) -> None:
        """With 11 entries left the oracle decides."""
        yes, no = Oracle(True), Oracle(False)
        assert InterruptPolicy().may_interrupt(11, yes) is True
        assert InterruptPolicy().may_interrupt(11, no) is False
        assert yes.calls == no.calls == 1

    def test_unknown_budget_consults_oracle(self) -> None:
        """Pages of unknown size are always interruptible."""
        oracle = Oracle(True)
        assert InterruptPolicy().may_interrupt(None, oracle) is True

    def test_custom_threshold(self) -> None:
        """The protected tail is configurable."""
        assert InterruptPolicy(noninterruptable_remainder=0).may_interrupt(1, Oracle(True))
