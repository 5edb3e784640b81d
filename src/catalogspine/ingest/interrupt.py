"""Interrupt policy.

After every entry the caller may offer the user a chance to stop. The
offer is withheld near the end of a bounded page, where finishing costs
less than resuming.

Example:
    >>> from catalogspine.ingest.interrupt import InterruptPolicy
    >>> policy = InterruptPolicy()
    >>> policy.may_interrupt(5, lambda: True)
    False
    >>> policy.may_interrupt(11, lambda: True)
    True
    >>> policy.may_interrupt(None, lambda: False)
    False
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

InterruptOracle = Callable[[], bool]

NONINTERRUPTABLE_REMAINDER = 10


def never_interrupt() -> bool:
    return False


@dataclass(frozen=True)
class InterruptPolicy:
    noninterruptable_remainder: int = NONINTERRUPTABLE_REMAINDER

    def may_interrupt(self, remaining: int | None, oracle: InterruptOracle) -> bool:
        """Whether to stop after the current entry.

        Args:
            remaining: Entries left on the page, None when unknown.
            oracle: Asked only when the page is not nearly finished.
        """
        if remaining is not None and remaining <= self.noninterruptable_remainder:
            return False
        return oracle()
