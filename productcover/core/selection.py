"""
Greedy weighted set cover over one catalog's exclusive candidates.

Each round picks the candidate that covers the most still-uncovered parts.
Ties go to the shorter substring, then the smaller earliest offset, then the
candidate discovered first. In non-overlap mode the winner and every
candidate in a substring/superstring relationship with it leave the
universe; otherwise only the winner is retired.

The loop ends when every part is covered, when no candidate adds coverage,
or when the universe is exhausted. Each round shrinks the uncovered set or
the universe, so at most ``len(universe)`` rounds run.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from .candidates import CandidateUniverse

STOP_COMPLETE = "complete"
STOP_NO_GAIN = "no_gain"
STOP_EXHAUSTED = "exhausted"


@dataclass
class SelectionResult:
    """Outcome of the greedy loop for one catalog."""

    selected: List[str]
    covered: np.ndarray
    uncovered_count: int
    history: List[int] = field(default_factory=list)  # uncovered count after each round
    stop_reason: str = STOP_COMPLETE

    @property
    def uncovered_indices(self) -> List[int]:
        return [int(i) for i in np.flatnonzero(~self.covered)]


class GreedySelector:
    """
    Owns the working state of the greedy loop.

    Coverage is copied out of the universe into a candidates x parts boolean
    matrix, so the caller's universe is never mutated.
    """

    def __init__(self, n_parts: int, universe: CandidateUniverse, non_overlap: bool = True):
        if universe.n_parts != n_parts:
            raise ValueError(
                f"universe built for {universe.n_parts} parts, catalog has {n_parts}"
            )
        candidates = universe.candidates()

        self.non_overlap = non_overlap
        self.substrings: List[str] = [c.substring for c in candidates]
        self.matrix = np.zeros((len(candidates), n_parts), dtype=bool)
        for row, candidate in enumerate(candidates):
            self.matrix[row, candidate.part_indices] = True

        self.lengths = np.array([c.length for c in candidates], dtype=np.int64)
        self.offsets = np.array([c.earliest_offset for c in candidates], dtype=np.int64)
        self.orders = np.array([c.order for c in candidates], dtype=np.int64)

        self.active = np.ones(len(candidates), dtype=bool)
        self.uncovered = np.ones(n_parts, dtype=bool)
        self.selected: List[str] = []
        self.history: List[int] = []
        self.stop_reason: Optional[str] = None

    @property
    def remaining(self) -> int:
        """Candidates still eligible."""
        return int(np.count_nonzero(self.active))

    def gains(self) -> np.ndarray:
        """Newly covered part count per candidate; zero for retired candidates."""
        gains = np.count_nonzero(self.matrix & self.uncovered, axis=1)
        gains[~self.active] = 0
        return gains

    def _pick(self, gains: np.ndarray, best_gain: int) -> int:
        tied = np.flatnonzero(gains == best_gain)
        if tied.size == 1:
            return int(tied[0])
        # np.lexsort sorts by the last key first
        ranking = np.lexsort((self.orders[tied], self.offsets[tied], self.lengths[tied]))
        return int(tied[ranking[0]])

    def _retire(self, winner: int) -> None:
        if not self.non_overlap:
            self.active[winner] = False
            return

        pick = self.substrings[winner]
        for row in np.flatnonzero(self.active):
            other = self.substrings[row]
            if pick in other or other in pick:
                self.active[row] = False

    def step(self) -> Optional[str]:
        """Run one round. Returns the selected substring, or None once finished."""
        if self.stop_reason is not None:
            return None
        if not self.uncovered.any():
            self.stop_reason = STOP_COMPLETE
            return None
        if not self.active.any():
            self.stop_reason = STOP_EXHAUSTED
            return None

        gains = self.gains()
        best_gain = int(gains.max())
        if best_gain == 0:
            self.stop_reason = STOP_NO_GAIN
            return None

        winner = self._pick(gains, best_gain)
        pick = self.substrings[winner]
        self.selected.append(pick)
        self.uncovered &= ~self.matrix[winner]
        self._retire(winner)
        self.history.append(int(np.count_nonzero(self.uncovered)))
        return pick

    def run(self) -> SelectionResult:
        while self.step() is not None:
            pass
        return self.result()

    def result(self) -> SelectionResult:
        return SelectionResult(
            selected=list(self.selected),
            covered=~self.uncovered,
            uncovered_count=int(np.count_nonzero(self.uncovered)),
            history=list(self.history),
            stop_reason=self.stop_reason or STOP_COMPLETE,
        )


def greedy_select(
    parts: Sequence[str],
    universe: CandidateUniverse,
    non_overlap: bool = True,
) -> SelectionResult:
    """
    Select a small set of substrings covering as many ``parts`` as possible.

    Args:
        parts: The catalog's part numbers (only their count is used)
        universe: Exclusive candidates of this catalog
        non_overlap: Forbid substring/superstring pairs in the selection

    Returns:
        SelectionResult with the selection, coverage vector and uncovered count
    """
    return GreedySelector(len(parts), universe, non_overlap).run()
