"""
Candidate substring generation.

For one catalog, every contiguous substring whose length falls inside the
configured window becomes a candidate. Each candidate remembers which parts
contain it, the earliest start offset at which it was seen, and the order in
which it was first discovered. The discovery order is the last tie-breaker of
the greedy selector, so the universe keeps insertion order explicitly.

Generation touches O(sum(len(part) ** 2)) substring instances per catalog;
``max_len`` is the knob that keeps this tractable for long part numbers, and
``max_candidates`` turns runaway growth into a CandidateLimitError.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Set

import numpy as np

from ..errors import CandidateLimitError, ConfigError


@dataclass(frozen=True, eq=False)
class Candidate:
    """A substring together with the parts it covers."""

    substring: str
    part_indices: np.ndarray  # sorted, unique indices into the catalog's parts
    n_parts: int
    earliest_offset: int
    order: int

    @property
    def length(self) -> int:
        return len(self.substring)

    @property
    def support(self) -> int:
        """Number of parts containing the substring."""
        return int(self.part_indices.size)

    @property
    def coverage(self) -> np.ndarray:
        """Boolean vector over the catalog's parts."""
        vec = np.zeros(self.n_parts, dtype=bool)
        vec[self.part_indices] = True
        return vec


class CandidateUniverse:
    """
    Insertion-ordered mapping of substring -> Candidate for one catalog.

    Universes are only ever pruned: filtering and selection derive new,
    smaller universes instead of adding entries back.
    """

    def __init__(self, n_parts: int, candidates: Iterable[Candidate] = ()):
        self.n_parts = n_parts
        self._by_substring: Dict[str, Candidate] = {}
        for candidate in candidates:
            if candidate.n_parts != n_parts:
                raise ValueError(
                    f"candidate {candidate.substring!r} built for {candidate.n_parts} parts, "
                    f"universe has {n_parts}"
                )
            if candidate.substring in self._by_substring:
                raise ValueError(f"duplicate candidate {candidate.substring!r}")
            self._by_substring[candidate.substring] = candidate

    def __len__(self) -> int:
        return len(self._by_substring)

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_substring)

    def __contains__(self, substring: object) -> bool:
        return substring in self._by_substring

    def __getitem__(self, substring: str) -> Candidate:
        return self._by_substring[substring]

    def __repr__(self) -> str:
        return f"CandidateUniverse(n_parts={self.n_parts}, size={len(self)})"

    def candidates(self) -> List[Candidate]:
        """Candidates in discovery order."""
        return list(self._by_substring.values())

    def substrings(self) -> List[str]:
        return list(self._by_substring)

    def lengths(self) -> Set[int]:
        """Distinct substring lengths present in the universe."""
        return {len(s) for s in self._by_substring}

    def restrict(self, keep: Callable[[str], bool]) -> 'CandidateUniverse':
        """Return a new universe holding only the candidates accepted by ``keep``."""
        return CandidateUniverse(
            self.n_parts,
            (c for c in self._by_substring.values() if keep(c.substring))
        )


def check_length_window(min_len: int, max_len: int) -> None:
    """Raise ConfigError unless 1 <= min_len <= max_len."""
    problems = []
    for name, value in (("min_len", min_len), ("max_len", max_len)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            problems.append(f"{name} must be an integer, got {value!r}")
    if not problems:
        if min_len < 1:
            problems.append(f"min_len must be >= 1, got {min_len}")
        if max_len < min_len:
            problems.append(f"max_len must be >= min_len ({min_len}), got {max_len}")
    if problems:
        raise ConfigError("; ".join(problems), problems=problems,
                          details={'min_len': min_len, 'max_len': max_len})


def generate_candidates(
    parts: Sequence[str],
    min_len: int,
    max_len: int,
    max_candidates: Optional[int] = None,
    catalog_name: Optional[str] = None,
) -> CandidateUniverse:
    """
    Enumerate every substring of ``parts`` with length in [min_len, max_len].

    Parts shorter than ``min_len`` contribute nothing; they surface later as
    permanently uncovered.

    Args:
        parts: Part numbers of one catalog, in catalog order
        min_len: Shortest substring length
        max_len: Longest substring length
        max_candidates: Optional bound on the number of distinct substrings
        catalog_name: Used in error messages only

    Returns:
        CandidateUniverse in discovery order

    Raises:
        ConfigError: if the length window is invalid
        CandidateLimitError: if ``max_candidates`` is exceeded
    """
    check_length_window(min_len, max_len)

    # substring -> [part indices, earliest offset]
    entries: Dict[str, list] = {}

    for index, part in enumerate(parts):
        length = len(part)
        for offset in range(length):
            longest = min(max_len, length - offset)
            for size in range(min_len, longest + 1):
                sub = part[offset:offset + size]
                entry = entries.get(sub)
                if entry is None:
                    if max_candidates is not None and len(entries) >= max_candidates:
                        raise CandidateLimitError(
                            f"Catalog {catalog_name or '<unnamed>'} exceeds "
                            f"{max_candidates} candidate substrings",
                            catalog=catalog_name,
                            limit=max_candidates,
                        )
                    entries[sub] = [[index], offset]
                    continue
                # parts are visited in order, so indices arrive sorted
                if entry[0][-1] != index:
                    entry[0].append(index)
                if offset < entry[1]:
                    entry[1] = offset

    n_parts = len(parts)
    return CandidateUniverse(
        n_parts,
        (
            Candidate(
                substring=sub,
                part_indices=np.asarray(indices, dtype=np.intp),
                n_parts=n_parts,
                earliest_offset=offset,
                order=order,
            )
            for order, (sub, (indices, offset)) in enumerate(entries.items())
        ),
    )
