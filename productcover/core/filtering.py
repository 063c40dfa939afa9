"""
Cross-catalog uniqueness filtering.

A candidate survives for catalog P only if it is not a literal substring of
any part belonging to another catalog. Comparison is exact and
case-sensitive.

Instead of scanning every foreign part for every candidate, each catalog's
parts are indexed once as the set of their substrings at the lengths the
candidates actually use. Membership in that set is equivalent to the naive
``any(sub in part for part in parts)`` scan; lengths outside the index fall
back to the scan.
"""

from typing import Dict, Iterable, List, Mapping, Sequence, Set

from .candidates import CandidateUniverse
from ..utils.logging_setup import get_logger

logger = get_logger(__name__)


def occurs_in_any(substring: str, parts: Iterable[str]) -> bool:
    """Naive check: is ``substring`` contained in any of ``parts``?"""
    return any(substring in part for part in parts)


class ForeignSubstringIndex:
    """Every substring of a fixed set of lengths across one catalog's parts."""

    def __init__(self, parts: Sequence[str], lengths: Iterable[int]):
        self.parts = tuple(parts)
        self.lengths: Set[int] = {n for n in lengths if n > 0}
        self._substrings: Set[str] = set()

        for part in self.parts:
            for size in self.lengths:
                for offset in range(len(part) - size + 1):
                    self._substrings.add(part[offset:offset + size])

    def __len__(self) -> int:
        return len(self._substrings)

    def __contains__(self, substring: object) -> bool:
        if not isinstance(substring, str):
            return False
        if len(substring) in self.lengths:
            return substring in self._substrings
        return occurs_in_any(substring, self.parts)


def filter_cross_catalog(
    universes: Mapping[str, CandidateUniverse],
    parts_by_catalog: Mapping[str, Sequence[str]],
) -> Dict[str, CandidateUniverse]:
    """
    Drop every candidate that also appears in another catalog's parts.

    Args:
        universes: Candidate universe per catalog name
        parts_by_catalog: Raw part strings per catalog name (all catalogs loaded)

    Returns:
        New universes with only catalog-exclusive candidates, same key order

    Raises:
        KeyError: if a universe has no matching parts entry
    """
    missing = [name for name in universes if name not in parts_by_catalog]
    if missing:
        raise KeyError(f"No parts supplied for catalogs: {', '.join(missing)}")

    lengths: Set[int] = set()
    for universe in universes.values():
        lengths |= universe.lengths()

    indexes = {
        name: ForeignSubstringIndex(parts, lengths)
        for name, parts in parts_by_catalog.items()
    }

    filtered: Dict[str, CandidateUniverse] = {}
    for name, universe in universes.items():
        others: List[ForeignSubstringIndex] = [
            index for other, index in indexes.items() if other != name
        ]
        filtered[name] = universe.restrict(
            lambda sub: not any(sub in index for index in others)
        )
        logger.debug(
            f"Catalog {name}: {len(universe)} candidates -> {len(filtered[name])} exclusive"
        )

    return filtered
