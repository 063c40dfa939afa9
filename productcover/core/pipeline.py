"""
End-to-end set-cover pipeline.

Stages:
    1. candidate generation, per catalog
    2. cross-catalog filtering, once every catalog is generated
    3. greedy selection, per catalog
    4. result assembly

Stages 1 and 3 only touch one catalog's data and can be spread over worker
processes. Stage 2 is the barrier between them.
"""

import time
from concurrent.futures import ProcessPoolExecutor
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from .candidates import CandidateUniverse, generate_candidates
from .catalog import Catalog
from .filtering import filter_cross_catalog
from .reporting import CatalogResult, assemble_result
from .selection import SelectionResult, greedy_select
from ..config import CoverConfig
from ..errors import CatalogLoadError, EmptyInputError
from ..utils.logging_setup import get_logger, log_operation, log_progress

logger = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def _generate_task(args: Tuple[str, Tuple[str, ...], int, int, Optional[int]]) -> CandidateUniverse:
    name, parts, min_len, max_len, max_candidates = args
    return generate_candidates(parts, min_len, max_len,
                               max_candidates=max_candidates, catalog_name=name)


def _select_task(args: Tuple[Tuple[str, ...], CandidateUniverse, bool]) -> SelectionResult:
    parts, universe, non_overlap = args
    return greedy_select(parts, universe, non_overlap)


def _map(func: Callable[[T], R], items: List[T], workers: int) -> List[R]:
    """Map preserving input order, in-process when a single worker is requested."""
    if workers <= 1 or len(items) <= 1:
        return [func(item) for item in items]
    with ProcessPoolExecutor(max_workers=min(workers, len(items))) as executor:
        return list(executor.map(func, items))


def _check_catalogs(catalogs: Sequence[Catalog]) -> None:
    if not catalogs:
        raise EmptyInputError("No catalogs supplied")

    seen = set()
    for catalog in catalogs:
        if catalog.name in seen:
            raise CatalogLoadError(f"Duplicate catalog name: {catalog.name}",
                                   file_path=catalog.name)
        seen.add(catalog.name)


def run_pipeline(catalogs: Sequence[Catalog], config: Optional[CoverConfig] = None) -> List[CatalogResult]:
    """
    Compute an exclusive substring cover for every catalog.

    Progress goes to the ``productcover`` logger (INFO when ``config.verbose``,
    DEBUG otherwise). Progress records stay hidden until a handler is attached,
    e.g. with ``utils.logging_setup.setup_logging``.

    Args:
        catalogs: All catalogs of the run, in report order
        config: Run parameters (defaults when None)

    Returns:
        One CatalogResult per catalog, in input order

    Raises:
        ConfigError: invalid parameters, before any work is done
        EmptyInputError: no catalogs
        CandidateLimitError: a catalog exceeded ``max_candidates``
    """
    config = (config or CoverConfig()).validate()
    _check_catalogs(catalogs)

    verbose = config.verbose
    log_operation(logger, "run_pipeline", catalogs=len(catalogs),
                  min_len=config.min_len, max_len=config.max_len,
                  non_overlap=config.non_overlap)
    start_time = time.time()

    universes = _map(
        _generate_task,
        [(c.name, c.parts, config.min_len, config.max_len, config.max_candidates) for c in catalogs],
        config.workers,
    )
    for catalog, universe in zip(catalogs, universes):
        log_progress(logger, verbose,
                     f"Product {catalog.name}: {len(universe)} candidates",
                     catalog=catalog.name, candidates=len(universe))

    exclusive = filter_cross_catalog(
        {c.name: u for c, u in zip(catalogs, universes)},
        {c.name: c.parts for c in catalogs},
    )
    for catalog in catalogs:
        log_progress(logger, verbose,
                     f"Product {catalog.name}: filtered candidates -> {len(exclusive[catalog.name])}",
                     catalog=catalog.name, exclusive=len(exclusive[catalog.name]))

    selections = _map(
        _select_task,
        [(c.parts, exclusive[c.name], config.non_overlap) for c in catalogs],
        config.workers,
    )

    results = []
    for catalog, universe, selection in zip(catalogs, universes, selections):
        result = assemble_result(
            catalog,
            selection,
            candidate_count=len(universe),
            exclusive_count=len(exclusive[catalog.name]),
            min_len=config.min_len,
        )
        for note in result.warnings:
            logger.warning(f"Product {catalog.name}: {note.message}")
        log_progress(logger, verbose, f"Product {catalog.name}: {result.summary}",
                     catalog=catalog.name)
        results.append(result)

    elapsed = time.time() - start_time
    log_progress(logger, verbose, f"Processed {len(results)} catalogs in {elapsed:.2f}s")
    return results
