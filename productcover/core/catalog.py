"""Catalog loading utilities."""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple, Union

from ..errors import CatalogLoadError, EmptyInputError
from ..utils.logging_setup import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Catalog:
    """An ordered, immutable list of part numbers belonging to one product."""

    name: str
    parts: Tuple[str, ...]

    def __post_init__(self):
        # Accept any sequence but store a tuple
        if not isinstance(self.parts, tuple):
            object.__setattr__(self, 'parts', tuple(self.parts))

    def __len__(self) -> int:
        return len(self.parts)

    @classmethod
    def from_lines(cls, name: str, lines: Iterable[str]) -> 'Catalog':
        """Build a catalog from raw lines, trimming and dropping blank ones."""
        parts = tuple(stripped for stripped in (line.strip() for line in lines) if stripped)
        return cls(name=name, parts=parts)


def collect_catalog_files(folder: Union[str, Path], pattern: str = "*.txt") -> List[Path]:
    """Collect catalog files from a folder.

    Args:
        folder: Directory holding one file per product
        pattern: Glob pattern for catalog files (non-recursive)

    Returns:
        Sorted list of file paths

    Raises:
        CatalogLoadError: if the folder does not exist
    """
    folder = Path(folder)
    if not folder.is_dir():
        raise CatalogLoadError(f"Catalog folder does not exist: {folder}",
                               file_path=str(folder))

    return sorted(p for p in folder.glob(pattern) if p.is_file())


def read_catalog(path: Union[str, Path]) -> Catalog:
    """Read a single catalog file.

    Each non-blank line is one part number; surrounding whitespace is
    trimmed. The catalog is named after the file.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise CatalogLoadError(f"Failed to read {path}: {e}", file_path=str(path)) from e

    catalog = Catalog.from_lines(path.name, text.splitlines())
    if not catalog.parts:
        logger.warning(f"Catalog {path.name} has no part numbers")
    return catalog


def load_catalogs(folder: Union[str, Path], pattern: str = "*.txt") -> List[Catalog]:
    """Load every catalog file in a folder.

    Raises:
        EmptyInputError: if no file matches the pattern
        CatalogLoadError: if the folder or a file cannot be read
    """
    files = collect_catalog_files(folder, pattern)
    if not files:
        raise EmptyInputError(f"No {pattern} files found in {folder}",
                              location=str(folder))

    catalogs = [read_catalog(p) for p in files]
    logger.debug(f"Loaded {len(catalogs)} catalogs from {folder}")
    return catalogs


def catalogs_from_mapping(mapping: Sequence[Tuple[str, Sequence[str]]]) -> List[Catalog]:
    """Build catalogs from (name, parts) pairs, e.g. in tests or notebooks."""
    return [Catalog.from_lines(name, parts) for name, parts in mapping]
