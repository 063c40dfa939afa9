"""Product Cover - exclusive substring dictionaries for part-number catalogs."""

__version__ = "0.1.0"

from .config import CoverConfig
from .errors import CoverError, ConfigError, EmptyInputError
from .core.catalog import Catalog, load_catalogs
from .core.pipeline import run_pipeline
from .core.reporting import CatalogResult

__all__ = [
    "CoverConfig",
    "CoverError",
    "ConfigError",
    "EmptyInputError",
    "Catalog",
    "load_catalogs",
    "run_pipeline",
    "CatalogResult",
    "__version__",
]
