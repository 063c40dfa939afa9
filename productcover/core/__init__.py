"""
Core set-cover pipeline: candidate generation, cross-catalog filtering,
greedy selection and result assembly.
"""

from .candidates import Candidate, CandidateUniverse, generate_candidates
from .catalog import Catalog, load_catalogs, read_catalog
from .classifier import SignatureDictionary
from .filtering import filter_cross_catalog
from .pipeline import run_pipeline
from .reporting import CatalogResult, Note, NoteSeverity, Reporter
from .selection import GreedySelector, SelectionResult, greedy_select

__all__ = [
    'Candidate',
    'CandidateUniverse',
    'generate_candidates',
    'Catalog',
    'load_catalogs',
    'read_catalog',
    'SignatureDictionary',
    'filter_cross_catalog',
    'run_pipeline',
    'CatalogResult',
    'Note',
    'NoteSeverity',
    'Reporter',
    'GreedySelector',
    'SelectionResult',
    'greedy_select',
]
