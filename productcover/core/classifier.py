"""Classify part numbers with the substring dictionaries of a finished run."""

import json
from pathlib import Path
from typing import Dict, List, Mapping, Sequence, Union

from .reporting import CatalogResult


class SignatureDictionary:
    """
    Product -> selected substrings, as produced by a run.

    Because every substring is exclusive to its product among the catalogs
    of the run, a part from one of those catalogs matches at most one
    product. Unknown parts may match none or, in principle, several.
    """

    def __init__(self, signatures: Mapping[str, Sequence[str]]):
        self.signatures: Dict[str, List[str]] = {
            product: list(subs) for product, subs in signatures.items()
        }

    def __len__(self) -> int:
        return len(self.signatures)

    @classmethod
    def from_results(cls, results: Sequence[CatalogResult]) -> 'SignatureDictionary':
        return cls({r.product_name: r.selected for r in results})

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> 'SignatureDictionary':
        """Load from a JSON report written by Reporter."""
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"{path} is not a productcover JSON report")
        return cls({entry["product_name"]: entry["selected"] for entry in data})

    def matches(self, part: str) -> Dict[str, List[str]]:
        """Substrings found in ``part``, per product; products without a hit are omitted."""
        hits = {}
        for product, subs in self.signatures.items():
            found = [s for s in subs if s in part]
            if found:
                hits[product] = found
        return hits

    def classify(self, part: str) -> List[str]:
        """Products whose dictionary matches ``part``, in dictionary order."""
        return list(self.matches(part))
