"""Breed-set normalization and overlap scoring."""
from __future__ import annotations

from typing import Iterable, Optional, Set

from bsl_tracker.dedup.synonyms import BreedSynonymTable, get_breed_synonyms


def normalize_breed_set(
    breeds: Optional[Iterable[str]],
    synonyms: Optional[BreedSynonymTable] = None,
) -> Set[str]:
    """Map free-text breed names onto lowercased canonical labels.

    ``None`` and blank entries are ignored.
    """
    if not breeds:
        return set()
    table = get_breed_synonyms(synonyms)
    return {table.canonical_for(b) for b in breeds if b and b.strip()}


def breed_overlap(
    a: Optional[Iterable[str]],
    b: Optional[Iterable[str]],
    synonyms: Optional[BreedSynonymTable] = None,
) -> float:
    """Jaccard similarity of two breed lists after normalization.

    Two empty lists are identical (1.0); one empty list shares nothing (0.0).
    """
    set_a = normalize_breed_set(a, synonyms)
    set_b = normalize_breed_set(b, synonyms)

    if not set_a and not set_b:
        return 1.0
    if not set_a or not set_b:
        return 0.0

    return len(set_a & set_b) / len(set_a | set_b)
