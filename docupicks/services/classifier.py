"""
Documentary Classifier

Substring heuristic over OMDb genre/plot and the TMDB overview. The term
list is configuration (``DOCUMENTARY_TERMS``), not scattered literals.
"""

from typing import Iterable, Optional, Sequence


def is_documentary(texts: Iterable[Optional[str]], terms: Sequence[str]) -> bool:
    """
    True if any text contains any term, case-insensitively.

    Empty or missing texts never match; an empty term list never matches.
    """
    lowered_terms = [t.lower() for t in terms if t]
    if not lowered_terms:
        return False

    for text in texts:
        if not text:
            continue
        haystack = text.lower()
        if any(term in haystack for term in lowered_terms):
            return True
    return False


def year_in_window(year: Optional[int], min_year: int, max_year: int, tolerance: int = 0) -> bool:
    """Inclusive window check, widened by ``tolerance`` years on each side."""
    if year is None:
        return False
    return (min_year - tolerance) <= year <= (max_year + tolerance)
