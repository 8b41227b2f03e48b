"""String and category comparison helpers for duplicate detection."""

import re

from rapidfuzz.distance import Levenshtein

_CATEGORY_CODE_PATTERN = re.compile(r"A\d{2}:\d{4}")


def title_similarity(title1: str, title2: str) -> float:
    """Similarity of two titles in [0, 1], case-insensitive and trimmed.

    Computed as 1 - edit distance / max(len). Two empty titles are identical.
    """
    a = title1.strip().lower()
    b = title2.strip().lower()
    if a == b:
        return 1.0

    return Levenshtein.normalized_similarity(a, b)


def normalise_category(category: str) -> str:
    """Reduce a category string to its canonical code.

    "A03:2021 - Injection" and "a03:2021" both become "A03:2021". Strings
    without an OWASP-style code are compared lower-cased and trimmed.
    """
    match = _CATEGORY_CODE_PATTERN.search(category.upper())
    if match:
        return match.group(0)
    return category.strip().lower()
