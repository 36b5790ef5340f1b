"""
Sequence id checks for parsed content.

Passage and chapter ids are taken verbatim from the source files. These
helpers only report suspicious numbering; they never renumber.
"""

from collections import Counter
from typing import Iterable


def validate_sequence_ids(ids: Iterable[int], label: str) -> list[str]:
    """
    Check source-declared ids for duplicates and gaps.

    Args:
        ids: Ids in parse order
        label: Noun used in messages (e.g., "passage")

    Returns:
        Human-readable warnings (empty when ids are unique and contiguous)
    """
    ids = list(ids)
    warnings = []

    counts = Counter(ids)
    for value in sorted(v for v, n in counts.items() if n > 1):
        warnings.append(f"Duplicate {label} id {value} ({counts[value]} occurrences)")

    unique = sorted(counts)
    if unique:
        missing = sorted(set(range(unique[0], unique[-1] + 1)) - set(unique))
        if missing:
            warnings.append(f"Gap in {label} ids: missing {', '.join(map(str, missing))}")

    return warnings
