"""Display ordering for cluster names."""

from __future__ import annotations

import functools


def compare_cluster_names(name1: str, name2: str) -> int:
    """Compare two cluster names ignoring case.

    Returns 0 when the names are equal after lower-casing, a negative number
    when *name1* sorts first and a positive number otherwise.
    """
    lowered1 = name1.lower()
    lowered2 = name2.lower()
    if lowered1 == lowered2:
        return 0
    return -1 if lowered1 < lowered2 else 1


cluster_sort_key = functools.cmp_to_key(compare_cluster_names)
