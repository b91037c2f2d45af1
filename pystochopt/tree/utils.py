# pystochopt/tree/utils.py

from typing import Hashable, Iterable, List


def deduplicate(sequence: Iterable[Hashable]) -> List[Hashable]:
    """
    Drop repeated entries, keeping the first occurrence of each.

    >>> deduplicate([(0, 0), (0, 1), (0, 0)])
    [(0, 0), (0, 1)]
    """
    return list(dict.fromkeys(sequence))
