"""
ancestry.py - ancestor traversal
Iterative worklist over parent edges, safe against parent cycles
"""

import logging
from collections import deque
from typing import List, Set, Union

from .models import Individual, Pedigree

logger = logging.getLogger(__name__)


def ancestors_of(pedigree: Union[Pedigree, List[Individual]], person_id: str) -> Set[str]:
    """
    Ids of every individual reachable by following parent edges upward

    Each id is visited at most once, dangling parent ids are skipped and the
    starting individual is never part of the result (even inside a cycle).
    No ordering is implied.
    """
    if not isinstance(pedigree, Pedigree):
        pedigree = Pedigree(pedigree)

    start = pedigree.get(person_id)
    if start is None:
        return set()

    visited: Set[str] = {start.id}
    ancestors: Set[str] = set()
    queue = deque(start.parents)

    while queue:
        pid = queue.popleft()
        if pid in visited:
            continue
        visited.add(pid)

        parent = pedigree.get(pid)
        if parent is None:
            continue
        ancestors.add(pid)
        queue.extend(parent.parents)

    logger.debug("ancestors_of(%s): %d ancestors", person_id, len(ancestors))
    return ancestors


def ancestor_individuals(pedigree: Pedigree, person_id: str) -> List[Individual]:
    """Ancestors as Individual objects, in pedigree input order"""
    ids = ancestors_of(pedigree, person_id)
    return [p for p in pedigree if p.id in ids]
