"""Overlap evaluation between paths.

The overlap of two paths is the total cost of the directed edges they share,
normalized by the cost of the shorter path::

    overlap(a, b) = shared_cost(a, b) / min(cost(a), cost(b))

A candidate is kept only if its overlap with every accepted path is strictly
below ``theta``. Paths sharing no positive-cost edge always pass, which makes
``theta == 0`` mean "no shared positive-cost edge".

OnePass+ extracts completed paths in non-decreasing cost order, so against an
accepted path ``p`` the denominator is ``cost(p)`` and the shared cost of a
partial path can only grow as it is extended. `exceeds_overlap` uses this to
discard partial paths early.
"""

from __future__ import annotations

from typing import Sequence

from kspwlo.algorithms.base import Cost
from kspwlo.path import Path


def shared_cost(a: Path, b: Path) -> Cost:
    """Return the total cost of directed edges present in both paths."""
    if len(a) > len(b):
        a, b = b, a
    b_edges = b.edge_costs
    return sum(cost for u, v, cost in a.edges if (u, v) in b_edges)


def overlap_ratio(a: Path, b: Path) -> float:
    """Return the shared cost of ``a`` and ``b`` divided by the shorter path's cost."""
    shared = shared_cost(a, b)
    if shared <= 0:
        return 0.0
    return shared / min(a.cost, b.cost)


def exceeds_overlap(shared: Cost, accepted_cost: Cost, theta: float) -> bool:
    """Return True if ``shared`` cost with an accepted path rules a candidate out.

    Args:
        shared: Cost the candidate (or a prefix of it) shares with the accepted path.
        accepted_cost: Total cost of the accepted path.
        theta: Overlap threshold in ``[0, 1)``.
    """
    if shared <= 0:
        return False
    return shared >= theta * accepted_cost


def is_dissimilar(candidate: Path, accepted: Sequence[Path], theta: float) -> bool:
    """Return True if ``candidate`` overlaps every accepted path by less than ``theta``."""
    for path in accepted:
        shared = shared_cost(candidate, path)
        if shared > 0 and shared >= theta * min(candidate.cost, path.cost):
            return False
    return True
