"""Contact graph validation.

Checks run in order and stop at the first failure:
  1. indices in [0, n)   2. no self-loops   3. no duplicate edges
  4. connected (BFS from disk 0)   5. degree ≤ 6 (planar kissing number)

The 2n + 1 edge count is reported for information only and never gates validity.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass

from packing.engine.config import DEFAULT_CONFIG, AnalysisConfig
from packing.engine.configuration import Configuration, Contact, compute_degrees

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GraphValidation:
    is_valid: bool
    expected_edges: int
    actual_edges: int
    message: str


def build_adjacency(n: int, contacts: tuple[Contact, ...]) -> list[set[int]]:
    adj: list[set[int]] = [set() for _ in range(n)]
    for u, v in contacts:
        adj[u].add(v)
        adj[v].add(u)
    return adj


def is_connected(n: int, contacts: tuple[Contact, ...]) -> bool:
    """Breadth-first search from disk 0; every disk must be reached."""
    if n <= 1:
        return True
    if not contacts:
        return False

    adj = build_adjacency(n, contacts)
    visited = {0}
    queue = deque([0])
    while queue:
        node = queue.popleft()
        for neighbor in adj[node]:
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)

    return len(visited) == n


def check_graph_validity(
    config: Configuration,
    settings: AnalysisConfig = DEFAULT_CONFIG,
) -> GraphValidation:
    """Validate the contact graph (contacts ∪ lattice contacts) of a configuration."""
    n = config.n
    contacts = config.all_contacts
    actual = len(contacts)

    def _fail(message: str) -> GraphValidation:
        logger.debug("Graph invalid: %s", message)
        return GraphValidation(is_valid=False, expected_edges=0, actual_edges=actual, message=message)

    for u, v in contacts:
        if not (0 <= u < n and 0 <= v < n):
            return _fail(f"Invalid index in contact ({u}, {v}): must be in [0, {n - 1}]")

    for u, v in contacts:
        if u == v:
            return _fail(f"Self-loop detected at vertex {u}")

    seen: set[tuple[int, int]] = set()
    for u, v in contacts:
        key = (min(u, v), max(u, v))
        if key in seen:
            return _fail(f"Duplicate edge ({u}, {v})")
        seen.add(key)

    if not is_connected(n, contacts):
        return _fail("Graph is not connected")

    for i, degree in enumerate(compute_degrees(config)):
        if degree > settings.max_degree:
            return _fail(
                f"Vertex {i} has degree {degree} > {settings.max_degree} (kissing number violation)"
            )

    expected = 2 * n + 1
    if actual == expected:
        message = "Valid graph with expected edge count"
    else:
        message = f"Valid graph ({actual} edges, expected {expected} for rigidity)"

    return GraphValidation(is_valid=True, expected_edges=expected, actual_edges=actual, message=message)
