"""Common ancestor of a set of endpoints in a commit graph.

The ancestor is the commit where the first-parent chains of all
endpoints last agree. First-parent chains alone miss side branches
that were merged into only one endpoint, so before reducing, each
endpoint contributes the parents of merges unique to its own history:

    normalize -> expand -> reduce

The result bounds the history worth showing for those endpoints.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import reduce
from typing import Iterable, Sequence

from .errors import EmptyEndpointSet, ForkpointError, NoCommonAncestor
from .graph import CommitGraph

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AncestorResult:
    """Result of a common ancestor search."""

    found: bool
    commit: str | None
    endpoints: tuple[str, ...]
    expanded: tuple[str, ...]
    error: ForkpointError | None = None

    def __bool__(self) -> bool:
        return self.found


def normalize_endpoints(endpoints: Iterable[str]) -> tuple[str, ...]:
    """Deduplicate endpoints and sort them by id."""
    normalized = tuple(sorted(set(endpoints)))
    if not normalized:
        raise EmptyEndpointSet()
    return normalized


def _exclusive_parents(
    graph: CommitGraph, endpoint: str, others: tuple[str, ...]
) -> list[str]:
    """Parents of every merge reachable from ``endpoint`` only."""
    found = []
    for merge in graph.merges_exclusive_to(endpoint, others):
        found.extend(graph.parents(merge))
    return found


def expand_endpoints(
    graph: CommitGraph,
    endpoints: Sequence[str],
    *,
    workers: int | None = None,
) -> tuple[str, ...]:
    """Add the parents of merges unique to each endpoint's history.

    ``endpoints`` must already be normalized. The result starts with
    ``endpoints`` unchanged, followed by newly discovered commits in
    the order their source endpoint was processed.

    Args:
        workers: Run the per-endpoint merge queries on a thread pool of
            this size. Output is identical to the sequential run.
    """
    endpoints = tuple(endpoints)
    negations = [
        tuple(other for other in endpoints if other != e1) for e1 in endpoints
    ]

    if workers and len(endpoints) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            discovered = list(
                pool.map(
                    lambda args: _exclusive_parents(graph, *args),
                    zip(endpoints, negations),
                )
            )
    else:
        discovered = [
            _exclusive_parents(graph, e1, others)
            for e1, others in zip(endpoints, negations)
        ]

    # dict keeps first-seen order
    expanded = dict.fromkeys(endpoints)
    for e1, parents in zip(endpoints, discovered):
        if parents:
            log.debug("endpoint %s contributes %s", e1, parents)
        expanded.update(dict.fromkeys(parents))
    return tuple(expanded)


def pairwise_ancestor(graph: CommitGraph, a: str, b: str) -> str:
    """The last commit shared by the first-parent chains of ``a`` and ``b``.

    Raises:
        NoCommonAncestor: If the chains share no root.
    """
    if a == b:
        return a

    best: str | None = None
    for x, y in zip(graph.first_parent_chain(a), graph.first_parent_chain(b)):
        if x != y:
            break
        best = x

    if best is None:
        raise NoCommonAncestor(a, b)
    return best


def reduce_endpoints(graph: CommitGraph, endpoints: Sequence[str]) -> str:
    """Left-fold ``pairwise_ancestor`` over ``endpoints``.

    Stops at the first pair with no common ancestor.
    """
    if not endpoints:
        raise EmptyEndpointSet()

    def step(acc: str, endpoint: str) -> str:
        result = pairwise_ancestor(graph, acc, endpoint)
        log.debug("ancestor(%s, %s) = %s", acc, endpoint, result)
        return result

    return reduce(step, endpoints[1:], endpoints[0])


def find_common_ancestor(
    graph: CommitGraph,
    endpoints: Iterable[str],
    *,
    on_failure: str = "return",
    workers: int | None = None,
) -> AncestorResult:
    """Find the common ancestor of resolved commit ids.

    Pass at least two endpoints; a single endpoint is trivially its
    own ancestor.

    Args:
        graph: The commit graph to query.
        endpoints: Commit ids, already resolved.
        on_failure: ``'return'`` (default) to report failures in the
            result, ``'raise'`` to raise them.
        workers: Thread pool size for endpoint expansion.

    Returns:
        An AncestorResult (truthy when an ancestor was found).

    Raises:
        EmptyEndpointSet, NoCommonAncestor: Only with
            ``on_failure='raise'``.
    """
    if on_failure not in ("return", "raise"):
        raise ValueError(f"Unknown on_failure: {on_failure!r}")

    normalized: tuple[str, ...] = ()
    expanded: tuple[str, ...] = ()
    try:
        normalized = normalize_endpoints(endpoints)
        expanded = expand_endpoints(graph, normalized, workers=workers)
        commit = reduce_endpoints(graph, expanded)
    except (EmptyEndpointSet, NoCommonAncestor) as e:
        if on_failure == "raise":
            raise
        log.debug("no common ancestor for %s: %s", normalized, e)
        return AncestorResult(
            found=False,
            commit=None,
            endpoints=normalized,
            expanded=expanded,
            error=e,
        )

    return AncestorResult(
        found=True,
        commit=commit,
        endpoints=normalized,
        expanded=expanded,
    )
