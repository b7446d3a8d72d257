"""Turn an ancestor result into a bounded history listing."""

from collections import deque
from typing import Iterable, Iterator

from .ancestor import AncestorResult
from .graph import CommitGraph


def exclusions(graph: CommitGraph, result: AncestorResult) -> tuple[str, ...]:
    """Commits whose history should be hidden.

    These are the ancestor's parents, so the ancestor itself stays
    visible as the shared root. Empty when there is no ancestor or
    the ancestor is a root commit.
    """
    if not result or result.commit is None:
        return ()
    return graph.parents(result.commit)


def log_args(
    refs: Iterable[str],
    exclude: Iterable[str],
    *,
    extra: Iterable[str] = (),
) -> list[str]:
    """Build ``git log`` arguments for ``refs`` minus ``exclude``.

    The trailing ``--`` keeps git from reading a ref as a path.
    """
    args = ["--graph", *extra, *refs]
    exclude = list(exclude)
    if exclude:
        args += ["--not", *exclude]
    args.append("--")
    return args


def walk(
    graph: CommitGraph, refs: Iterable[str], exclude: Iterable[str] = ()
) -> Iterator[str]:
    """Yield commits reachable from ``refs`` and not from ``exclude``.

    Commits are yielded in topological order: a commit always comes
    before its parents. Ties keep the order in which ``refs`` were
    given.
    """
    hidden = set(graph.ancestors(*exclude))
    visible = [c for c in graph.ancestors(*refs) if c not in hidden]
    visible_set = set(visible)

    pending = dict.fromkeys(visible, 0)
    for commit in visible:
        for p in graph.parents(commit):
            if p in visible_set:
                pending[p] += 1

    ready: deque[str] = deque(c for c in visible if pending[c] == 0)
    while ready:
        commit = ready.popleft()
        yield commit
        for p in graph.parents(commit):
            if p not in visible_set:
                continue
            pending[p] -= 1
            if pending[p] == 0:
                ready.append(p)
