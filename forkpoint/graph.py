"""Commit graph query interface."""

from abc import ABC, abstractmethod
from collections import deque
from typing import Iterable, Iterator


class CommitGraph(ABC):
    """Read-only queries over a commit DAG.

    Subclasses must provide ``resolve()`` and ``parents()``. The chain
    and merge queries have default implementations that walk
    ``parents()``; providers with a faster native query (e.g. git
    itself) override them.
    """

    @abstractmethod
    def resolve(self, name: str) -> str:
        """Turn a reference name into a commit id.

        Raises:
            InvalidEndpoint: If ``name`` does not name a commit.
        """

    @abstractmethod
    def parents(self, commit: str) -> tuple[str, ...]:
        """Ordered parent ids of ``commit`` (first parent first).

        Raises:
            InvalidEndpoint: If ``commit`` is not in the graph.
        """

    def first_parent_chain(self, commit: str) -> tuple[str, ...]:
        """The first-parent path from the root to ``commit``, oldest first."""
        chain = []
        current: str | None = commit
        while current is not None:
            chain.append(current)
            parents = self.parents(current)
            current = parents[0] if parents else None
        chain.reverse()
        return tuple(chain)

    def ancestors(self, *commits: str) -> Iterator[str]:
        """Yield ``commits`` and all their ancestors, breadth first.

        Each commit is yielded once, children before their parents
        along any single path.
        """
        visited: set[str] = set()
        queue: deque[str] = deque(commits)
        while queue:
            current = queue.popleft()
            if current in visited:
                continue
            visited.add(current)
            yield current
            for p in self.parents(current):
                if p not in visited:
                    queue.append(p)

    def merges_exclusive_to(
        self, commit: str, excluding: Iterable[str]
    ) -> tuple[str, ...]:
        """Merge commits reachable from ``commit`` but not from ``excluding``.

        A commit counts as reachable from itself. Results are in
        breadth-first discovery order from ``commit`` (newest first).
        """
        hidden = set(self.ancestors(*excluding))
        merges = []
        visited: set[str] = set()
        queue: deque[str] = deque([commit])
        while queue:
            current = queue.popleft()
            if current in visited or current in hidden:
                continue
            visited.add(current)
            parents = self.parents(current)
            if len(parents) > 1:
                merges.append(current)
            queue.extend(p for p in parents if p not in visited)
        return tuple(merges)
