"""Graph factory function."""

from typing import Literal

from .graph import CommitGraph
from .kv.disk import ONE_GB


def open_graph(
    kind: Literal["memory", "disk", "git"] = "memory",
    *,
    path: str | None = None,
    size_limit: int = ONE_GB,
) -> CommitGraph:
    """Create a CommitGraph with sensible defaults.

    Args:
        kind: ``"memory"`` (default) for an empty in-memory graph,
            ``"disk"`` for a graph persisted with diskcache, or
            ``"git"`` for a git repository.
        path: Required when ``kind="disk"``. Directory for the disk
            backend. For ``kind="git"``, the repository (default: the
            current directory and its parents).
        size_limit: diskcache size limit (disk only).

    Returns:
        A ``KVGraph`` or ``GitGraph`` instance.
    """
    if kind == "memory":
        from .kvgraph import KVGraph

        return KVGraph()

    if kind == "disk":
        if path is None:
            raise ValueError("path is required when kind='disk'")
        from .kv.disk import Disk
        from .kvgraph import KVGraph

        return KVGraph(Disk(path, size_limit=size_limit))

    if kind == "git":
        from .git import GitGraph

        return GitGraph(path)

    raise ValueError(f"Unknown kind: {kind!r}")
