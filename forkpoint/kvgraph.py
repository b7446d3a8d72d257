"""KVGraph: a content-addressed commit DAG over a KV store."""

import hashlib
import logging
import pickle

from .errors import InvalidEndpoint
from .graph import CommitGraph
from .kv.base import KVStore
from .kv.memory import Memory

PARENT_COMMIT = "__parent_commit__%s"
INFO_KEY = "__info__%s"
REF_HEAD = "__ref_head__%s"

MIN_PREFIX = 4

log = logging.getLogger(__name__)

_UNSET = object()


def _content_hash(parents: tuple[str, ...], info: dict | None = None) -> str:
    """Compute a content-addressable commit hash.

    Hashes the parent pointers and optional info to produce a
    deterministic 16-hex-char commit id.
    """
    h = hashlib.sha256()
    h.update(pickle.dumps(parents))
    if info is not None:
        h.update(pickle.dumps(sorted(info.items())))
    return h.hexdigest()[:16]


class KVGraph(CommitGraph):
    """A commit graph stored in a ``KVStore``.

    Commits are immutable once written; only refs move. This is the
    graph used for synthetic histories in tests and for graphs that
    are not backed by a git repository:

        g = KVGraph()
        root = g.commit(info={"message": "root"})
        tip = g.commit((root,), info={"message": "tip"})
        g.set_ref("main", tip)
    """

    def __init__(self, store: KVStore | None = None) -> None:
        if store is None:
            store = Memory()
        self.store = store

    def __repr__(self) -> str:
        return f"KVGraph({type(self.store).__name__})"

    def __contains__(self, commit: str) -> bool:
        return PARENT_COMMIT % commit in self.store

    def close(self) -> None:
        """Close the underlying store."""
        self.store.close()

    # -- Write operations --

    def commit(
        self,
        parents: tuple[str, ...] | list[str] = (),
        *,
        info: dict | None = None,
    ) -> str:
        """Add a commit and return its id.

        Args:
            parents: Parent ids, first parent first. Empty for a root.
            info: Optional metadata dict (e.g. message). Included in
                the content hash, so two roots need distinct info.

        Raises:
            InvalidEndpoint: If a parent is not in the graph.
        """
        parents = tuple(parents)
        for p in parents:
            if p not in self:
                raise InvalidEndpoint(p, "parent is not in the graph")

        commit_hash = _content_hash(parents, info)
        if commit_hash in self:
            return commit_hash

        diffs = {PARENT_COMMIT % commit_hash: pickle.dumps(parents)}
        if info is not None:
            diffs[INFO_KEY % commit_hash] = pickle.dumps(info)
        self.store.set_many(**diffs)
        log.debug("added commit %s with parents %s", commit_hash, parents)
        return commit_hash

    def set_ref(self, name: str, commit: str, *, expected=_UNSET) -> bool:
        """Point ref ``name`` at ``commit``.

        Args:
            expected: When given, only move the ref if it currently
                points at this commit (None means "must not exist").

        Returns:
            True if the ref was written, False if ``expected`` did not
            match.
        """
        if commit not in self:
            raise InvalidEndpoint(commit)
        key = REF_HEAD % name
        value = pickle.dumps(commit)
        if expected is _UNSET:
            self.store.set(key, value)
            return True
        old = None if expected is None else pickle.dumps(expected)
        return self.store.cas(key, value, expected=old)

    def delete_ref(self, name: str) -> None:
        """Remove a ref. Commits it pointed at stay in the graph."""
        self.store.remove(REF_HEAD % name)

    # -- Read operations --

    def ref(self, name: str) -> str | None:
        """The commit a ref points at, or None."""
        head_bytes = self.store.get(REF_HEAD % name)
        if head_bytes is None:
            return None
        return pickle.loads(head_bytes)

    def refs(self) -> list[str]:
        """All ref names, sorted."""
        prefix = REF_HEAD.replace("%s", "")
        return sorted(
            key[len(prefix):]
            for key in self.store.keys()
            if key.startswith(prefix) and len(key) > len(prefix)
        )

    def resolve(self, name: str) -> str:
        """Resolve a ref name, full commit id or unique id prefix."""
        target = self.ref(name)
        if target is not None:
            return target
        if name in self:
            return name
        if len(name) >= MIN_PREFIX:
            prefix = PARENT_COMMIT % name
            matches = [
                key[len(PARENT_COMMIT % ""):]
                for key in self.store.keys()
                if key.startswith(prefix)
            ]
            if len(matches) == 1:
                return matches[0]
            if matches:
                raise InvalidEndpoint(name, "ambiguous prefix")
        raise InvalidEndpoint(name)

    def parents(self, commit: str) -> tuple[str, ...]:
        parent_bytes = self.store.get(PARENT_COMMIT % commit)
        if parent_bytes is None:
            raise InvalidEndpoint(commit)
        return tuple(pickle.loads(parent_bytes))

    def commit_info(self, commit: str) -> dict | None:
        """Retrieve the info dict for a commit, or None if none was stored."""
        info_bytes = self.store.get(INFO_KEY % commit)
        if info_bytes is None:
            return None
        return pickle.loads(info_bytes)
