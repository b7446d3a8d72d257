"""forkpoint: common ancestor of many refs in a commit graph."""

from .ancestor import (
    AncestorResult,
    expand_endpoints,
    find_common_ancestor,
    normalize_endpoints,
    pairwise_ancestor,
    reduce_endpoints,
)
from .errors import (
    EmptyEndpointSet,
    ForkpointError,
    InvalidEndpoint,
    NoCommonAncestor,
)
from .graph import CommitGraph
from .kv.base import KVStore
from .kvgraph import KVGraph
from .store import open_graph

__all__ = [
    "AncestorResult",
    "CommitGraph",
    "EmptyEndpointSet",
    "ForkpointError",
    "InvalidEndpoint",
    "KVGraph",
    "KVStore",
    "NoCommonAncestor",
    "expand_endpoints",
    "find_common_ancestor",
    "normalize_endpoints",
    "open_graph",
    "pairwise_ancestor",
    "reduce_endpoints",
]
