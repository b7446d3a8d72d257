"""GitGraph: commit graph queries against a git repository."""

import logging
from typing import Iterable

from git import Repo
from git.exc import GitCommandError

from .errors import ForkpointError, InvalidEndpoint
from .graph import CommitGraph

log = logging.getLogger(__name__)


class GitGraph(CommitGraph):
    """A ``CommitGraph`` backed by a GitPython ``Repo``.

    Chain and merge queries are delegated to ``git rev-list`` rather
    than walked in Python.
    """

    def __init__(self, repo: Repo | str | None = None) -> None:
        if not isinstance(repo, Repo):
            repo = Repo(repo or ".", search_parent_directories=True)
        self.repo = repo

    def __repr__(self) -> str:
        return f"GitGraph({self.repo.working_dir!r})"

    def resolve(self, name: str) -> str:
        (commit,) = self._rev_parse(name, "--verify", "--quiet", f"{name}^{{commit}}")
        return commit

    def parents(self, commit: str) -> tuple[str, ...]:
        return tuple(self._rev_parse(commit, f"{commit}^@"))

    def first_parent_chain(self, commit: str) -> tuple[str, ...]:
        return tuple(self._rev_list(commit, "--first-parent", "--reverse", commit))

    def merges_exclusive_to(
        self, commit: str, excluding: Iterable[str]
    ) -> tuple[str, ...]:
        args = ["--merges", commit]
        excluding = list(excluding)
        if excluding:
            args += ["--not", *excluding]
        return tuple(self._rev_list(commit, *args))

    def log(self, args: Iterable[str]) -> str:
        """Run ``git log`` with ``args`` and return its output."""
        try:
            return self.repo.git.log(*args)
        except GitCommandError as e:
            raise ForkpointError(f"git log failed: {str(e.stderr).strip()}") from e

    def _rev_list(self, name: str, *args: str) -> list[str]:
        log.debug("git rev-list %s", " ".join(args))
        try:
            out = self.repo.git.rev_list(*args)
        except GitCommandError as e:
            raise InvalidEndpoint(name, str(e.stderr).strip()) from e
        return out.split()

    def _rev_parse(self, name: str, *args: str) -> list[str]:
        try:
            out = self.repo.git.rev_parse(*args)
        except GitCommandError as e:
            raise InvalidEndpoint(name, str(e.stderr).strip()) from e
        return out.split()
