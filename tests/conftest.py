import shutil

import pytest

from forkpoint import KVGraph


class Dag:
    """Builds a KVGraph from short commit names."""

    def __init__(self, graph: KVGraph | None = None) -> None:
        self.graph = graph if graph is not None else KVGraph()
        self.ids: dict[str, str] = {}

    def __call__(self, name: str, *parents: str) -> str:
        commit = self.graph.commit(
            tuple(self.ids[p] for p in parents), info={"message": name}
        )
        self.ids[name] = commit
        return commit

    def __getitem__(self, name: str) -> str:
        return self.ids[name]

    def name(self, commit: str) -> str:
        return {v: k for k, v in self.ids.items()}[commit]


@pytest.fixture
def dag():
    return Dag()


class GitDag:
    """Builds commits in a real git repository from short names."""

    def __init__(self, path) -> None:
        from git import Repo

        self.repo = Repo.init(path)
        self.ids: dict[str, str] = {}

    def __call__(self, name: str, *parents: str) -> str:
        commit = self.repo.index.commit(
            name,
            parent_commits=[self.repo.commit(self.ids[p]) for p in parents],
            head=False,
        )
        self.ids[name] = commit.hexsha
        return commit.hexsha

    def __getitem__(self, name: str) -> str:
        return self.ids[name]

    def branch(self, ref: str, name: str) -> None:
        self.repo.git.update_ref(f"refs/heads/{ref}", self.ids[name])

    def checkout(self, ref: str) -> None:
        self.repo.git.symbolic_ref("HEAD", f"refs/heads/{ref}")


@pytest.fixture
def git_dag(tmp_path, monkeypatch):
    if shutil.which("git") is None:
        pytest.skip("git executable not found")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    return GitDag(tmp_path)


@pytest.fixture
def feature_repo(git_dag):
    """Old -> E -> F -> G on main; E -> A -> B -> C -> D on feature.

    C merges main's G into the feature line.
    """
    for name, parents in [
        ("Old", ()),
        ("E", ("Old",)),
        ("F", ("E",)),
        ("G", ("F",)),
        ("A", ("E",)),
        ("B", ("A",)),
        ("C", ("B", "G")),
        ("D", ("C",)),
    ]:
        git_dag(name, *parents)
    git_dag.branch("main", "G")
    git_dag.branch("feature", "D")
    git_dag.checkout("main")
    return git_dag
