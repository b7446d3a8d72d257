"""forkpoint command line: show history back to the refs' common ancestor."""

import logging
from typing import Optional

import typer

from .ancestor import find_common_ancestor
from .errors import ForkpointError, InvalidEndpoint
from .git import GitGraph
from .graph import CommitGraph
from .kvgraph import KVGraph
from .render import exclusions, log_args, walk
from .store import open_graph

DEFAULT_REF = "HEAD"
DEFAULT_LOG_OPTIONS = ["--oneline", "--decorate"]

log = logging.getLogger(__name__)

app = typer.Typer(add_completion=False)


def _render_kv(graph: KVGraph, refs: list[str], exclude: tuple[str, ...]) -> str:
    lines = []
    for commit in walk(graph, refs, exclude):
        info = graph.commit_info(commit) or {}
        message = info.get("message")
        lines.append(f"{commit} {message}" if message else commit)
    return "\n".join(lines)


@app.command()
def main(
    refs: Optional[list[str]] = typer.Argument(
        None, help="Refs to show. A single ref is paired with --default-ref."
    ),
    repo: Optional[str] = typer.Option(
        None, "--repo", help="Git repository (default: current directory)."
    ),
    graph_dir: Optional[str] = typer.Option(
        None,
        "--graph-dir",
        help="Read a forkpoint disk graph instead of git. Such graphs have "
        "no HEAD unless one was set, so pass --default-ref for single refs.",
    ),
    default_ref: str = typer.Option(
        DEFAULT_REF, "--default-ref", help="Ref paired with a single REF."
    ),
    base: bool = typer.Option(
        False, "--base", help="Print the common ancestor id and exit."
    ),
    log_options: Optional[list[str]] = typer.Option(
        None, "--log-option", "-o", help="Extra option passed to git log."
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", help="Threads for the per-ref merge queries."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Show only the history shared back to the refs' common ancestor."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    refs = list(refs or [])
    if not refs:
        raise typer.BadParameter("at least one ref is required", param_hint="REFS")
    if len(refs) == 1:
        refs.append(default_ref)

    if graph_dir is not None:
        graph = open_graph("disk", path=graph_dir)
        try:
            _run(graph, refs, base=base, workers=workers)
        finally:
            graph.close()
    else:
        graph = open_graph("git", path=repo)
        _run(graph, refs, base=base, workers=workers, log_options=log_options)


def _run(
    graph: CommitGraph,
    refs: list[str],
    *,
    base: bool,
    workers: int | None,
    log_options: list[str] | None = None,
) -> None:
    try:
        commits = [graph.resolve(ref) for ref in refs]
    except InvalidEndpoint as e:
        typer.echo(f"forkpoint: {e}", err=True)
        raise typer.Exit(code=2)

    result = find_common_ancestor(graph, commits, workers=workers)
    if base:
        if not result:
            typer.echo(f"forkpoint: {result.error}", err=True)
            raise typer.Exit(code=1)
        typer.echo(result.commit)
        return

    if not result:
        log.warning("%s; showing full history", result.error)
    exclude = exclusions(graph, result)

    if isinstance(graph, GitGraph):
        options = log_options or DEFAULT_LOG_OPTIONS
        try:
            output = graph.log(log_args(refs, exclude, extra=options))
        except ForkpointError as e:
            typer.echo(f"forkpoint: {e}", err=True)
            raise typer.Exit(code=1)
    else:
        output = _render_kv(graph, commits, exclude)
    if output:
        typer.echo(output)
