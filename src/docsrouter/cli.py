"""Command line entry point for docsrouter.

Commands:
  - latest-tag: print the latest full release tag of a repository
  - resolve: print the destination prefixes for a trigger event
  - deploy: resolve and mirror the artifact tree to every destination
  - push-translatables: push translatable strings when the event asks for it
  - build-env: print the environment the documentation build needs
"""

from __future__ import annotations

import logging
from typing import Optional

import typer

from docsrouter.config import (
    DEFAULT_COMMIT_AUTHOR,
    DEFAULT_NOTEBOOK_CELL_TIMEOUT,
    FailurePolicy,
    RouterConfig,
    TranslatablesConfig,
    docs_build_environment,
)
from docsrouter.errors import DocsRouterError
from docsrouter.models import TriggerEvent, parse_trigger_event
from docsrouter.plan import latest_release_tag, resolve_sync_plan, should_push_translatables
from docsrouter.router import DeploymentRouter
from docsrouter.translatables import TranslatablesPusher
from docsrouter.util.git import list_tags

logger = logging.getLogger(__name__)
app = typer.Typer(help="Route built documentation to its publish destinations")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("latest-tag")
def latest_tag_cmd(
    repo: str = typer.Option(".", "--repo", help="Repository to read tags from"),
) -> None:
    """Print the latest full release tag (empty if none)."""
    try:
        typer.echo(latest_release_tag(list_tags(repo)) or "")
    except DocsRouterError as e:
        _fail(e)


@app.command()
def resolve(
    event: str = typer.Option(..., "--event", help="push or workflow_dispatch"),
    ref_type: Optional[str] = typer.Option(None, "--ref-type", help="branch or tag"),
    ref_name: Optional[str] = typer.Option(None, "--ref-name", help="Branch or tag name"),
    prefix: Optional[str] = typer.Option(None, "--prefix", help="Dispatch deploy prefix"),
    deploy: bool = typer.Option(False, "--deploy/--no-deploy", help="Dispatch: deploy"),
    translatables: bool = typer.Option(
        False, "--translatables/--no-translatables", help="Dispatch: push translatables"
    ),
    latest_tag: Optional[str] = typer.Option(
        None, "--latest-tag", help="Latest release tag (read from --repo if omitted)"
    ),
    repo: str = typer.Option(".", "--repo", help="Repository to read tags from"),
    primary_branch: str = typer.Option("main", "--primary-branch"),
    lines: bool = typer.Option(False, "--lines", help="One prefix per line"),
) -> None:
    """Print the chosen deployment prefixes.

    Output is colon-joined with a trailing colon, so a lone root prefix
    prints as ":" and an empty plan prints nothing.
    """
    try:
        trigger = _event(event, ref_type, ref_name, prefix, deploy, translatables)
        latest = _latest(latest_tag, repo)
        plan = resolve_sync_plan(trigger, latest, primary_branch=primary_branch)
        if lines:
            for p in plan.destinations:
                typer.echo(p)
        elif not plan.is_empty:
            typer.echo(plan.joined())
    except DocsRouterError as e:
        _fail(e)


@app.command("deploy")
def deploy_cmd(
    artifact_dir: str = typer.Argument(..., help="Built HTML tree to publish"),
    event: str = typer.Option(..., "--event", help="push or workflow_dispatch"),
    ref_type: Optional[str] = typer.Option(None, "--ref-type"),
    ref_name: Optional[str] = typer.Option(None, "--ref-name"),
    prefix: Optional[str] = typer.Option(None, "--prefix"),
    deploy: bool = typer.Option(False, "--deploy/--no-deploy"),
    latest_tag: Optional[str] = typer.Option(None, "--latest-tag"),
    repo: str = typer.Option(".", "--repo"),
    primary_branch: str = typer.Option("main", "--primary-branch"),
    bucket: str = typer.Option(..., "--bucket", help="Destination bucket"),
    root_prefix: str = typer.Option("documentation", "--root-prefix"),
    exclude_file: Optional[str] = typer.Option(None, "--exclude-file"),
    credential_file: str = typer.Option(
        ..., "--credential-file", help="Encrypted service account key"
    ),
    key: str = typer.Option(
        ..., "--key", envvar="DOCSROUTER_CREDENTIAL_KEY", show_default=False,
        help="Hex AES-256 key for --credential-file",
    ),
    iv: str = typer.Option(
        ..., "--iv", envvar="DOCSROUTER_CREDENTIAL_IV", show_default=False,
        help="Hex IV for --credential-file",
    ),
    policy: FailurePolicy = typer.Option(FailurePolicy.FAIL_FAST, "--policy"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Plan only; write nothing"),
) -> None:
    """Resolve destinations and mirror ARTIFACT_DIR to each of them."""
    try:
        config = RouterConfig(
            bucket=bucket,
            root_prefix=root_prefix,
            primary_branch=primary_branch,
            exclude_file=exclude_file,
            credential_file=credential_file,
            failure_policy=policy,
        )
        router = DeploymentRouter.from_credential(config, key_hex=key, iv_hex=iv)
        trigger = _event(event, ref_type, ref_name, prefix, deploy, False)
        plan = resolve_sync_plan(
            trigger, _latest(latest_tag, repo), primary_branch=config.primary_branch
        )

        if dry_run:
            for mirror in router.plan(plan, artifact_dir):
                counts = mirror.counts()
                if not counts:
                    typer.echo(f"{mirror.location}: up to date")
                    continue
                summary = ", ".join(f"{k.lower()}={v}" for k, v in sorted(counts.items()))
                typer.echo(f"{mirror.location}: {summary}")
            return

        result = router.deploy(plan, artifact_dir)
        for dest in result.destinations:
            typer.echo(
                f"{dest.location}: {dest.status} "
                f"({dest.transfers} transferred, {dest.deletions} deleted)"
            )
        result.raise_for_status()
    except (DocsRouterError, ValueError) as e:
        _fail(e)


@app.command("push-translatables")
def push_translatables_cmd(
    source_dir: str = typer.Argument(..., help="Translatable strings tree"),
    event: str = typer.Option(..., "--event"),
    ref_type: Optional[str] = typer.Option(None, "--ref-type"),
    ref_name: Optional[str] = typer.Option(None, "--ref-name"),
    translatables: bool = typer.Option(False, "--translatables/--no-translatables"),
    latest_tag: Optional[str] = typer.Option(None, "--latest-tag"),
    repo: str = typer.Option(".", "--repo"),
    remote: str = typer.Option(..., "--remote", help="Remote URL to push to"),
    branch: str = typer.Option("translatables", "--branch"),
    key_file: str = typer.Option(..., "--key-file", help="Encrypted ssh deploy key"),
    key: str = typer.Option(
        ..., "--key", envvar="DOCSROUTER_DEPLOY_KEY_KEY", show_default=False
    ),
    iv: str = typer.Option(
        ..., "--iv", envvar="DOCSROUTER_DEPLOY_KEY_IV", show_default=False
    ),
    author: str = typer.Option(DEFAULT_COMMIT_AUTHOR, "--author"),
) -> None:
    """Push SOURCE_DIR to the translatables branch when the event calls for it."""
    try:
        trigger = _event(event, ref_type, ref_name, None, False, translatables)
        if not should_push_translatables(trigger, _latest(latest_tag, repo)):
            typer.echo("Translatable strings not requested for this event.")
            return
        config = TranslatablesConfig(
            remote_url=remote, key_file=key_file, branch=branch, commit_author=author
        )
        TranslatablesPusher.from_config(config, key_hex=key, iv_hex=iv).push(source_dir)
        typer.echo(f"Pushed translatable strings to '{config.branch}'")
    except (DocsRouterError, ValueError) as e:
        _fail(e)


@app.command("build-env")
def build_env(
    cell_timeout: int = typer.Option(
        DEFAULT_NOTEBOOK_CELL_TIMEOUT, "--cell-timeout", help="Seconds per notebook cell"
    ),
) -> None:
    """Print KEY=VALUE lines for the documentation build environment."""
    try:
        env = docs_build_environment(cell_timeout)
    except ValueError as e:
        _fail(e)
    for name, value in env.items():
        typer.echo(f"{name}={value}")


def _event(
    event: str,
    ref_type: Optional[str],
    ref_name: Optional[str],
    prefix: Optional[str],
    deploy: bool,
    translatables: bool,
) -> TriggerEvent:
    return parse_trigger_event(
        event,
        ref_type=ref_type,
        ref_name=ref_name,
        inputs={
            "deploy_prefix": prefix,
            "do_deployment": deploy,
            "do_translatables": translatables,
        },
    )


def _latest(latest_tag: Optional[str], repo: str) -> Optional[str]:
    if latest_tag is not None:
        return latest_release_tag([latest_tag])
    return latest_release_tag(list_tags(repo))


def _fail(e: Exception) -> None:
    logger.debug("Failure details: %s", getattr(e, "details", None))
    typer.echo(f"✗ Error: {e}", err=True)
    raise typer.Exit(1)
