from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import typer

from releaseflow.cli.commands._helpers import dry_run_note, unwrap_or_exit, version_argument
from releaseflow.cli.context import build_context
from releaseflow.core.result import Err
from releaseflow.output.console import Style
from releaseflow.release.effects import effect_for
from releaseflow.release.errors import MissingConfigurationError
from releaseflow.release.manifest import load_manifest
from releaseflow.release.workflow import (
    bump_version,
    finish_release,
    replace_commits_since,
    start_release,
)


def bump_version_cmd(
    version: str | None = typer.Argument(
        None, help="Target version (default: derived from the manifest)"
    ),
    project: Path | None = typer.Option(None, "--project", help="Manifest path"),
    commit: bool = typer.Option(False, "--commit", help="Commit the bumped manifest"),
    tag: bool = typer.Option(False, "--tag", help="Tag the bump commit as v<version>"),
    release: bool = typer.Option(
        False,
        "--release",
        help="Derive a release version (1.2.4-DEV -> 1.2.4, 1.2.3 -> 1.2.4)",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print actions without executing"),
) -> None:
    """Bump the manifest version (1.2.3 -> 1.2.4-DEV -> 1.2.4)."""
    ctx = build_context()
    effect = effect_for(dry_run=dry_run, console=ctx.console, cwd=ctx.root)
    target = version_argument(version, ctx)

    outcome = unwrap_or_exit(
        bump_version(
            effect=effect,
            repo=ctx.repo,
            project=ctx.root / (project or Path(ctx.config.project)),
            version=target,
            mode="release" if release else "prerelease",
            commit=commit,
            tag=tag and commit,
        ),
        ctx,
    )
    ctx.console.success(f"version {outcome.version}")
    dry_run_note(ctx, effect)


def replace_badge_cmd(
    version: str | None = typer.Argument(
        None, help="Version the badge should count from (default: manifest version)"
    ),
    readme: Path | None = typer.Option(None, "--readme", help="File holding the badge"),
    project: Path | None = typer.Option(None, "--project", help="Manifest path"),
    git_add: bool = typer.Option(False, "--git-add", help="Stage the updated file"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print actions without executing"),
) -> None:
    """Point the commits-since badge at a release tag."""
    ctx = build_context()
    effect = effect_for(dry_run=dry_run, console=ctx.console, cwd=ctx.root)
    target = version_argument(version, ctx)

    if target is None:
        manifest_path = ctx.root / (project or Path(ctx.config.project))
        manifest = unwrap_or_exit(load_manifest(manifest_path), ctx)
        current = unwrap_or_exit(manifest.version(), ctx)
        if current is None:
            unwrap_or_exit(
                Err(MissingConfigurationError(path=manifest_path, detail="no `version`")), ctx
            )
            return
        target = current

    change = unwrap_or_exit(
        replace_commits_since(
            effect=effect,
            version=target,
            readme=ctx.root / (readme or Path(ctx.config.readme)),
            git_add=git_add,
        ),
        ctx,
    )
    if change is not None:
        ctx.console.success(f"badge: {change.old_tag} -> {change.new_tag}")
    dry_run_note(ctx, effect)


def start_release_cmd(
    version: str | None = typer.Argument(
        None, help="Release version (default: manifest version without prerelease)"
    ),
    release_branch: str | None = typer.Option(
        None, "--release-branch", help="Release branch name"
    ),
    no_bump: bool = typer.Option(
        False, "--no-bump", help="Release the manifest version as is"
    ),
    commit_all: bool | None = typer.Option(
        None,
        "--commit-all/--commit-manifest",
        help="Commit the whole working tree, or only the manifest and badge file",
    ),
    project: Path | None = typer.Option(None, "--project", help="Manifest path"),
    readme: Path | None = typer.Option(None, "--readme", help="File holding the badge"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print actions without executing"),
) -> None:
    """Create the release branch, bump, push and open the registration issue."""
    ctx = build_context()
    effect = effect_for(dry_run=dry_run, console=ctx.console, cwd=ctx.root)
    target = version_argument(version, ctx)

    config = ctx.config
    if release_branch is not None:
        config = replace(config, release_branch=release_branch)
    if commit_all is not None:
        config = replace(config, commit_all=commit_all)
    if project is not None:
        config = replace(config, project=str(project))
    if readme is not None:
        config = replace(config, readme=str(readme))

    ctx.console.header(f"Start release ({config.release_branch})")
    outcome = unwrap_or_exit(
        start_release(
            effect=effect,
            repo=ctx.repo,
            config=config,
            version=target,
            bump=not no_bump,
        ),
        ctx,
    )
    ctx.console.success(f"release {outcome.version} started on {outcome.branch}")
    ctx.console.print(f"issue: {outcome.issue_url}", Style.DIM)
    dry_run_note(ctx, effect)


def finish_release_cmd(
    release_branch: str | None = typer.Option(
        None, "--release-branch", help="Release branch name"
    ),
    primary_branch: str | None = typer.Option(
        None, "--primary-branch", help="Branch the release is merged into"
    ),
    project: Path | None = typer.Option(None, "--project", help="Manifest path"),
    push_tag: bool | None = typer.Option(
        None, "--push-tag/--no-push-tag", help="Push the release tag with the primary branch"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print actions without executing"),
) -> None:
    """Merge the release branch back, delete it and push."""
    ctx = build_context()
    effect = effect_for(dry_run=dry_run, console=ctx.console, cwd=ctx.root)

    config = ctx.config
    if release_branch is not None:
        config = replace(config, release_branch=release_branch)
    if primary_branch is not None:
        config = replace(config, primary_branch=primary_branch)
    if project is not None:
        config = replace(config, project=str(project))
    if push_tag is not None:
        config = replace(config, push_tag=push_tag)

    ctx.console.header(f"Finish release ({config.release_branch} -> {config.primary_branch})")
    outcome = unwrap_or_exit(finish_release(effect=effect, repo=ctx.repo, config=config), ctx)
    ctx.console.success(f"pushed {' '.join(outcome.pushed)}")
    dry_run_note(ctx, effect)
