"""Release workflows: bump, badge update, start and finish.

Every step goes through the ``Effect`` it is given, so the same code path
serves real runs and dry runs. The first error stops the workflow; steps
that already ran (a commit, a push) are not undone.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from releaseflow.core.config import ReleaseFlowConfig
from releaseflow.core.result import Err, Ok, Result
from releaseflow.git.repository import Repository
from releaseflow.output.console import Style
from releaseflow.release.badge import BadgeChange, describe_change, find_badge, rewrite_badge
from releaseflow.release.effects import Effect
from releaseflow.release.errors import (
    DirtyRepositoryError,
    ExternalCommandError,
    FileAccessError,
    MissingConfigurationError,
    MissingVersionError,
    ReleaseFlowError,
)
from releaseflow.release.issue import new_issue_url, registrator_comment, repo_slug_from_remote
from releaseflow.release.manifest import Manifest, load_manifest, parse_manifest
from releaseflow.release.textio import read_exact
from releaseflow.release.version import BumpMode, Version, compute_next_version

__all__ = [
    "BumpOutcome",
    "FinishOutcome",
    "StartOutcome",
    "UNKNOWN_TAG",
    "bump_version",
    "ensure_clean",
    "finish_release",
    "replace_commits_since",
    "start_release",
]

# Pushed in place of the release tag when a dry run cannot read it.
UNKNOWN_TAG = "vX.Y.Z"


@dataclass(frozen=True, slots=True)
class BumpOutcome:
    previous: Version | None
    version: Version
    manifest: Manifest


@dataclass(frozen=True, slots=True)
class StartOutcome:
    version: Version
    branch: str
    issue_url: str
    badge: BadgeChange | None


@dataclass(frozen=True, slots=True)
class FinishOutcome:
    branch: str
    pushed: tuple[str, ...]


def _git_path(effect: Effect, path: Path) -> str:
    try:
        return str(path.relative_to(effect.cwd))
    except ValueError:
        return str(path)


def ensure_clean(
    effect: Effect, repo: Repository
) -> Result[None, DirtyRepositoryError | ExternalCommandError]:
    """Require a clean working tree (a warning under dry-run)."""
    status = repo.dirty_files()
    if isinstance(status, Err):
        e = status.error
        return Err(
            ExternalCommandError(
                command=("git", e.command), returncode=e.returncode, stderr=e.message
            )
        )
    files = tuple(str(entry) for entry in status.value)
    return effect.require(not files, DirtyRepositoryError(files=files))


def _resolve_target(
    manifest: Manifest, version: Version | None, mode: BumpMode
) -> Result[tuple[Version | None, Version], ReleaseFlowError]:
    previous = manifest.version()
    if isinstance(previous, Err):
        return previous

    target = compute_next_version(previous.value, version, mode)
    if isinstance(target, Err):
        if isinstance(target.error, MissingVersionError):
            return Err(MissingVersionError(project=manifest.path))
        return target
    return Ok((previous.value, target.value))


def _apply_bump(
    effect: Effect,
    manifest: Manifest,
    previous: Version | None,
    target: Version,
    *,
    commit: bool,
    tag: bool,
    paths: tuple[Path, ...],
    commit_all: bool = False,
) -> Result[Manifest, ReleaseFlowError]:
    effect.console.print(f"Bump: {previous if previous is not None else 'not set'} -> {target}")
    updated = manifest.with_version(target)

    persisted = effect.persist(manifest.path, updated.text)
    if isinstance(persisted, Err):
        return persisted

    if not commit:
        return Ok(updated)

    git_paths = [_git_path(effect, p) for p in paths]
    added = effect.run(["git", "add", "--", *git_paths])
    if isinstance(added, Err):
        return added

    commit_cmd = ["git", "commit", "-m", f"Bump to {target}"]
    if commit_all:
        commit_cmd.insert(2, "--all")
    else:
        commit_cmd.extend(["--", *git_paths])
    committed = effect.run(commit_cmd)
    if isinstance(committed, Err):
        return committed

    if tag:
        tagged = effect.run(["git", "tag", target.to_tag()])
        if isinstance(tagged, Err):
            return tagged
    return Ok(updated)


def bump_version(
    *,
    effect: Effect,
    repo: Repository,
    project: Path,
    version: Version | None = None,
    mode: BumpMode = "prerelease",
    commit: bool = False,
    tag: bool = False,
) -> Result[BumpOutcome, ReleaseFlowError]:
    """Set the manifest version to the next (or the given) version.

    Args:
        effect: Perform or dry-run.
        repo: Repository holding the manifest.
        project: Manifest path.
        version: Explicit target; derived from the manifest when None.
        mode: Policy used when deriving the target.
        commit: Commit the manifest (requires a clean tree beforehand).
        tag: Tag the commit with ``v<version>``; only with commit.
    """
    if commit:
        clean = ensure_clean(effect, repo)
        if isinstance(clean, Err):
            return clean

    loaded = load_manifest(project)
    if isinstance(loaded, Err):
        return loaded

    resolved = _resolve_target(loaded.value, version, mode)
    if isinstance(resolved, Err):
        return resolved
    previous, target = resolved.value

    updated = _apply_bump(
        effect,
        loaded.value,
        previous,
        target,
        commit=commit,
        tag=tag,
        paths=(project,),
    )
    if isinstance(updated, Err):
        return updated
    return Ok(BumpOutcome(previous=previous, version=target, manifest=updated.value))


def replace_commits_since(
    *,
    effect: Effect,
    version: Version,
    readme: Path,
    git_add: bool = False,
) -> Result[BadgeChange | None, FileAccessError | ExternalCommandError]:
    """Point the commits-since badge of readme at ``v<version>``.

    Returns:
        Ok(change), or Ok(None) when there is no readme or no badge in it.
    """
    if not readme.exists():
        effect.console.info(f"No {readme.name}; commits-since badge not updated")
        return Ok(None)

    try:
        text = read_exact(readme)
    except (OSError, UnicodeDecodeError) as e:
        return Err(FileAccessError(path=readme, reason=f"failed to read: {e}"))

    match = find_badge(text)
    if match is None:
        effect.console.info(f"No commits-since badge found in {readme.name}")
        return Ok(None)

    rewritten = rewrite_badge(text, match, version.to_tag())
    change = describe_change(match, rewritten)
    effect.console.print(change.format(), Style.DIM)
    if rewritten == text:
        return Ok(change)

    persisted = effect.persist(readme, rewritten)
    if isinstance(persisted, Err):
        return persisted

    if git_add:
        added = effect.run(["git", "add", "--", _git_path(effect, readme)])
        if isinstance(added, Err):
            return added
    return Ok(change)


def _compat_error(project: Path, key: str) -> MissingConfigurationError:
    return MissingConfigurationError(
        path=project,
        detail=f"no `{key}` compatibility entry",
        fix=f'add the following to {project.name}:\n\n    [compat]\n    {key} = "1"',
    )


def start_release(
    *,
    effect: Effect,
    repo: Repository,
    config: ReleaseFlowConfig,
    version: Version | None = None,
    bump: bool = True,
) -> Result[StartOutcome, ReleaseFlowError]:
    """Cut a release branch, bump to the release version and request registration.

    Steps: checkout the release branch, require a clean tree, bump in release
    mode (badge included), commit and tag, check the compat entry, push the
    branch and open the release issue form.
    """
    remote = repo.remote_url(config.remote)
    if isinstance(remote, Err):
        return Err(
            MissingConfigurationError(
                path=None,
                detail=f"cannot read git remote '{config.remote}': {remote.error.message}",
            )
        )
    slug = repo_slug_from_remote(remote.value)
    if isinstance(slug, Err):
        return slug

    branch = config.release_branch
    project = effect.cwd / config.project
    readme = effect.cwd / config.readme

    checkout = effect.run(["git", "checkout", "-b", branch])
    if isinstance(checkout, Err):
        return checkout

    clean = ensure_clean(effect, repo)
    if isinstance(clean, Err):
        return clean

    loaded = load_manifest(project)
    if isinstance(loaded, Err):
        return loaded
    manifest = loaded.value

    badge: BadgeChange | None = None
    if bump:
        resolved = _resolve_target(manifest, version, "release")
        if isinstance(resolved, Err):
            return resolved
        previous, release_version = resolved.value

        replaced = replace_commits_since(effect=effect, version=release_version, readme=readme)
        if isinstance(replaced, Err):
            return replaced
        badge = replaced.value

        paths = (project, readme) if badge is not None else (project,)
        updated = _apply_bump(
            effect,
            manifest,
            previous,
            release_version,
            commit=True,
            tag=True,
            paths=paths,
            commit_all=config.commit_all,
        )
        if isinstance(updated, Err):
            return updated
        manifest = updated.value
    else:
        current = manifest.version()
        if isinstance(current, Err):
            return current
        if current.value is None:
            return Err(MissingConfigurationError(path=project, detail="no `version`"))
        release_version = current.value

    # Checked under dry-run too: this is a project setup defect.
    if not manifest.has_compat(config.compat_key):
        return Err(_compat_error(project, config.compat_key))

    pushed = effect.run(["git", "push", "-u", config.remote, branch])
    if isinstance(pushed, Err):
        return pushed

    query: dict[str, str | tuple[str, ...]] = {
        "title": f"Release {release_version}",
        "body": registrator_comment(config.registrator, branch=branch),
    }
    if config.issue_labels:
        query["labels"] = config.issue_labels
    url = new_issue_url(slug.value, **query)
    opened = effect.open_url(url)
    if isinstance(opened, Err):
        return opened

    return Ok(StartOutcome(version=release_version, branch=branch, issue_url=url, badge=badge))


def _release_branch_tag(
    effect: Effect, repo: Repository, project: Path, branch: str
) -> Result[str, ReleaseFlowError]:
    # Read from the branch itself: under dry-run nothing is merged, and the
    # branch may not exist at all after a dry-run start.
    rel = Path(_git_path(effect, project)).as_posix()
    shown = repo.show_file(branch, rel)
    if isinstance(shown, Err):
        unreadable = MissingConfigurationError(
            path=project,
            detail=f"cannot read it from branch '{branch}': {shown.error.message}",
        )
        noted = effect.require(False, unreadable)
        if isinstance(noted, Err):
            return noted
        return Ok(UNKNOWN_TAG)

    parsed = parse_manifest(project, shown.value)
    if isinstance(parsed, Err):
        return parsed
    current = parsed.value.version()
    if isinstance(current, Err):
        return current
    if current.value is None:
        return Err(MissingConfigurationError(path=project, detail="no `version` to tag"))
    return Ok(current.value.to_tag())


def finish_release(
    *,
    effect: Effect,
    repo: Repository,
    config: ReleaseFlowConfig,
) -> Result[FinishOutcome, ReleaseFlowError]:
    """Merge the release branch into the primary branch, delete it and push.

    The release tag is pushed along with the primary branch when
    ``config.push_tag`` is set. It is taken from the manifest on the release
    branch before anything is changed.
    """
    clean = ensure_clean(effect, repo)
    if isinstance(clean, Err):
        return clean

    branch = config.release_branch
    primary = config.primary_branch
    refs = [primary]
    if config.push_tag:
        tag = _release_branch_tag(effect, repo, effect.cwd / config.project, branch)
        if isinstance(tag, Err):
            return tag
        refs.append(tag.value)

    for cmd in (
        ["git", "checkout", primary],
        ["git", "merge", branch],
        ["git", "branch", "--delete", branch],
    ):
        result = effect.run(cmd)
        if isinstance(result, Err):
            return result

    pushed = effect.run(["git", "push", config.remote, *refs])
    if isinstance(pushed, Err):
        return pushed
    return Ok(FinishOutcome(branch=branch, pushed=tuple(refs)))
