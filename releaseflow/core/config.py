"""Typed configuration loading.

A project may carry a ``releaseflow.toml`` next to its manifest to change
the defaults used by the release commands. Every key is optional.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_str, get_str_list

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ReleaseFlowConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "releaseflow.toml"

DEFAULT_PROJECT = "Project.toml"
DEFAULT_README = "README.md"
DEFAULT_REMOTE = "origin"
DEFAULT_PRIMARY_BRANCH = "master"
DEFAULT_RELEASE_BRANCH = "release"
DEFAULT_COMPAT_KEY = "julia"
DEFAULT_REGISTRATOR = "@JuliaRegistrator"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


def _no_labels() -> tuple[str, ...]:
    return ()


@dataclass(frozen=True, slots=True)
class ReleaseFlowConfig:
    """Release settings for one project.

    Attributes:
        project: Manifest path, relative to the project root.
        readme: File holding the commits-since badge.
        remote: Remote that release branches and tags are pushed to.
        primary_branch: Branch a finished release is merged into.
        release_branch: Short-lived branch used to prepare a release.
        commit_all: Commit the whole working tree when starting a release
            instead of only the manifest and the badge file.
        push_tag: Push the release tag together with the primary branch
            when finishing a release.
        compat_key: Entry required in the manifest ``[compat]`` table.
        registrator: Bot mention placed in the release issue body.
        issue_labels: Labels attached to the release issue.
    """

    project: str = DEFAULT_PROJECT
    readme: str = DEFAULT_README
    remote: str = DEFAULT_REMOTE
    primary_branch: str = DEFAULT_PRIMARY_BRANCH
    release_branch: str = DEFAULT_RELEASE_BRANCH
    commit_all: bool = False
    push_tag: bool = True
    compat_key: str = DEFAULT_COMPAT_KEY
    registrator: str = DEFAULT_REGISTRATOR
    issue_labels: tuple[str, ...] = field(default_factory=_no_labels)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ReleaseFlowConfig:
        """Create config from a parsed TOML mapping.

        Raises:
            TypeError: if ``issue_labels`` is present but not a list of strings.
        """
        labels = get_str_list(data, "issue_labels")
        if "issue_labels" in data and labels is None:
            raise TypeError("issue_labels must be a list of strings")

        commit_all = get_bool(data, "commit_all")
        push_tag = get_bool(data, "push_tag")
        return cls(
            project=get_str(data, "project") or DEFAULT_PROJECT,
            readme=get_str(data, "readme") or DEFAULT_README,
            remote=get_str(data, "remote") or DEFAULT_REMOTE,
            primary_branch=get_str(data, "primary_branch") or DEFAULT_PRIMARY_BRANCH,
            release_branch=get_str(data, "release_branch") or DEFAULT_RELEASE_BRANCH,
            commit_all=False if commit_all is None else commit_all,
            push_tag=True if push_tag is None else push_tag,
            compat_key=get_str(data, "compat_key") or DEFAULT_COMPAT_KEY,
            registrator=get_str(data, "registrator") or DEFAULT_REGISTRATOR,
            issue_labels=tuple(labels or ()),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[ReleaseFlowConfig, ConfigError]:
    """Load and validate a ``releaseflow.toml`` file.

    Args:
        path: Path to the config file

    Returns:
        Ok(ReleaseFlowConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(ReleaseFlowConfig.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(project_root: Path) -> Result[ReleaseFlowConfig, ConfigError]:
    """Load ``releaseflow.toml`` from project_root; defaults if it does not exist.

    A file that exists but is invalid is still an error.
    """
    path = project_root / CONFIG_FILENAME
    if not path.exists():
        return Ok(ReleaseFlowConfig())
    return load_config(path)
