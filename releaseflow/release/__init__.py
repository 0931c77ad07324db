"""Release domain: version policy, badge rewriting, effects and workflows."""

from releaseflow.release.badge import (
    BadgeChange,
    BadgeMatch,
    describe_change,
    find_badge,
    rewrite_badge,
)
from releaseflow.release.effects import DryRun, Effect, Perform, effect_for
from releaseflow.release.errors import ReleaseFlowError
from releaseflow.release.version import (
    DEV_MARKER,
    BumpMode,
    Version,
    compute_next_version,
    parse_version,
)

__all__ = [
    # badge
    "BadgeChange",
    "BadgeMatch",
    "describe_change",
    "find_badge",
    "rewrite_badge",
    # effects
    "DryRun",
    "Effect",
    "Perform",
    "effect_for",
    # errors
    "ReleaseFlowError",
    # version
    "DEV_MARKER",
    "BumpMode",
    "Version",
    "compute_next_version",
    "parse_version",
]
