"""releaseflow: version bumping and release branch automation."""

__version__ = "0.3.0"
