"""cross-release: bump, commit, tag and push multi-project repositories."""

__version__ = "0.3.0"
