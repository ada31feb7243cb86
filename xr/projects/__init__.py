"""Manifest discovery and version read/write.

Usage:
    from xr.projects import find_project_files, read_version

    for project in find_project_files(Path("."), recursive=True):
        print(project.path, read_version(project))
"""

from xr.projects.discovery import DEFAULT_EXCLUDES, find_project_files, is_excluded
from xr.projects.manifests import read_version, write_version
from xr.projects.model import MANIFEST_NAMES, ManifestError, ProjectCategory, ProjectFile

__all__ = [
    "DEFAULT_EXCLUDES",
    "MANIFEST_NAMES",
    "ManifestError",
    "ProjectCategory",
    "ProjectFile",
    "find_project_files",
    "is_excluded",
    "read_version",
    "write_version",
]
