from __future__ import annotations

PLACEHOLDER = "%s"


def format_message(template: str, version: str) -> str:
    """Expand a commit/tag message template for a version.

    Every "%s" in the template is replaced by the version
    ("chore: release v%s" -> "chore: release v1.2.0"). A template without a
    placeholder gets the version appended ("release " -> "release 1.2.0").
    """
    if PLACEHOLDER in template:
        return template.replace(PLACEHOLDER, version)
    return template + version
