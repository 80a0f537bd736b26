"""Map request paths onto the browsed root."""

from __future__ import annotations

import os

from arcbrowse.config import settings
from arcbrowse.errors import PathNotFoundError


def _is_within(base: str, candidate: str) -> bool:
    base = os.path.normpath(base)
    candidate = os.path.normpath(candidate)
    return candidate == base or candidate.startswith(base.rstrip(os.sep) + os.sep)


def join_root(root: str, url_path: str, confine: bool | None = None) -> str:
    """Join root and a URL path as ``root + "/" + url_path``.

    With confinement on, the joined path is normalized and must stay
    inside ``root``. Symlinks are not resolved.
    """
    if confine is None:
        confine = settings.confine_to_root

    full_path = root + "/" + url_path
    if not confine:
        return full_path

    normalized = os.path.normpath(full_path)
    if not _is_within(root, normalized):
        raise PathNotFoundError(f"Path escapes root: {url_path}")
    return normalized


def confine(base: str, member: str) -> str:
    """Join an archive member name into ``base``, refusing escapes."""
    joined = os.path.normpath(os.path.join(base, member))
    if settings.confine_to_root and not _is_within(base, joined):
        raise PathNotFoundError(f"Path escapes extraction directory: {member}")
    return joined


def stat_path(path: str) -> os.stat_result:
    try:
        return os.stat(path)
    except (OSError, ValueError) as e:
        raise PathNotFoundError(str(e)) from e
