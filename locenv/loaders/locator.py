"""Locate the dotenv file matching the active profile.

The search starts at a directory (the current working directory by default)
and walks upward through its parents. Each level is scanned recursively, and
the first file named ``.env.<profile>`` wins. Traversal is top-down and sorted:
the files of a directory are checked before its subdirectories, both in name
order, so repeated searches over the same tree pick the same file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

ENV_PREFIX = ".env."


@dataclass(frozen=True)
class EnvFileCandidate:
    """A ``.env.*`` file discovered during a search."""

    path: Path
    profile: str


def iter_candidates(directory: Path | str, prefix: str = ENV_PREFIX) -> Iterator[EnvFileCandidate]:
    """Yield every candidate file below ``directory`` in traversal order.

    Args:
        directory: Root of the subtree to scan.
        prefix: Filename prefix identifying candidates.

    Yields:
        EnvFileCandidate: Candidates with the profile encoded in their name.

    Raises:
        OSError: If a directory in the subtree cannot be listed.
    """

    for dirpath, dirnames, filenames in os.walk(directory, onerror=_raise_walk_error):
        dirnames.sort()
        for filename in sorted(filenames):
            if filename.startswith(prefix):
                yield EnvFileCandidate(
                    path=Path(dirpath) / filename,
                    profile=filename[len(prefix) :],
                )


def search_directory(
    directory: Path | str, profile: str, prefix: str = ENV_PREFIX
) -> EnvFileCandidate | None:
    """Return the first candidate below ``directory`` encoding ``profile``.

    The scan stops as soon as a match is yielded; the rest of the subtree is
    never listed.
    """

    for candidate in iter_candidates(directory, prefix):
        if candidate.profile == profile:
            return candidate
    return None


def iter_search_levels(
    start: Path | str, ceiling: Path | str | None = None
) -> Iterator[Path]:
    """Yield the directories visited by the upward walk.

    ``start`` is always yielded. The walk ends before the filesystem root (the
    root is only searched when it is ``start`` itself), at the relative ``.``
    sentinel, or right after ``ceiling`` when one is given.
    """

    current = Path(start)
    limit = Path(ceiling).resolve() if ceiling is not None else None
    while True:
        yield current
        if limit is not None and current.resolve() == limit:
            return
        parent = current.parent
        if parent == current or parent == Path(os.curdir):
            return
        if parent.anchor and parent == Path(parent.anchor):
            return
        current = parent


def resolve_start_dir(start_dir: Path | str | None = None) -> Path:
    """Return ``start_dir`` as an absolute path, defaulting to the working directory.

    Relative paths are anchored at the working directory so the upward walk
    continues past it instead of stopping at ``.``.
    """

    if start_dir is None:
        return Path.cwd()
    return Path(start_dir).absolute()


def locate_env_file(
    profile: str,
    start_dir: Path | str | None = None,
    *,
    ceiling: Path | str | None = None,
    prefix: str = ENV_PREFIX,
) -> EnvFileCandidate | None:
    """Find the configuration file for ``profile``.

    Args:
        profile: Active profile; matched against file suffixes exactly.
        start_dir: Directory to start from. Defaults to the working directory.
        ceiling: Optional last directory to search before giving up.
        prefix: Filename prefix identifying candidates.

    Returns:
        EnvFileCandidate | None: The matched file, or None when no file on the
        walk encodes ``profile``.

    Raises:
        OSError: If the working directory or any scanned directory cannot be
            read. Errors are never reported as "not found".
    """

    start = resolve_start_dir(start_dir)
    for level in iter_search_levels(start, ceiling):
        match = search_directory(level, profile, prefix)
        if match is not None:
            return match
    return None


def _raise_walk_error(error: OSError) -> None:
    raise error
