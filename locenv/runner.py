"""Entry points for running locenv operations."""

from __future__ import annotations

import os
import shlex
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .loader import EnvFileNotFoundError, EnvLoader
from .loaders.dotenv_file import EnvParseError
from .loaders.locator import (
    EnvFileCandidate,
    iter_candidates,
    iter_search_levels,
    locate_env_file,
    resolve_start_dir,
)
from .loaders.profile import PROFILE_VAR, resolve_profile
from .utils.logging import EventLogger


@dataclass
class SearchLevel:
    """Candidates discovered below one directory of the upward walk."""

    directory: Path
    candidates: list[EnvFileCandidate]


def run_locate(
    profile: Optional[str],
    *,
    profile_var: str = PROFILE_VAR,
    start_dir: Optional[Path] = None,
    ceiling: Optional[Path] = None,
) -> int:
    """Print the file that would be loaded for the active profile.

    Returns:
        int: 0 when a file was found, 1 when none matched, 2 on search errors.
    """
    active = profile if profile is not None else resolve_profile(variable=profile_var)
    try:
        start = resolve_start_dir(start_dir)
        match = locate_env_file(active, start, ceiling=ceiling)
    except OSError as exc:
        print(f"❌ Search failed: {exc}")
        return 2

    if match is None:
        print(f"❌ No .env.{active} file found from {start}")
        return 1

    print(f"📄 {match.path}")
    print(f"Profile: {match.profile}")
    return 0


def run_load(
    profile: Optional[str],
    *,
    profile_var: str = PROFILE_VAR,
    start_dir: Optional[Path] = None,
    ceiling: Optional[Path] = None,
    override: bool = False,
    export: bool = False,
    log_dir: Optional[Path] = None,
) -> int:
    """Load the profile's file and report what it would set.

    The pairs are applied to a copy of the current environment. With
    ``export`` the result is printed as shell ``export`` statements on stdout
    and status messages go to stderr, so the output can be ``eval``-ed.

    Returns:
        int: 0 on success, 1 when no file matched or parsing failed, 2 on
        search errors.
    """
    logger = EventLogger("locenv", log_dir=log_dir)
    loader = EnvLoader(
        profile,
        target=dict(os.environ),
        start_dir=start_dir,
        ceiling=ceiling,
        profile_var=profile_var,
        override=override,
        logger=logger,
    )
    status = sys.stderr if export else sys.stdout

    exit_code = 0
    try:
        result = loader.load_env()
    except (EnvFileNotFoundError, EnvParseError) as exc:
        print(f"❌ {exc}", file=status)
        exit_code = 1
    except OSError as exc:
        print(f"❌ Search failed: {exc}", file=status)
        exit_code = 2
    else:
        if export:
            for key, value in result.values.items():
                print(f"export {key}={shlex.quote(value)}")
        else:
            print(f"✅ Loaded {loader.get_env()!r} environment from {result.path}")
            for key in result.values:
                print(f"  • {key}")
        if result.skipped:
            print(f"Kept existing values for: {', '.join(result.skipped)}", file=status)

    if logger.log_path is not None:
        print(logger.summary(), file=status)
    return exit_code


def collect_candidates(
    start_dir: Optional[Path] = None, ceiling: Optional[Path] = None
) -> list[SearchLevel]:
    """Return every ``.env.*`` file visible at each level of the upward walk."""
    start = resolve_start_dir(start_dir)
    return [
        SearchLevel(directory=level, candidates=list(iter_candidates(level)))
        for level in iter_search_levels(start, ceiling)
    ]
