"""Profile-aware loader for ``.env.<profile>`` files."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, MutableMapping

from .loaders.dotenv_file import EnvParseError, apply_env_values, read_env_file
from .loaders.locator import ENV_PREFIX, EnvFileCandidate, locate_env_file, resolve_start_dir
from .loaders.profile import PROFILE_VAR, resolve_profile
from .utils.logging import EventLogger


class EnvFileNotFoundError(FileNotFoundError):
    """Raised when no file on the search path encodes the active profile."""

    def __init__(self, profile: str, start_dir: Path) -> None:
        super().__init__(
            f"No {ENV_PREFIX}{profile} file found searching upward from {start_dir}"
        )
        self.profile = profile
        self.start_dir = start_dir


@dataclass(frozen=True)
class LoadResult:
    """Outcome of a successful :meth:`EnvLoader.load_env` call."""

    path: Path
    profile: str
    values: dict[str, str] = field(default_factory=dict)
    skipped: tuple[str, ...] = ()


class EnvLoader:
    """Locate the dotenv file for the active profile and apply it.

    The profile is resolved once, at construction, from ``profile`` or from the
    ``profile_var`` entry of ``environ``. Parsed pairs are written to
    ``target``. Both mappings default to ``os.environ``.
    Events go to ``logger``; without one, they are echoed to stderr.

    Instances hold unsynchronized state and should stay on one thread.
    """

    def __init__(
        self,
        profile: str | None = None,
        *,
        environ: Mapping[str, str] | None = None,
        target: MutableMapping[str, str] | None = None,
        start_dir: Path | str | None = None,
        ceiling: Path | str | None = None,
        profile_var: str = PROFILE_VAR,
        prefix: str = ENV_PREFIX,
        override: bool = False,
        logger: EventLogger | None = None,
    ) -> None:
        self.active_profile = (
            profile if profile is not None else resolve_profile(environ, profile_var)
        )
        self.target: MutableMapping[str, str] = os.environ if target is None else target
        self.start_dir = Path(start_dir) if start_dir is not None else None
        self.ceiling = Path(ceiling) if ceiling is not None else None
        self.prefix = prefix
        self.override = override
        self.logger = logger or EventLogger(stream=sys.stderr)
        self.loaded_path: Path | None = None

    @property
    def loaded(self) -> bool:
        return self.loaded_path is not None

    def load_env(self) -> LoadResult:
        """Find the profile's file and apply its pairs to the target mapping.

        Returns:
            LoadResult: The loaded file, its profile and the pairs written.

        Raises:
            OSError: Propagated unchanged when the directory search fails.
            EnvFileNotFoundError: If no matching file exists up to the root.
            EnvParseError: If the matched file cannot be read or parsed.
        """

        start = self.start_dir
        try:
            start = resolve_start_dir(self.start_dir)
            match = locate_env_file(
                self.active_profile, start, ceiling=self.ceiling, prefix=self.prefix
            )
        except OSError as exc:
            self.logger.error(
                f"Search for {self.prefix}{self.active_profile} failed: {exc}",
                code="search-failed",
                path=getattr(exc, "filename", None) or start or ".",
            )
            raise

        if match is None:
            error = EnvFileNotFoundError(self.active_profile, start)
            self.logger.error(str(error), code="env-not-found", path=start)
            raise error

        return self._load_match(match)

    def get_env(self) -> str:
        """Return the active profile; the loaded file's profile after a load."""

        return self.active_profile

    def _load_match(self, match: EnvFileCandidate) -> LoadResult:
        try:
            values = read_env_file(match.path, self.target, override=self.override)
        except EnvParseError as exc:
            self.logger.error(
                f"Error loading environment variables: {exc}",
                code="parse-failed",
                path=match.path,
            )
            raise

        applied = apply_env_values(values, self.target, override=self.override)
        self.active_profile = match.profile
        self.loaded_path = match.path
        self.logger.success(
            f"Environment {match.profile!r} loaded", code="env-loaded", path=match.path
        )
        return LoadResult(
            path=match.path,
            profile=match.profile,
            values=applied,
            skipped=tuple(key for key in values if key not in applied),
        )


__all__ = ["EnvLoader", "EnvFileNotFoundError", "LoadResult"]
