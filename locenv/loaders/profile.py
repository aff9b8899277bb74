"""Resolve the active runtime profile from the environment."""

from __future__ import annotations

import os
from typing import Mapping

PROFILE_VAR = "APP_ENV"


def resolve_profile(
    environ: Mapping[str, str] | None = None, variable: str = PROFILE_VAR
) -> str:
    """Return the active profile name.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.
        variable: Name of the variable holding the profile.

    Returns:
        str: The variable's value verbatim, or ``""`` when it is unset.
    """

    source = os.environ if environ is None else environ
    return source.get(variable, "")
