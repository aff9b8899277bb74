"""Parse dotenv files and apply their pairs to an environment mapping."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Mapping, MutableMapping

from dotenv import dotenv_values
from dotenv.parser import parse_stream
from dotenv.variables import parse_variables


class EnvParseError(ValueError):
    """Raised when a dotenv file cannot be read or contains malformed lines."""

    def __init__(self, message: str, *, path: Path, line: int | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.line = line


def read_env_file(
    path: Path | str,
    environ: Mapping[str, str] | None = None,
    *,
    override: bool = False,
) -> dict[str, str]:
    """Parse a dotenv file into key/value pairs.

    Every statement is checked before values are resolved, so a single
    malformed line rejects the whole file. Keys declared without a value
    (``KEY`` on its own) are dropped.

    ``${VAR}`` references are expanded against the pairs defined earlier in the
    file and against ``environ``, never against the process environment unless
    it is passed in. A key present in both resolves to the value it will hold
    once applied: the file's value with ``override``, ``environ``'s otherwise.

    Args:
        path: Location of the dotenv file.
        environ: Variables visible to ``${VAR}`` references.
        override: Whether file values shadow ``environ`` during expansion.

    Returns:
        dict[str, str]: Parsed pairs with ``${VAR}`` references expanded.

    Raises:
        EnvParseError: If the file is unreadable or has a malformed statement.
    """

    env_path = Path(path)
    try:
        text = env_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise EnvParseError(f"Unable to read {env_path}: {exc}", path=env_path) from exc

    for binding in parse_stream(io.StringIO(text)):
        if binding.error:
            line = binding.original.line
            statement = binding.original.string.strip()
            raise EnvParseError(
                f"Malformed statement in {env_path} at line {line}: {statement!r}",
                path=env_path,
                line=line,
            )

    raw_values = dotenv_values(stream=io.StringIO(text), interpolate=False)
    outside = dict(environ) if environ is not None else {}
    resolved: dict[str, str] = {}
    for key, value in raw_values.items():
        if value is None:
            continue
        scope = {**outside, **resolved} if override else {**resolved, **outside}
        resolved[key] = "".join(atom.resolve(scope) for atom in parse_variables(value))
    return resolved


def apply_env_values(
    values: Mapping[str, str],
    target: MutableMapping[str, str],
    *,
    override: bool = False,
) -> dict[str, str]:
    """Write ``values`` into ``target`` and return the pairs actually written.

    Existing keys are left untouched unless ``override`` is True.
    """

    applied: dict[str, str] = {}
    for key, value in values.items():
        if not override and key in target:
            continue
        target[key] = value
        applied[key] = value
    return applied
