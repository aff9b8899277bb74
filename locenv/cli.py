from __future__ import annotations

import os
from pathlib import Path

import typer
from rich.console import Console
from rich.tree import Tree

from .loaders.profile import PROFILE_VAR, resolve_profile
from .runner import collect_candidates, run_load, run_locate

app = typer.Typer(
    name="locenv",
    help="Locate and load the .env.<profile> file for the active runtime profile.",
    add_completion=True,
)

console = Console()

PROFILE_OPTION = typer.Option(
    None,
    "--profile",
    "-p",
    help="Profile to load (overrides the profile variable).",
)
PROFILE_VAR_OPTION = typer.Option(
    PROFILE_VAR,
    "--profile-var",
    help="Environment variable holding the active profile.",
)
START_OPTION = typer.Option(
    None,
    "--start",
    "-s",
    exists=True,
    file_okay=False,
    dir_okay=True,
    help="Directory to start searching from (defaults to the working directory).",
)
CEILING_OPTION = typer.Option(
    None,
    "--ceiling",
    "-c",
    exists=True,
    file_okay=False,
    dir_okay=True,
    help="Last directory to search before giving up.",
)


@app.command("locate")
def locate(
    profile: str | None = PROFILE_OPTION,
    profile_var: str = PROFILE_VAR_OPTION,
    start_dir: Path | None = START_OPTION,
    ceiling: Path | None = CEILING_OPTION,
) -> None:
    """
    Show which file would be loaded for the active profile.

    Examples:
        locenv locate
        APP_ENV=production locenv locate
        locenv locate --profile test --start services/api
    """
    exit_code = run_locate(
        profile, profile_var=profile_var, start_dir=start_dir, ceiling=ceiling
    )
    if exit_code:
        raise typer.Exit(code=exit_code)


@app.command("load")
def load(
    profile: str | None = PROFILE_OPTION,
    profile_var: str = PROFILE_VAR_OPTION,
    start_dir: Path | None = START_OPTION,
    ceiling: Path | None = CEILING_OPTION,
    override: bool = typer.Option(
        False,
        "--override",
        help="Replace variables that are already set in the environment.",
    ),
    export: bool = typer.Option(
        False,
        "--export",
        "-e",
        help="Print shell export statements suitable for eval.",
    ),
    log_dir: Path | None = typer.Option(
        None,
        "--log-dir",
        file_okay=False,
        dir_okay=True,
        help="Write a timestamped event log into this directory.",
    ),
) -> None:
    """
    Load the active profile's file and report the variables it sets.

    Exits with code 1 when no file matches or the file is malformed, and with
    code 2 when the directory search itself fails.

    Examples:
        locenv load
        eval "$(locenv load --export)"
        locenv load --profile production --override
    """
    exit_code = run_load(
        profile,
        profile_var=profile_var,
        start_dir=start_dir,
        ceiling=ceiling,
        override=override,
        export=export,
        log_dir=log_dir,
    )
    if exit_code:
        raise typer.Exit(code=exit_code)


@app.command("candidates")
def candidates(
    profile: str | None = PROFILE_OPTION,
    profile_var: str = PROFILE_VAR_OPTION,
    start_dir: Path | None = START_OPTION,
    ceiling: Path | None = CEILING_OPTION,
) -> None:
    """
    List every .env.* file seen on the upward walk.

    Files matching the active profile are marked, which helps diagnose a
    profile that never loads.
    """
    active = profile if profile is not None else resolve_profile(variable=profile_var)
    try:
        levels = collect_candidates(start_dir, ceiling)
    except OSError as exc:
        console.print(f"[red]Search failed:[/red] {exc}")
        raise typer.Exit(code=2)

    console.print(f"Active profile: {active!r}")
    for level in levels:
        tree = Tree(f"📁 {level.directory}")
        for candidate in level.candidates:
            relative = os.path.relpath(candidate.path, level.directory)
            marker = "[green]✔[/green]" if candidate.profile == active else "·"
            tree.add(f"{marker} {relative} [dim]({candidate.profile})[/dim]")
        console.print(tree)


def main() -> None:
    """Entry point for Python -m execution."""
    app()


if __name__ == "__main__":
    main()
