"""Command line interface for privilee-map-tests."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from pathlib import Path
from typing import Annotated, Any, Optional

import typer

from .browser.base import EnvironmentUnavailableError
from .browser.provision import ensure_browser_installed
from .config import load_config
from .factory import build_notifier, session_factory
from .orchestrator.runner import ScenarioRunner
from .scenarios import get_scenarios

app = typer.Typer(help="Venue map UI test suite")


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Configure logging before executing any command."""

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


@app.command()
def version() -> None:
    """Print the package version."""

    try:
        typer.echo(get_version("privilee-map-tests"))
    except PackageNotFoundError:  # pragma: no cover - when running from source tree
        typer.echo("0.0.0")


@app.command("install-browser")
def install_browser() -> None:
    """Download the Chromium build used by the suite."""

    try:
        ensure_browser_installed("chromium", force=True)
    except EnvironmentUnavailableError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    typer.echo("Chromium is installed.")


@app.command("list")
def list_scenarios() -> None:
    """List the available scenarios."""

    for item in get_scenarios():
        typer.echo(f"{item.name}: {item.description}")


@app.command()
def run(
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to YAML configuration."),
    ] = None,
    env_file: Annotated[
        Optional[Path],
        typer.Option(
            "--env-file",
            help="Path to an .env file with default configuration values.",
        ),
    ] = None,
    scenario: Annotated[
        Optional[list[str]],
        typer.Option("--scenario", "-s", help="Scenario to run; repeat to select several."),
    ] = None,
    headless: Annotated[
        Optional[bool],
        typer.Option("--headless/--headed", help="Run the browser in headless mode (or headed)."),
    ] = None,
) -> None:
    """Run the map scenarios and exit non-zero if any fails."""

    overrides: dict[str, Any] = {}
    if headless is not None:
        overrides["browser"] = {"headless": headless}

    config = load_config(config_path, env_file=env_file, **overrides)
    runner = ScenarioRunner(
        config=config,
        session_factory=session_factory(config),
        notifier=build_notifier(),
    )
    try:
        results = runner.run(scenario or None)
    except KeyError as exc:
        typer.echo(exc.args[0], err=True)
        raise typer.Exit(code=2) from exc
    if not all(result.passed for result in results):
        raise typer.Exit(code=1)
    typer.echo("All scenarios passed.")


if __name__ == "__main__":
    app()
