"""CLI entry point for the hubsim emulator."""

from __future__ import annotations

import sys
import threading
from pathlib import Path

import click

from hubsim.config import ConfigError, ScenarioConfig, load_scenario
from hubsim.logging import setup_logging
from hubsim.server import MockServer, ServerStartError


def _wait_for_interrupt() -> None:
    """Block until Ctrl-C."""
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        pass


def _load(scenario_path: Path | None) -> ScenarioConfig:
    if scenario_path is None:
        return ScenarioConfig()
    return load_scenario(scenario_path)


@click.group()
@click.version_option(package_name="hubsim")
def main() -> None:
    """hubsim - stateful GitHub issues and Projects v2 emulator."""
    pass


@main.command()
@click.option(
    "-s",
    "--scenario",
    "scenario_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Scenario YAML to seed the emulator with",
)
@click.option(
    "--host",
    default=None,
    help="Interface to bind (default: from scenario or 127.0.0.1)",
)
@click.option(
    "--port",
    type=int,
    default=None,
    help="Port to bind, 0 for any free port (default: from scenario or 0)",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for log files (default: $HUBSIM_LOG_DIR or ./logs)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def serve(
    scenario_path: Path | None,
    host: str | None,
    port: int | None,
    log_dir: Path | None,
    verbose: bool,
) -> None:
    """Start the emulator and serve until interrupted."""
    setup_logging(log_dir=log_dir, level="DEBUG" if verbose else None)

    try:
        scenario = _load(scenario_path)
        server = MockServer(
            host=host if host is not None else scenario.server.host,
            port=port if port is not None else scenario.server.port,
            log_level="debug" if verbose else scenario.server.log_level,
        )
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except (OSError, ServerStartError) as e:
        click.echo(f"Server error: {e}", err=True)
        sys.exit(1)

    with server:
        server.apply_scenario(scenario)
        click.echo(f"REST:    {server.url}")
        click.echo(f"GraphQL: {server.graphql_url}")
        click.echo("Press Ctrl-C to stop.")
        _wait_for_interrupt()
    click.echo("Stopped.")


@main.command()
@click.argument(
    "scenario_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
def validate(scenario_path: Path) -> None:
    """Check a scenario file and print what it seeds."""
    try:
        scenario = load_scenario(scenario_path)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    open_count = sum(1 for issue in scenario.issues if issue.is_open)
    comment_count = sum(len(c) for c in scenario.comments.values())
    click.echo(f"Scenario: {scenario_path}")
    click.echo(f"  Authenticated user: {scenario.authenticated_user}")
    click.echo(f"  Issues: {len(scenario.issues)} ({open_count} open)")
    click.echo(f"  Comments: {comment_count}")
    for project in scenario.projects:
        columns = ", ".join(c.name for c in project.columns) or "no columns"
        click.echo(
            f"  Project {project.id}: {project.title or '(untitled)'} "
            f"[{columns}] with {len(project.items)} item(s)"
        )
    if scenario.invalid_projects:
        invalid = ", ".join(str(p) for p in scenario.invalid_projects)
        click.echo(f"  Invalid projects: {invalid}")
    auth = scenario.auth
    modes = []
    if auth.expected_token:
        modes.append("exact token")
    if auth.reject_invalid:
        modes.append("reject invalid")
    click.echo(f"  Auth: {', '.join(modes) or 'open'}")


if __name__ == "__main__":
    main()
