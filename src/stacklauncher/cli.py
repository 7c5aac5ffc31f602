"""StackLauncher CLI - 启动容器化后端并打开应用窗口"""

import sys

import click

from . import __version__, config
from .runtime import LaunchSettings, bootstrap
from .telemetry import get_logger, setup_logging

logger = get_logger(__name__)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, prog_name="stacklauncher")
@click.option("--url", default=None, help=f"Backend URL to wait for and load (default: {config.APP_URL}).")
@click.option(
    "-f",
    "--compose-file",
    "compose_files",
    multiple=True,
    type=click.Path(dir_okay=False),
    help="Compose file passed to `docker compose -f`. Repeatable.",
)
@click.option(
    "--project-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory to run `docker compose` in.",
)
@click.option("-p", "--project-name", default=None, help="Compose project name.")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0),
    default=None,
    help=f"Seconds to wait for the backend to answer (default: {config.READINESS_MAX_WAIT_SECONDS:g}).",
)
@click.option("--docker", "docker_binary", default=None, help="docker executable to use.")
@click.option("--headless", is_flag=True, help="Use terminal prompts and the system browser instead of a window.")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level.",
)
def main(
    url: str | None,
    compose_files: tuple[str, ...],
    project_dir: str | None,
    project_name: str | None,
    timeout: float | None,
    docker_binary: str | None,
    headless: bool,
    log_level: str | None,
) -> None:
    """Start the Docker Compose backend and open it once it answers."""
    setup_logging(log_level)

    settings = LaunchSettings(headless=headless)
    if url:
        settings.url = url
    if compose_files:
        settings.compose_files = list(compose_files)
    if project_dir:
        settings.project_dir = project_dir
    if project_name:
        settings.project_name = project_name
    if timeout is not None:
        settings.max_wait = timeout
    if docker_binary:
        settings.docker_binary = docker_binary

    components = bootstrap(settings)
    try:
        exit_code = components.serve()
    except KeyboardInterrupt:
        click.echo("\nInterrupted", err=True)
        exit_code = 130

    logger.debug(f"[CLI] Exiting with code {exit_code}")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
