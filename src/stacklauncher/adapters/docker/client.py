"""Docker client for subprocess-based docker CLI interaction."""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from ... import config
from ...telemetry import truncate

logger = logging.getLogger(__name__)

# Exit code reported when the binary cannot be executed at all
NOT_FOUND_RETURNCODE = 127


@dataclass
class CommandResult:
    """Result of one docker command.

    Attributes:
        returncode: Process exit code (127 if the binary was not found).
        stdout: Decoded stdout.
        stderr: Decoded stderr.
        not_found: The docker binary is not installed or not on PATH.
        timed_out: The command was killed after exceeding its timeout.
    """

    returncode: int
    stdout: str = ""
    stderr: str = ""
    not_found: bool = False
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and not self.not_found and not self.timed_out


class DockerClient:
    """Client for interacting with docker via subprocess commands.

    Provides async methods for:
    - Checking the CLI is installed
    - Checking the daemon is reachable
    - Bringing a compose stack up
    """

    def __init__(
        self,
        binary: str | None = None,
        command_timeout: float | None = None,
        compose_timeout: float | None = None,
    ):
        """Initialize DockerClient.

        Args:
            binary: docker executable. If None, uses config.DOCKER_BINARY.
            command_timeout: Timeout for quick commands (version/info).
            compose_timeout: Timeout for `compose up`, which may pull images.
        """
        self._binary = binary or config.DOCKER_BINARY
        self._command_timeout = command_timeout or config.DOCKER_COMMAND_TIMEOUT_SECONDS
        self._compose_timeout = compose_timeout or config.COMPOSE_UP_TIMEOUT_SECONDS

    async def run(self, *args: str, timeout: float | None = None, cwd: str | None = None) -> CommandResult:
        """Execute a docker command.

        Args:
            *args: Command arguments (e.g., "info", "--format", "...")
            timeout: Seconds before the process is killed.
            cwd: Working directory for the process.

        Returns:
            CommandResult; never raises for a missing binary or a timeout.
        """
        cmd = [self._binary, *args]
        timeout = timeout or self._command_timeout

        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd,
            )
        except FileNotFoundError:
            logger.info(f"[Docker] Binary not found: {self._binary}")
            return CommandResult(returncode=NOT_FOUND_RETURNCODE, not_found=True)
        except PermissionError as e:
            logger.warning(f"[Docker] Cannot execute {self._binary}: {e}")
            return CommandResult(returncode=NOT_FOUND_RETURNCODE, stderr=str(e), not_found=True)

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(f"[Docker] Command timed out after {timeout}s: {' '.join(cmd)}")
            proc.kill()
            await proc.wait()
            return CommandResult(returncode=proc.returncode or -1, timed_out=True)

        result = CommandResult(
            returncode=proc.returncode,
            stdout=stdout.decode(errors="replace"),
            stderr=stderr.decode(errors="replace"),
        )
        if result.returncode != 0:
            logger.debug(
                f"[Docker] Command failed ({result.returncode}): {' '.join(cmd)}: "
                f"{truncate(result.stderr, config.LOG_MAX_STDERR_LEN)}"
            )
        return result

    async def version(self) -> CommandResult:
        """`docker --version`: succeeds whenever the CLI is installed."""
        return await self.run("--version")

    async def info(self) -> CommandResult:
        """`docker info`: fails when the daemon is not reachable."""
        return await self.run("info", "--format", "{{.ServerVersion}}")

    async def compose_up(
        self,
        files: list[str] | None = None,
        project_dir: str | Path | None = None,
        project_name: str | None = None,
    ) -> CommandResult:
        """Bring the compose stack up in detached mode.

        `docker compose up -d` is idempotent: running it against an already
        running stack leaves the containers untouched.

        Args:
            files: Compose files (-f). Empty uses compose's default lookup.
            project_dir: Directory to run compose in.
            project_name: Compose project name (-p).

        Returns:
            CommandResult of the compose command.
        """
        args = ["compose"]
        for path in files or []:
            args.extend(["-f", str(path)])
        if project_name:
            args.extend(["-p", project_name])
        args.extend(["up", "-d"])

        cwd = str(project_dir) if project_dir else None
        return await self.run(*args, timeout=self._compose_timeout, cwd=cwd)
