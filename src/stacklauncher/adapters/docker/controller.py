"""Docker Compose stack controller."""

import logging
from pathlib import Path

from ... import config
from ...bootstrap.types import RuntimeStatus
from ...telemetry import truncate
from ..base import StackController
from .client import DockerClient

logger = logging.getLogger(__name__)


class DockerStackController(StackController):
    """Detect the docker runtime and start the compose stack.

    Checks run in order and the first failing one decides the status:
    1. `docker --version` -> RUNTIME_MISSING when the binary is absent,
       RUNTIME_NOT_RUNNING when it hangs or fails
    2. `docker info`      -> RUNTIME_NOT_RUNNING
    3. `compose up -d`    -> STACK_START_FAILED

    The controller keeps no state between calls, so start() is safe to
    call again after any failure.
    """

    def __init__(
        self,
        client: DockerClient | None = None,
        compose_files: list[str] | None = None,
        project_dir: str | Path | None = None,
        project_name: str | None = None,
    ):
        self._client = client or DockerClient()
        self._compose_files = list(compose_files if compose_files is not None else config.COMPOSE_FILES)
        self._project_dir = project_dir if project_dir is not None else config.COMPOSE_PROJECT_DIR
        self._project_name = project_name if project_name is not None else config.COMPOSE_PROJECT_NAME

    @property
    def client(self) -> DockerClient:
        return self._client

    async def start(self) -> RuntimeStatus:
        version = await self._client.version()
        if version.not_found:
            logger.warning("[Docker] docker CLI is not installed or not on PATH")
            return RuntimeStatus.RUNTIME_MISSING
        if not version.ok:
            reason = "timed out" if version.timed_out else f"exit {version.returncode}"
            logger.warning(f"[Docker] docker --version failed ({reason})")
            return RuntimeStatus.RUNTIME_NOT_RUNNING
        logger.debug(f"[Docker] {version.stdout.strip()}")

        info = await self._client.info()
        if not info.ok:
            logger.warning("[Docker] docker daemon is not running")
            return RuntimeStatus.RUNTIME_NOT_RUNNING
        logger.info(f"[Docker] daemon is running (server {info.stdout.strip()})")

        result = await self._client.compose_up(
            files=self._compose_files,
            project_dir=self._project_dir,
            project_name=self._project_name,
        )
        if not result.ok:
            reason = "timed out" if result.timed_out else f"exit {result.returncode}"
            logger.error(
                f"[Docker] compose up failed ({reason}): "
                f"{truncate(result.stderr, config.LOG_MAX_STDERR_LEN)}"
            )
            return RuntimeStatus.STACK_START_FAILED

        logger.info("[Docker] compose stack is up")
        return RuntimeStatus.READY
