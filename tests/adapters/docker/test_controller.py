"""Tests for DockerStackController."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from stacklauncher.adapters.docker.client import NOT_FOUND_RETURNCODE, CommandResult
from stacklauncher.adapters.docker.controller import DockerStackController
from stacklauncher.bootstrap.types import RuntimeStatus

OK = CommandResult(returncode=0, stdout="ok\n")
FAILED = CommandResult(returncode=1, stderr="boom")


def make_client(version=OK, info=OK, compose=OK):
    client = MagicMock()
    client.version = AsyncMock(return_value=version)
    client.info = AsyncMock(return_value=info)
    client.compose_up = AsyncMock(return_value=compose)
    return client


def make_controller(client):
    return DockerStackController(
        client=client,
        compose_files=["docker-compose.yml"],
        project_dir="/srv/app",
        project_name="flumio",
    )


class TestDockerStackController:
    @pytest.mark.asyncio
    async def test_ready(self):
        client = make_client()

        status = await make_controller(client).start()

        assert status == RuntimeStatus.READY
        client.compose_up.assert_awaited_once_with(
            files=["docker-compose.yml"], project_dir="/srv/app", project_name="flumio"
        )

    @pytest.mark.asyncio
    async def test_runtime_missing(self):
        client = make_client(version=CommandResult(returncode=NOT_FOUND_RETURNCODE, not_found=True))

        status = await make_controller(client).start()

        assert status == RuntimeStatus.RUNTIME_MISSING
        client.info.assert_not_awaited()
        client.compose_up.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "version",
        [CommandResult(returncode=-9, timed_out=True), CommandResult(returncode=1, stderr="broken")],
    )
    async def test_failing_cli_is_retryable_not_missing(self, version):
        """CLI 存在但卡住/出错：可重试，而不是提示安装"""
        client = make_client(version=version)

        status = await make_controller(client).start()

        assert status == RuntimeStatus.RUNTIME_NOT_RUNNING
        client.info.assert_not_awaited()
        client.compose_up.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_daemon_not_running(self):
        client = make_client(info=FAILED)

        status = await make_controller(client).start()

        assert status == RuntimeStatus.RUNTIME_NOT_RUNNING
        client.compose_up.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_compose_failure(self):
        client = make_client(compose=FAILED)

        status = await make_controller(client).start()

        assert status == RuntimeStatus.STACK_START_FAILED

    @pytest.mark.asyncio
    async def test_compose_timeout(self):
        client = make_client(compose=CommandResult(returncode=-1, timed_out=True))

        status = await make_controller(client).start()

        assert status == RuntimeStatus.STACK_START_FAILED

    @pytest.mark.asyncio
    async def test_start_is_repeatable(self):
        """多次调用 start 不残留状态"""
        client = make_client()
        controller = make_controller(client)

        assert await controller.start() == RuntimeStatus.READY
        assert await controller.start() == RuntimeStatus.READY
        assert client.compose_up.await_count == 2

    @pytest.mark.asyncio
    async def test_recovers_after_daemon_starts(self):
        client = make_client()
        client.info.side_effect = [FAILED, OK]
        controller = make_controller(client)

        assert await controller.start() == RuntimeStatus.RUNTIME_NOT_RUNNING
        assert await controller.start() == RuntimeStatus.READY
