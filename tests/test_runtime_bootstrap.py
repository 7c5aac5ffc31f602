"""runtime.bootstrap 组装测试"""

import pytest

from stacklauncher import config
from stacklauncher.adapters.console import BrowserWindowHost, ConsolePrompt
from stacklauncher.adapters.docker import DockerStackController
from stacklauncher.adapters.install import DockerInstallAssistant
from stacklauncher.adapters.memory import (
    RecordingInstallAssistant,
    ScriptedPrompt,
    ScriptedReadinessProber,
    ScriptedStackController,
)
from stacklauncher.adapters.readiness import HttpReadinessProber
from stacklauncher.app import LauncherApp
from stacklauncher.bootstrap.orchestrator import BootstrapOrchestrator
from stacklauncher.bootstrap.types import RuntimeStatus
from stacklauncher.runtime import LaunchSettings, RuntimeComponents, bootstrap


def headless_settings(**overrides):
    settings = LaunchSettings(
        url="http://localhost:18080",
        compose_files=["docker-compose.yml"],
        project_name="flumio",
        max_wait=1.0,
        headless=True,
    )
    for key, value in overrides.items():
        setattr(settings, key, value)
    return settings


class TestBootstrap:
    def test_headless_components(self):
        components = bootstrap(headless_settings())

        assert isinstance(components.host, BrowserWindowHost)
        assert isinstance(components.prompt, ConsolePrompt)
        assert isinstance(components.stack, DockerStackController)
        assert isinstance(components.prober, HttpReadinessProber)
        assert isinstance(components.installer, DockerInstallAssistant)
        assert isinstance(components.app, LauncherApp)

    def test_placeholder_shows_compose_command(self):
        components = bootstrap(headless_settings())

        assert "docker compose -f docker-compose.yml -p flumio up -d" in components.placeholder_html
        assert "http://localhost:18080" in components.placeholder_html

    def test_docker_binary_is_forwarded(self):
        components = bootstrap(headless_settings(docker_binary="/opt/docker"))

        assert components.stack.client._binary == "/opt/docker"


def make_components(statuses, readiness):
    """headless 组件 + 内存协作方"""
    settings = headless_settings()
    host = BrowserWindowHost(opener=None, open_browser=False)
    stack = ScriptedStackController(statuses)
    prober = ScriptedReadinessProber(readiness)
    prompt = ScriptedPrompt()
    installer = RecordingInstallAssistant()

    def factory(window):
        return BootstrapOrchestrator(
            stack, prober, prompt, installer, url=settings.url, max_wait=settings.max_wait, window=window
        )

    return RuntimeComponents(
        settings=settings,
        host=host,
        prompt=prompt,
        stack=stack,
        prober=prober,
        installer=installer,
        app=LauncherApp(host, factory),
        placeholder_html="",
    )


class TestHeadlessServe:
    def test_launched_exits_zero(self):
        components = make_components([RuntimeStatus.READY], [True])

        assert components.serve() == config.EXIT_OK
        assert components.host.exit_code is None

    def test_readiness_timeout_exit_code(self):
        components = make_components([RuntimeStatus.READY], [False])

        assert components.serve() == config.EXIT_READINESS_TIMEOUT
        assert components.host.exit_code == config.EXIT_READINESS_TIMEOUT

    @pytest.mark.parametrize(
        "status,code",
        [
            (RuntimeStatus.RUNTIME_MISSING, config.EXIT_RUNTIME_MISSING),
            (RuntimeStatus.STACK_START_FAILED, config.EXIT_STACK_START_FAILED),
        ],
    )
    def test_failure_exit_codes(self, status, code):
        components = make_components([status], [True])

        assert components.serve() == code
