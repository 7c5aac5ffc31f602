"""LauncherApp 窗口生命周期测试"""

import asyncio

import pytest

from stacklauncher import config
from stacklauncher.adapters.memory import (
    MemoryWindowHost,
    RecordingInstallAssistant,
    ScriptedPrompt,
    ScriptedReadinessProber,
    ScriptedStackController,
)
from stacklauncher.app import LauncherApp
from stacklauncher.bootstrap.orchestrator import BootstrapOrchestrator
from stacklauncher.bootstrap.types import RuntimeStatus, TerminationReason, UserDecision

URL = "http://localhost:18080"


class Harness:
    """LauncherApp + 内存后端"""

    def __init__(self, statuses=None, readiness=None, decisions=None, quit_on_all_closed=False):
        self.host = MemoryWindowHost()
        self.stack = ScriptedStackController(statuses or [RuntimeStatus.READY])
        self.prober = ScriptedReadinessProber(readiness if readiness is not None else [True] * 10)
        self.prompt = ScriptedPrompt(decisions)
        self.installer = RecordingInstallAssistant()
        self.orchestrators: list[BootstrapOrchestrator] = []
        self.app = LauncherApp(self.host, self._factory, quit_on_all_closed=quit_on_all_closed)

    def _factory(self, window):
        orchestrator = BootstrapOrchestrator(
            self.stack,
            self.prober,
            self.prompt,
            self.installer,
            url=URL,
            max_wait=1.0,
            window=window,
            placeholder_html="<title>Starting</title>",
        )
        self.orchestrators.append(orchestrator)
        return orchestrator


class TestReady:
    @pytest.mark.asyncio
    async def test_ready_creates_window_and_launches(self):
        h = Harness()

        outcome = await h.app.on_ready()

        assert outcome.launched
        assert len(h.host.windows) == 1
        assert h.app.window is h.host.windows[0]
        assert h.host.windows[0].current_url == URL
        assert h.host.quit_requested is False

    @pytest.mark.asyncio
    async def test_ready_fires_once(self):
        h = Harness()

        await h.app.on_ready()
        second = await h.app.on_ready()

        assert second is None
        assert len(h.host.windows) == 1
        assert h.app.pass_count == 1

    @pytest.mark.asyncio
    async def test_failure_requests_quit_with_exit_code(self):
        h = Harness(statuses=[RuntimeStatus.STACK_START_FAILED])

        outcome = await h.app.on_ready()

        assert outcome.reason == TerminationReason.STACK_START_FAILED
        assert h.host.exit_codes == [config.EXIT_STACK_START_FAILED]

    @pytest.mark.asyncio
    async def test_user_quit_exits_cleanly(self):
        h = Harness(statuses=[RuntimeStatus.RUNTIME_NOT_RUNNING], decisions=[UserDecision.QUIT])

        await h.app.on_ready()

        assert h.host.exit_codes == [config.EXIT_OK]

    @pytest.mark.asyncio
    async def test_retry_reuses_the_same_window(self):
        h = Harness(
            statuses=[RuntimeStatus.RUNTIME_NOT_RUNNING, RuntimeStatus.READY],
            decisions=[UserDecision.RETRY],
        )

        outcome = await h.app.on_ready()

        assert outcome.launched
        assert len(h.host.windows) == 1
        assert h.host.windows[0].html_loads == ["<title>Starting</title>"] * 2

    @pytest.mark.asyncio
    async def test_window_creation_failure_is_unexpected_error(self):
        h = Harness()

        def broken():
            raise RuntimeError("no display")

        h.host.create_window = broken

        outcome = await h.app.on_ready()

        assert outcome.reason == TerminationReason.UNEXPECTED_ERROR
        assert h.host.exit_codes == [config.EXIT_UNEXPECTED_ERROR]
        assert h.app.pass_in_flight is False


class TestReactivation:
    @pytest.mark.asyncio
    async def test_activate_with_open_window_does_nothing(self):
        h = Harness()
        await h.app.on_ready()

        result = await h.app.on_activate()

        assert result is None
        assert len(h.host.windows) == 1
        assert h.stack.calls == 1

    @pytest.mark.asyncio
    async def test_close_then_activate_starts_exactly_one_pass(self):
        """关闭窗口后重新激活：恰好一个新窗口、一次新编排"""
        h = Harness()
        await h.app.on_ready()

        h.host.windows[0].close()
        assert h.app.window is None

        outcome = await h.app.on_activate()

        assert outcome.launched
        assert len(h.host.windows) == 2
        assert len(h.host.open_windows) == 1
        assert h.app.window is h.host.windows[1]
        assert h.app.pass_count == 2
        assert len(h.orchestrators) == 2
        assert h.stack.calls == 2

    @pytest.mark.asyncio
    async def test_activate_while_pass_in_flight_is_ignored(self):
        """编排进行中到达的激活被忽略"""
        h = Harness()
        gate = asyncio.Event()

        started = asyncio.Event()

        class SlowProber(ScriptedReadinessProber):
            async def wait_until_ready(self, url, max_wait):
                started.set()
                await gate.wait()
                return True

        h.prober = SlowProber()

        ready_task = asyncio.create_task(h.app.on_ready())
        await started.wait()
        assert h.app.pass_in_flight

        # 进行中关闭窗口后立即激活
        h.host.windows[0].close()
        result = await h.app.on_activate()

        gate.set()
        outcome = await ready_task

        assert result is None
        assert outcome.launched
        assert len(h.host.windows) == 1
        assert h.app.pass_count == 1


class TestAllWindowsClosed:
    @pytest.mark.asyncio
    async def test_quit_policy(self):
        h = Harness(quit_on_all_closed=True)
        await h.app.on_ready()

        h.host.windows[0].close()

        assert h.host.exit_codes == [config.EXIT_OK]

    @pytest.mark.asyncio
    async def test_stay_alive_policy(self):
        h = Harness(quit_on_all_closed=False)
        await h.app.on_ready()

        h.host.windows[0].close()

        assert h.host.exit_codes == []
        assert h.app.window is None
