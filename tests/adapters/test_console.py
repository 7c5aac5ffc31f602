"""Headless 后端测试"""

import io
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from stacklauncher.adapters.console import BrowserWindowHost, ConsolePrompt
from stacklauncher.adapters.memory import RecordingOpener
from stacklauncher.bootstrap import prompts
from stacklauncher.bootstrap.types import UserDecision


def make_prompt(answer: str):
    output = io.StringIO()
    console = Console(file=output, width=100, force_terminal=False)
    return ConsolePrompt(console=console, stream=io.StringIO(answer)), output


class TestConsolePrompt:
    @pytest.mark.asyncio
    async def test_numbered_choice(self):
        prompt, output = make_prompt("2\n")

        decision = await prompt.ask(prompts.daemon_not_running())

        assert decision == UserDecision.QUIT
        text = output.getvalue()
        assert "Docker is not running" in text
        assert "[1] Retry" in text
        assert "[2] Quit" in text

    @pytest.mark.asyncio
    async def test_empty_answer_picks_default(self):
        prompt, _ = make_prompt("\n")

        decision = await prompt.ask(prompts.daemon_not_running())

        assert decision == UserDecision.RETRY

    @pytest.mark.asyncio
    async def test_notify_prints_panel(self):
        prompt, output = make_prompt("")

        await prompt.notify(prompts.stack_start_failed())

        assert prompts.stack_start_failed().title in output.getvalue()


class TestBrowserWindowHost:
    @pytest.mark.asyncio
    async def test_load_url_opens_browser(self):
        opener = RecordingOpener()
        host = BrowserWindowHost(opener, open_browser=True)
        window = host.create_window()

        await window.load_html("<html><title>Starting Flumio</title></html>")
        await window.load_url("http://localhost:8080")

        assert window.current_url == "http://localhost:8080"
        assert opener.urls == ["http://localhost:8080"]

    @pytest.mark.asyncio
    async def test_browser_can_be_disabled(self):
        opener = RecordingOpener()
        window = BrowserWindowHost(opener, open_browser=False).create_window()

        await window.load_url("http://localhost:8080")

        assert opener.urls == []

    def test_quit_keeps_first_exit_code(self):
        host = BrowserWindowHost(RecordingOpener(), open_browser=False)

        host.quit(4)
        host.quit(0)

        assert host.exit_code == 4

    def test_closed_observer_is_never_called(self):
        window = BrowserWindowHost(RecordingOpener(), open_browser=False).create_window()
        callback = MagicMock()

        window.on_closed(callback)

        callback.assert_not_called()
