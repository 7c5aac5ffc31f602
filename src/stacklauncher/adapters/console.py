"""Headless 后端：终端对话框 + 系统浏览器"""

import asyncio
import logging
import re
from collections.abc import Callable
from typing import TextIO

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.text import Text

from .. import config
from ..bootstrap.prompts import PromptSpec
from ..bootstrap.types import PromptKind, UserDecision
from .base import ExternalOpener, UserPrompt, Window, WindowHost

logger = logging.getLogger(__name__)

_KIND_STYLES = {
    PromptKind.INFO: "cyan",
    PromptKind.WARNING: "yellow",
    PromptKind.ERROR: "red",
}

_TITLE_RE = re.compile(r"<title>(.*?)</title>", re.IGNORECASE | re.DOTALL)


class ConsolePrompt(UserPrompt):
    """使用 rich 在终端中展示对话框

    按钮以编号列出，用户输入编号选择；直接回车选择默认按钮。
    """

    def __init__(self, console: Console | None = None, stream: TextIO | None = None):
        """初始化

        Args:
            console: rich Console，None 输出到 stderr
            stream: 输入流（测试用），None 读取终端
        """
        self._console = console or Console(stderr=True)
        self._stream = stream

    async def ask(self, spec: PromptSpec) -> UserDecision:
        return await asyncio.to_thread(self._ask_blocking, spec)

    async def notify(self, spec: PromptSpec) -> None:
        await asyncio.to_thread(self._show, spec)

    def _show(self, spec: PromptSpec) -> None:
        body = Text(spec.message)
        if spec.detail:
            body.append("\n\n" + spec.detail, style="dim")
        style = _KIND_STYLES.get(spec.kind, "white")
        self._console.print(Panel(body, title=spec.title, border_style=style, expand=False))

    def _ask_blocking(self, spec: PromptSpec) -> UserDecision:
        self._show(spec)
        for index, label in enumerate(spec.buttons, start=1):
            self._console.print(f"  [{index}] {label}", highlight=False, markup=False)

        choices = [str(i) for i in range(1, len(spec.buttons) + 1)]
        answer = Prompt.ask(
            "Choose",
            console=self._console,
            choices=choices,
            default=str(spec.default_index + 1),
            stream=self._stream,
        )
        decision = spec.decision_for(int(answer) - 1)
        logger.debug(f"[ConsolePrompt] {spec.title!r} -> {decision.value}")
        return decision


class BrowserWindow(Window):
    """Headless 窗口：占位页写日志，就绪后在浏览器中打开目标地址"""

    def __init__(self, opener: ExternalOpener | None, open_browser: bool = True):
        self._opener = opener
        self._open_browser = open_browser
        self.current_url: str | None = None

    async def load_html(self, html: str) -> None:
        match = _TITLE_RE.search(html)
        title = match.group(1).strip() if match else "placeholder"
        logger.info(f"[BrowserWindow] {title}")

    async def load_url(self, url: str) -> None:
        self.current_url = url
        logger.info(f"[BrowserWindow] Backend ready at {url}")
        if self._open_browser and self._opener is not None:
            await self._opener.open_url(url)

    def on_closed(self, callback: Callable[[], None]) -> None:
        """无操作：浏览器标签页的关闭无法观测，回调永远不会被调用"""


class BrowserWindowHost(WindowHost):
    """Headless 宿主：没有 GUI 事件循环，quit 只记录退出码"""

    def __init__(self, opener: ExternalOpener | None = None, open_browser: bool | None = None):
        self._opener = opener
        self._open_browser = config.OPEN_BROWSER_WHEN_HEADLESS if open_browser is None else open_browser
        self.exit_code: int | None = None

    def create_window(self) -> BrowserWindow:
        return BrowserWindow(self._opener, open_browser=self._open_browser)

    def quit(self, exit_code: int = 0) -> None:
        logger.info(f"[BrowserWindowHost] Quit requested (exit code {exit_code})")
        if self.exit_code is None:
            self.exit_code = exit_code
