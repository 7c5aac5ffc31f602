"""桌面后端：pywebview 窗口与对话框

pywebview 的 GUI 循环占用主线程，webview.start() 的回调运行在独立线程中，
编排器在该线程里用 asyncio.run() 执行。窗口操作和对话框都是阻塞调用，
通过 asyncio.to_thread 包裹。

pywebview 没有 "激活应用" 事件，最后一个窗口关闭后 webview.start() 返回，
因此桌面后端只会触发 on_ready。
"""

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

import webview

from .. import config
from ..bootstrap.prompts import PromptSpec
from ..bootstrap.types import UserDecision
from .base import UserPrompt, Window, WindowHost

if TYPE_CHECKING:
    from ..app import LauncherApp

logger = logging.getLogger(__name__)


class WebviewWindow(Window):
    """pywebview 窗口包装"""

    def __init__(self, native: "webview.Window"):
        self._native = native

    @property
    def native(self) -> "webview.Window":
        return self._native

    async def load_html(self, html: str) -> None:
        await asyncio.to_thread(self._native.load_html, html)

    async def load_url(self, url: str) -> None:
        await asyncio.to_thread(self._native.load_url, url)

    def on_closed(self, callback: Callable[[], None]) -> None:
        self._native.events.closed += callback

    def confirm(self, title: str, message: str) -> bool:
        """阻塞式 OK/Cancel 对话框"""
        return bool(self._native.create_confirmation_dialog(title, message))


class WebviewWindowHost(WindowHost):
    """pywebview 窗口宿主"""

    def __init__(
        self,
        title: str | None = None,
        width: int | None = None,
        height: int | None = None,
        background: str | None = None,
        placeholder_html: str = "",
    ):
        self._title = title or config.APP_NAME
        self._width = width or config.WINDOW_WIDTH
        self._height = height or config.WINDOW_HEIGHT
        self._background = background or config.WINDOW_BACKGROUND
        self._placeholder_html = placeholder_html
        # webview.start() 之前必须至少创建一个窗口，第一次 create_window 复用它
        self._pending: "webview.Window | None" = None
        self._active: WebviewWindow | None = None
        self.exit_code: int | None = None

    @property
    def active_window(self) -> WebviewWindow | None:
        return self._active

    def _create_native(self) -> "webview.Window":
        return webview.create_window(
            self._title,
            html=self._placeholder_html or None,
            width=self._width,
            height=self._height,
            background_color=self._background,
        )

    def create_window(self) -> WebviewWindow:
        if self._pending is not None:
            native, self._pending = self._pending, None
        else:
            native = self._create_native()
        window = WebviewWindow(native)
        window.on_closed(lambda: self._on_window_closed(window))
        self._active = window
        return window

    def _on_window_closed(self, window: WebviewWindow) -> None:
        # 已关闭的窗口不能再弹对话框
        if self._active is window:
            self._active = None

    def quit(self, exit_code: int = 0) -> None:
        logger.info(f"[Webview] Quit requested (exit code {exit_code})")
        if self.exit_code is None:
            self.exit_code = exit_code
        for native in list(webview.windows):
            native.destroy()
        self._active = None

    def serve(self, app: "LauncherApp") -> int:
        """运行 GUI 循环直到所有窗口关闭

        Returns:
            退出码
        """
        self._pending = self._create_native()
        webview.start(lambda: asyncio.run(app.on_ready()))
        return self.exit_code or config.EXIT_OK


class WebviewPrompt(UserPrompt):
    """基于 pywebview 确认框的对话框

    pywebview 只提供 OK/Cancel 两个按钮，按钮含义写在正文里。
    """

    def __init__(self, host: WebviewWindowHost):
        self._host = host

    async def ask(self, spec: PromptSpec) -> UserDecision:
        """窗口已被用户关闭时按取消按钮处理"""
        window = self._host.active_window
        if window is None:
            logger.warning(f"[Webview] No window for dialog {spec.title!r}, choosing {spec.cancel_choice.value}")
            return spec.cancel_choice
        message = _format_message(spec)
        message += f"\n\nOK: {spec.buttons[0]}    Cancel: {spec.buttons[1]}"
        confirmed = await asyncio.to_thread(window.confirm, spec.title, message)
        return spec.decision_for(0 if confirmed else 1)

    async def notify(self, spec: PromptSpec) -> None:
        window = self._host.active_window
        if window is None:
            logger.warning(f"[Webview] No window for notice {spec.title!r}: {spec.message}")
            return
        # 确认框总带 Cancel 按钮，两个按钮都视为关闭提示
        message = _format_message(spec) + f"\n\nOK / Cancel: {spec.buttons[0]}"
        await asyncio.to_thread(window.confirm, spec.title, message)


def _format_message(spec: PromptSpec) -> str:
    if spec.detail:
        return f"{spec.message}\n\n{spec.detail}"
    return spec.message
