"""内存后端：脚本化 / 记录式替身

用于测试和 headless 演练，按预设脚本返回结果并记录每次调用。
"""

from collections import deque
from collections.abc import Callable
from pathlib import Path

from ..bootstrap.prompts import PromptSpec
from ..bootstrap.types import ReadinessResult, RuntimeStatus, UserDecision
from .base import (
    ExternalOpener,
    InstallAssistant,
    ReadinessProber,
    StackController,
    UserPrompt,
    Window,
    WindowHost,
)


class ScriptedStackController(StackController):
    """按顺序返回预设状态；脚本用完后重复最后一个

    脚本项可以是异常实例，调用时抛出。
    """

    def __init__(self, statuses: list[RuntimeStatus | BaseException] | None = None):
        self._statuses = deque(statuses or [RuntimeStatus.READY])
        self._last: RuntimeStatus | BaseException = self._statuses[-1]
        self.calls = 0

    async def start(self) -> RuntimeStatus:
        self.calls += 1
        item = self._statuses.popleft() if self._statuses else self._last
        self._last = item
        if isinstance(item, BaseException):
            raise item
        return item


class ScriptedReadinessProber(ReadinessProber):
    """按顺序返回预设结果；记录每次 (url, max_wait)"""

    def __init__(self, results: list[bool | ReadinessResult | BaseException] | None = None):
        self._results = deque(results if results is not None else [True])
        self.calls: list[tuple[str, float]] = []

    async def wait_until_ready(self, url: str, max_wait: float) -> ReadinessResult | bool:
        self.calls.append((url, max_wait))
        item = self._results.popleft() if self._results else False
        if isinstance(item, BaseException):
            raise item
        return item


class ScriptedPrompt(UserPrompt):
    """按顺序回答对话框；脚本用完后选择取消按钮

    history 记录所有展示过的对话框（ask 与 notify）。
    """

    def __init__(self, decisions: list[UserDecision] | None = None):
        self._decisions = deque(decisions or [])
        self.asked: list[PromptSpec] = []
        self.notified: list[PromptSpec] = []
        self.history: list[tuple[PromptSpec, UserDecision | None]] = []

    async def ask(self, spec: PromptSpec) -> UserDecision:
        decision = self._decisions.popleft() if self._decisions else spec.cancel_choice
        self.asked.append(spec)
        self.history.append((spec, decision))
        return decision

    async def notify(self, spec: PromptSpec) -> None:
        self.notified.append(spec)
        self.history.append((spec, None))


class RecordingInstallAssistant(InstallAssistant):
    """记录调用次数，可包装真实的安装助手"""

    def __init__(self, wrapped: InstallAssistant | None = None, decision: UserDecision = UserDecision.CANCEL):
        self._wrapped = wrapped
        self._decision = decision
        self.calls = 0

    async def offer_install(self) -> UserDecision | None:
        self.calls += 1
        if self._wrapped is not None:
            return await self._wrapped.offer_install()
        return self._decision


class RecordingOpener(ExternalOpener):
    def __init__(self):
        self.urls: list[str] = []
        self.paths: list[Path] = []

    async def open_url(self, url: str) -> None:
        self.urls.append(url)

    async def open_path(self, path: Path) -> None:
        self.paths.append(path)


class MemoryWindow(Window):
    """记录加载内容的窗口；close() 模拟用户关闭"""

    def __init__(self, window_id: int):
        self.window_id = window_id
        self.html_loads: list[str] = []
        self.url_loads: list[str] = []
        self.closed = False
        self._closed_callbacks: list[Callable[[], None]] = []

    @property
    def current_url(self) -> str | None:
        return self.url_loads[-1] if self.url_loads else None

    async def load_html(self, html: str) -> None:
        self.html_loads.append(html)

    async def load_url(self, url: str) -> None:
        self.url_loads.append(url)

    def on_closed(self, callback: Callable[[], None]) -> None:
        self._closed_callbacks.append(callback)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        for callback in list(self._closed_callbacks):
            callback()


class MemoryWindowHost(WindowHost):
    def __init__(self):
        self.windows: list[MemoryWindow] = []
        self.exit_codes: list[int] = []

    @property
    def open_windows(self) -> list[MemoryWindow]:
        return [w for w in self.windows if not w.closed]

    @property
    def quit_requested(self) -> bool:
        return bool(self.exit_codes)

    def create_window(self) -> MemoryWindow:
        window = MemoryWindow(window_id=len(self.windows) + 1)
        self.windows.append(window)
        return window

    def quit(self, exit_code: int = 0) -> None:
        self.exit_codes.append(exit_code)
