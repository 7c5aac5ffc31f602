"""LauncherApp - 窗口生命周期绑定

职责：
- 持有唯一的窗口句柄（单一写入方）
- 进程就绪触发：只生效一次，创建窗口并执行一次编排
- 重新激活触发：仅在没有打开的窗口时生效，创建窗口并执行一次编排
- 窗口关闭观察者：清除句柄，按平台策略决定是否退出
- 编排以失败终止时请求进程退出

编排进行中到达的触发会被忽略（不排队、不并发）。
"""

from collections.abc import Callable
from typing import TYPE_CHECKING

from . import config
from .bootstrap.types import BootstrapOutcome, TerminationReason
from .telemetry import get_logger

if TYPE_CHECKING:
    from .adapters.base import Window, WindowHost
    from .bootstrap.orchestrator import BootstrapOrchestrator

logger = get_logger(__name__)

OrchestratorFactory = Callable[["Window"], "BootstrapOrchestrator"]


class LauncherApp:
    """应用外壳：把宿主事件接到编排器上

    使用示例:
        app = LauncherApp(host, lambda window: BootstrapOrchestrator(..., window=window))
        await app.on_ready()
    """

    def __init__(
        self,
        host: "WindowHost",
        orchestrator_factory: OrchestratorFactory,
        quit_on_all_closed: bool | None = None,
    ):
        """初始化

        Args:
            host: 窗口宿主
            orchestrator_factory: 为给定窗口创建编排器
            quit_on_all_closed: 所有窗口关闭后是否退出，None 使用平台默认
        """
        self._host = host
        self._factory = orchestrator_factory
        self._quit_on_all_closed = (
            config.QUIT_ON_ALL_WINDOWS_CLOSED if quit_on_all_closed is None else quit_on_all_closed
        )
        self._window: "Window | None" = None
        self._ready_fired = False
        self._pass_in_flight = False
        self.pass_count = 0
        self.last_outcome: BootstrapOutcome | None = None

    # === 状态查询 ===

    @property
    def window(self) -> "Window | None":
        """当前持有的窗口，关闭后为 None"""
        return self._window

    @property
    def pass_in_flight(self) -> bool:
        return self._pass_in_flight

    # === 宿主事件 ===

    async def on_ready(self) -> BootstrapOutcome | None:
        """进程就绪（每个进程只生效一次）"""
        if self._ready_fired:
            logger.warning("[App] Ready trigger fired twice, ignoring")
            return None
        self._ready_fired = True
        return await self._open_and_bootstrap("ready")

    async def on_activate(self) -> BootstrapOutcome | None:
        """应用重新激活（例如 macOS 点击 Dock 图标）"""
        if self._window is not None:
            logger.debug("[App] Activate ignored: a window is already open")
            return None
        return await self._open_and_bootstrap("activate")

    def on_all_windows_closed(self) -> None:
        """所有窗口关闭后的平台策略"""
        if self._quit_on_all_closed:
            logger.info("[App] All windows closed, quitting")
            self._host.quit(config.EXIT_OK)
        else:
            logger.info("[App] All windows closed, staying alive")

    # === 内部 ===

    async def _open_and_bootstrap(self, trigger: str) -> BootstrapOutcome | None:
        if self._pass_in_flight:
            logger.warning(f"[App] {trigger} ignored: bootstrap already in progress")
            return None

        self._pass_in_flight = True
        try:
            try:
                window = self._host.create_window()
                self._window = window
                window.on_closed(lambda: self._on_window_closed(window))
                orchestrator = self._factory(window)
            except Exception as e:
                logger.exception(f"[App] Failed to prepare window: {e}")
                outcome = BootstrapOutcome.terminate(TerminationReason.UNEXPECTED_ERROR, "", 0)
            else:
                self.pass_count += 1
                logger.info(f"[App] Bootstrap pass {self.pass_count} ({trigger})")
                outcome = await orchestrator.run()
        finally:
            self._pass_in_flight = False

        self.last_outcome = outcome
        if not outcome.launched:
            self._host.quit(outcome.exit_code)
        return outcome

    def _on_window_closed(self, window: "Window") -> None:
        if self._window is window:
            self._window = None
        logger.info("[App] Window closed")
        self.on_all_windows_closed()
