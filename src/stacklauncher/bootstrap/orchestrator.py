"""BootstrapOrchestrator - 启动编排状态机

职责：
- 调用 StackController.start() 并按返回状态分支
- Docker 未运行时询问 Retry/Quit，Retry 从头重新编排（显式循环，不递归）
- stack 就绪后调用 ReadinessProber 等待 HTTP 服务响应
- 把每一种失败映射为唯一的用户可见结果（重试、退出或继续）

不负责：
- 窗口创建与生命周期（由 LauncherApp 管理）
- 进程退出（调用方根据 BootstrapOutcome 决定）

状态流转见 transitions.py。
"""

from collections import deque
from typing import TYPE_CHECKING

from .. import config
from ..telemetry import get_logger, metrics
from . import prompts
from .errors import UnexpectedResultError
from .transitions import check_transition, route_status
from .types import (
    BootstrapOutcome,
    BootstrapState,
    ReadinessResult,
    TerminationReason,
    TransitionRecord,
    UserDecision,
)

if TYPE_CHECKING:
    from ..adapters.base import InstallAssistant, ReadinessProber, StackController, UserPrompt, Window

logger = get_logger(__name__)


class BootstrapOrchestrator:
    """启动编排状态机

    单线程协作式：每一步（start、对话框、就绪探测）都是一个 await，
    编排器发出一个调用，等待其完成后再分支。没有取消原语。

    使用示例:
        orchestrator = BootstrapOrchestrator(stack, prober, prompt, installer, window=window)
        outcome = await orchestrator.run()
        if not outcome.launched:
            host.quit(outcome.exit_code)
    """

    def __init__(
        self,
        stack: "StackController",
        prober: "ReadinessProber",
        prompt: "UserPrompt",
        installer: "InstallAssistant",
        *,
        url: str | None = None,
        max_wait: float | None = None,
        window: "Window | None" = None,
        placeholder_html: str | None = None,
        history_size: int | None = None,
    ):
        """初始化编排器

        Args:
            stack: Stack Controller
            prober: Readiness Prober
            prompt: 对话框
            installer: 安装助手
            url: 目标地址，None 使用配置
            max_wait: 就绪探测最长等待（秒），None 使用配置
            window: 复用的窗口（重试时不重新创建），None 表示 headless
            placeholder_html: 每次进入 PROBING 时显示的占位页
            history_size: 转换历史最大长度
        """
        self._stack = stack
        self._prober = prober
        self._prompt = prompt
        self._installer = installer
        self._url = url or config.APP_URL
        self._max_wait = max_wait if max_wait is not None else config.READINESS_MAX_WAIT_SECONDS
        self._window = window
        self._placeholder_html = placeholder_html

        self._state = BootstrapState.PROBING
        self._attempts = 0
        self._history: deque[TransitionRecord] = deque(
            maxlen=history_size or config.STATE_HISTORY_MAX_LENGTH
        )

    # === 状态查询 ===

    @property
    def state(self) -> BootstrapState:
        return self._state

    @property
    def attempts(self) -> int:
        """本次编排中 start() 的调用次数"""
        return self._attempts

    @property
    def url(self) -> str:
        return self._url

    @property
    def history(self) -> list[TransitionRecord]:
        return list(self._history)

    # === 编排 ===

    async def run(self) -> BootstrapOutcome:
        """执行一次完整编排（PROBING → LAUNCHED/TERMINATED）

        协作方抛出的任何异常都在这里被捕获，映射为 UNEXPECTED_ERROR。
        """
        self._state = BootstrapState.PROBING
        self._attempts = 0
        self._history.clear()
        if config.METRICS_ENABLED:
            metrics.inc("bootstrap.pass")

        try:
            outcome = await self._run_states()
        except Exception as e:
            logger.exception(f"[Orchestrator] Bootstrap error in state {self._state.value}: {e}")
            outcome = await self._fail_unexpected()

        if config.METRICS_ENABLED:
            labels = {"reason": outcome.reason.value if outcome.reason else "launched"}
            metrics.inc("bootstrap.outcome", labels)
        logger.info(
            f"[Orchestrator] Outcome: {outcome.kind.value}"
            f" (reason={outcome.reason.value if outcome.reason else '-'}, attempts={outcome.attempts})"
        )
        return outcome

    async def _run_states(self) -> BootstrapOutcome:
        while True:
            state = self._state

            if state == BootstrapState.PROBING:
                await self._probe()

            elif state == BootstrapState.RUNTIME_MISSING:
                # 无论用户选择什么都终止：同一进程内无法重试安装
                decision = await self._installer.offer_install()
                logger.info(f"[Orchestrator] Install assistant closed (decision={_name(decision)})")
                return self._terminate(TerminationReason.RUNTIME_MISSING, "install offered")

            elif state == BootstrapState.DAEMON_OFF:
                decision = await self._prompt.ask(prompts.daemon_not_running())
                if decision == UserDecision.RETRY:
                    logger.info(f"[Orchestrator] Retry requested (attempt {self._attempts + 1})")
                    if config.METRICS_ENABLED:
                        metrics.inc("bootstrap.retry")
                    self._transition(BootstrapState.PROBING, "retry")
                elif decision == UserDecision.QUIT:
                    return self._terminate(TerminationReason.USER_QUIT, "quit")
                else:
                    raise UnexpectedResultError("UserPrompt.ask()", decision)

            elif state == BootstrapState.STACK_FAILED:
                await self._prompt.notify(prompts.stack_start_failed())
                return self._terminate(TerminationReason.STACK_START_FAILED, "notice dismissed")

            elif state == BootstrapState.AWAITING_READINESS:
                await self._await_readiness()
                if self._state == BootstrapState.LAUNCHED:
                    return BootstrapOutcome.launch(self._url, self._attempts)

            elif state == BootstrapState.READINESS_FAILED:
                await self._prompt.notify(prompts.backend_not_responding())
                return self._terminate(TerminationReason.READINESS_TIMEOUT, "notice dismissed")

            else:
                # 终态不会回到循环
                raise RuntimeError(f"Orchestrator loop reached terminal state {state.value}")

    async def _probe(self) -> None:
        """PROBING：重新显示占位页，调用 start()，按状态路由"""
        self._attempts += 1

        if self._window is not None and self._placeholder_html:
            await self._window.load_html(self._placeholder_html)

        logger.info(f"[Orchestrator] Starting stack (attempt {self._attempts})")
        status = await self._stack.start()
        next_state = route_status(status)

        if config.METRICS_ENABLED:
            metrics.inc("stack.status", {"status": status.value})
        self._transition(next_state, f"start() -> {status.value}")

    async def _await_readiness(self) -> None:
        """AWAITING_READINESS：等待 HTTP 服务响应"""
        logger.info(f"[Orchestrator] Waiting for {self._url} (max {self._max_wait}s)")
        result = await self._prober.wait_until_ready(self._url, self._max_wait)

        if not isinstance(result, (bool, ReadinessResult)):
            raise UnexpectedResultError("ReadinessProber.wait_until_ready()", result)
        if isinstance(result, ReadinessResult) and config.METRICS_ENABLED:
            metrics.gauge("readiness.elapsed", result.elapsed)

        if not result:
            self._transition(BootstrapState.READINESS_FAILED, "readiness timeout")
            return

        if self._window is not None:
            await self._window.load_url(self._url)
        self._transition(BootstrapState.LAUNCHED, "ready")

    def _terminate(self, reason: TerminationReason, trigger: str) -> BootstrapOutcome:
        self._transition(BootstrapState.TERMINATED, trigger)
        return BootstrapOutcome.terminate(reason, self._url, self._attempts)

    async def _fail_unexpected(self) -> BootstrapOutcome:
        """未预期错误：通用提示后终止"""
        if not self._state.is_terminal:
            self._transition(BootstrapState.TERMINATED, "unexpected error", error=True)

        try:
            await self._prompt.notify(prompts.unexpected_error())
        except Exception as e:
            logger.error(f"[Orchestrator] Failed to show error notice: {e}")

        return BootstrapOutcome.terminate(TerminationReason.UNEXPECTED_ERROR, self._url, self._attempts)

    def _transition(self, to_state: BootstrapState, trigger: str, *, error: bool = False) -> None:
        check_transition(self._state, to_state, error=error)
        record = TransitionRecord(from_state=self._state, to_state=to_state, trigger=trigger)
        self._history.append(record)
        logger.debug(f"[Orchestrator] {record}")
        self._state = to_state


def _name(decision: object) -> str:
    return decision.value if isinstance(decision, UserDecision) else repr(decision)
