"""Bootstrap 模块数据类型定义

包含：
- RuntimeStatus: Stack Controller 返回的运行时状态
- ReadinessResult: 就绪探测结果
- UserDecision / PromptKind: 用户对话框相关
- BootstrapState: 编排状态机节点
- TerminationReason / BootstrapOutcome: 一次编排的最终结果
- TransitionRecord: 状态转换历史条目
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .. import config


class RuntimeStatus(Enum):
    """容器运行时状态

    每次 start() 调用恰好返回其中一个值：
    - READY: compose stack 已启动
    - RUNTIME_MISSING: docker 未安装或不在 PATH
    - RUNTIME_NOT_RUNNING: docker 已安装但 daemon 未运行
    - STACK_START_FAILED: compose up 失败
    """

    READY = "ready"
    RUNTIME_MISSING = "runtime_missing"
    RUNTIME_NOT_RUNNING = "runtime_not_running"
    STACK_START_FAILED = "stack_start_failed"


class UserDecision(Enum):
    """对话框按钮对应的用户选择"""

    RETRY = "retry"
    QUIT = "quit"
    CONFIRM = "confirm"
    CANCEL = "cancel"


class PromptKind(Enum):
    """对话框级别（只影响图标/样式，不影响分支）"""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class BootstrapState(Enum):
    """编排状态机节点（不持久化）"""

    PROBING = "probing"
    RUNTIME_MISSING = "runtime_missing"
    DAEMON_OFF = "daemon_off"
    STACK_FAILED = "stack_failed"
    AWAITING_READINESS = "awaiting_readiness"
    READINESS_FAILED = "readiness_failed"
    LAUNCHED = "launched"
    TERMINATED = "terminated"

    @property
    def is_terminal(self) -> bool:
        return self in {BootstrapState.LAUNCHED, BootstrapState.TERMINATED}


class TerminationReason(Enum):
    """终止原因，与错误分类一一对应"""

    RUNTIME_MISSING = "runtime_missing"
    USER_QUIT = "user_quit"
    STACK_START_FAILED = "stack_start_failed"
    READINESS_TIMEOUT = "readiness_timeout"
    UNEXPECTED_ERROR = "unexpected_error"

    @property
    def exit_code(self) -> int:
        codes = {
            TerminationReason.RUNTIME_MISSING: config.EXIT_RUNTIME_MISSING,
            TerminationReason.USER_QUIT: config.EXIT_OK,
            TerminationReason.STACK_START_FAILED: config.EXIT_STACK_START_FAILED,
            TerminationReason.READINESS_TIMEOUT: config.EXIT_READINESS_TIMEOUT,
            TerminationReason.UNEXPECTED_ERROR: config.EXIT_UNEXPECTED_ERROR,
        }
        return codes[self]


class OutcomeKind(Enum):
    LAUNCH_APP = "launch_app"
    TERMINATE = "terminate"


@dataclass(frozen=True)
class BootstrapOutcome:
    """一次编排的最终效果（派生值，不存储）

    Attributes:
        kind: LAUNCH_APP 或 TERMINATE
        reason: 终止原因（LAUNCH_APP 时为 None）
        attempts: 本次编排中 start() 的调用次数
        url: 目标地址
    """

    kind: OutcomeKind
    reason: TerminationReason | None = None
    attempts: int = 0
    url: str = ""

    @classmethod
    def launch(cls, url: str, attempts: int) -> "BootstrapOutcome":
        return cls(kind=OutcomeKind.LAUNCH_APP, url=url, attempts=attempts)

    @classmethod
    def terminate(cls, reason: TerminationReason, url: str, attempts: int) -> "BootstrapOutcome":
        return cls(kind=OutcomeKind.TERMINATE, reason=reason, url=url, attempts=attempts)

    @property
    def launched(self) -> bool:
        return self.kind == OutcomeKind.LAUNCH_APP

    @property
    def exit_code(self) -> int:
        if self.reason is None:
            return config.EXIT_OK
        return self.reason.exit_code


@dataclass
class ReadinessResult:
    """就绪探测结果

    bool(result) 等价于 result.ready，编排器只关心真假。
    """

    ready: bool
    elapsed: float = 0.0
    attempts: int = 0
    last_error: str | None = None

    def __bool__(self) -> bool:
        return self.ready


@dataclass
class TransitionRecord:
    """状态转换历史条目

    用于记录编排过程，便于排查问题。
    """

    from_state: BootstrapState
    to_state: BootstrapState
    trigger: str = ""
    timestamp: float = field(default_factory=lambda: datetime.now().timestamp())

    def __str__(self) -> str:
        ts = datetime.fromtimestamp(self.timestamp).strftime("%H:%M:%S")
        return f"{ts} | {self.from_state.value} → {self.to_state.value} ({self.trigger})"

    def to_dict(self) -> dict:
        return {
            "from_state": self.from_state.value,
            "to_state": self.to_state.value,
            "trigger": self.trigger,
            "timestamp": self.timestamp,
        }
