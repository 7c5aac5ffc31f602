"""编排状态流转规则表

路由表（PROBING 出口，仅由 start() 返回值决定）：
| RuntimeStatus        | to_state           |
|----------------------|--------------------|
| RUNTIME_MISSING      | RUNTIME_MISSING    |
| RUNTIME_NOT_RUNNING  | DAEMON_OFF         |
| STACK_START_FAILED   | STACK_FAILED       |
| READY                | AWAITING_READINESS |

允许的转换：
| # | from_state         | to_state                     | 触发 |
|---|--------------------|------------------------------|------|
| P1 | PROBING            | 上表四个处理状态之一          | start() |
| M1 | RUNTIME_MISSING    | TERMINATED                   | offer_install() 返回 |
| D1 | DAEMON_OFF         | PROBING                      | Retry |
| D2 | DAEMON_OFF         | TERMINATED                   | Quit |
| F1 | STACK_FAILED       | TERMINATED                   | 错误提示关闭 |
| A1 | AWAITING_READINESS | LAUNCHED                     | wait_until_ready() 为真 |
| A2 | AWAITING_READINESS | READINESS_FAILED             | wait_until_ready() 为假 |
| R1 | READINESS_FAILED   | TERMINATED                   | 错误提示关闭 |
| X1 | 任意非终态          | TERMINATED                   | 未预期错误 |
"""

from .errors import InvalidTransitionError, UnexpectedResultError
from .types import BootstrapState, RuntimeStatus

STATUS_ROUTES: dict[RuntimeStatus, BootstrapState] = {
    RuntimeStatus.RUNTIME_MISSING: BootstrapState.RUNTIME_MISSING,
    RuntimeStatus.RUNTIME_NOT_RUNNING: BootstrapState.DAEMON_OFF,
    RuntimeStatus.STACK_START_FAILED: BootstrapState.STACK_FAILED,
    RuntimeStatus.READY: BootstrapState.AWAITING_READINESS,
}

ALLOWED_TRANSITIONS: dict[BootstrapState, frozenset[BootstrapState]] = {
    BootstrapState.PROBING: frozenset(STATUS_ROUTES.values()),
    BootstrapState.RUNTIME_MISSING: frozenset({BootstrapState.TERMINATED}),
    BootstrapState.DAEMON_OFF: frozenset({BootstrapState.PROBING, BootstrapState.TERMINATED}),
    BootstrapState.STACK_FAILED: frozenset({BootstrapState.TERMINATED}),
    BootstrapState.AWAITING_READINESS: frozenset(
        {BootstrapState.LAUNCHED, BootstrapState.READINESS_FAILED}
    ),
    BootstrapState.READINESS_FAILED: frozenset({BootstrapState.TERMINATED}),
    BootstrapState.LAUNCHED: frozenset(),
    BootstrapState.TERMINATED: frozenset(),
}


def route_status(status: object) -> BootstrapState:
    """将 start() 返回值映射到处理状态

    Raises:
        UnexpectedResultError: 返回值不是 RuntimeStatus
    """
    if not isinstance(status, RuntimeStatus):
        raise UnexpectedResultError("StackController.start()", status)
    return STATUS_ROUTES[status]


def can_transition(from_state: BootstrapState, to_state: BootstrapState, *, error: bool = False) -> bool:
    """检查转换是否合法

    Args:
        error: 是否为未预期错误触发的终止（X1，任意非终态 → TERMINATED）
    """
    if error:
        return not from_state.is_terminal and to_state == BootstrapState.TERMINATED
    return to_state in ALLOWED_TRANSITIONS[from_state]


def check_transition(from_state: BootstrapState, to_state: BootstrapState, *, error: bool = False) -> None:
    """校验转换，非法时抛出 InvalidTransitionError"""
    if not can_transition(from_state, to_state, error=error):
        raise InvalidTransitionError(from_state, to_state)
