"""Bootstrap 模块

提供启动编排的核心组件：
- types: 数据类型定义（RuntimeStatus, BootstrapState, BootstrapOutcome 等）
- errors: 未建模错误
- transitions: 状态路由与流转规则表
- prompts: 结果到对话框的映射
- orchestrator: BootstrapOrchestrator
"""

from .errors import BootstrapError, InvalidTransitionError, UnexpectedResultError
from .orchestrator import BootstrapOrchestrator
from .prompts import PromptSpec
from .types import (
    BootstrapOutcome,
    BootstrapState,
    OutcomeKind,
    PromptKind,
    ReadinessResult,
    RuntimeStatus,
    TerminationReason,
    TransitionRecord,
    UserDecision,
)

__all__ = [
    # Types
    "RuntimeStatus",
    "ReadinessResult",
    "UserDecision",
    "PromptKind",
    "BootstrapState",
    "TerminationReason",
    "OutcomeKind",
    "BootstrapOutcome",
    "TransitionRecord",
    "PromptSpec",
    # Errors
    "BootstrapError",
    "UnexpectedResultError",
    "InvalidTransitionError",
    # Orchestrator
    "BootstrapOrchestrator",
]
