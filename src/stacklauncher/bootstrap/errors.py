"""Bootstrap 异常"""

from .types import BootstrapState


class BootstrapError(Exception):
    """编排过程中的未建模错误基类"""


class UnexpectedResultError(BootstrapError):
    """协作方返回了建模之外的值"""

    def __init__(self, collaborator: str, value: object):
        self.collaborator = collaborator
        self.value = value
        super().__init__(f"{collaborator} returned unexpected value: {value!r}")


class InvalidTransitionError(BootstrapError):
    """状态转换不在允许表中"""

    def __init__(self, from_state: BootstrapState, to_state: BootstrapState):
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(f"Invalid transition: {from_state.value} -> {to_state.value}")
