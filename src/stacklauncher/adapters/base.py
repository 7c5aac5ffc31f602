"""协作方抽象接口

编排器只依赖这些能力接口，不关心具体后端：
- StackController: 检测/启动容器运行时与 stack
- ReadinessProber: 轮询 URL 直到响应或超时
- UserPrompt: 模态对话框
- InstallAssistant: "未安装运行时" 的补救流程
- Window / WindowHost: 应用窗口
- ExternalOpener: 浏览器 / 系统打开文件

设计原则：
1. 最小接口：只定义编排需要的操作
2. 异步优先：所有可能阻塞的操作都是 async
3. 可替换：桌面、headless、测试替身共用同一套接口
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path

from ..bootstrap.prompts import PromptSpec
from ..bootstrap.types import ReadinessResult, RuntimeStatus, UserDecision


class StackController(ABC):
    """容器运行时与 stack 控制器

    start() 必须幂等：失败后再次调用不会破坏状态，可在重试间反复调用。
    """

    @abstractmethod
    async def start(self) -> RuntimeStatus:
        """检测运行时并启动 stack

        Returns:
            四种 RuntimeStatus 之一
        """
        pass


class ReadinessProber(ABC):
    """HTTP 就绪探测器

    内部按定时器轮询，对外只暴露一个挂起点。
    """

    @abstractmethod
    async def wait_until_ready(self, url: str, max_wait: float) -> ReadinessResult | bool:
        """等待 URL 响应

        必须在 max_wait 加上有界开销内返回，不能无限探测。

        Returns:
            真值表示已就绪
        """
        pass


class UserPrompt(ABC):
    """模态对话框"""

    @abstractmethod
    async def ask(self, spec: PromptSpec) -> UserDecision:
        """展示二选一对话框

        Returns:
            spec.choices 中被选中的那个
        """
        pass

    @abstractmethod
    async def notify(self, spec: PromptSpec) -> None:
        """展示单按钮提示，用户关闭后返回"""
        pass


class InstallAssistant(ABC):
    """运行时未安装时的补救流程（提示 + 可选打开下载页）"""

    @abstractmethod
    async def offer_install(self) -> UserDecision | None:
        """展示补救提示

        返回值只用于日志，编排器调用后总是终止。
        """
        pass


class ExternalOpener(ABC):
    """打开外部资源"""

    @abstractmethod
    async def open_url(self, url: str) -> None:
        pass

    @abstractmethod
    async def open_path(self, path: Path) -> None:
        pass


class Window(ABC):
    """应用窗口句柄"""

    @abstractmethod
    async def load_html(self, html: str) -> None:
        """显示本地 HTML（启动占位页）"""
        pass

    @abstractmethod
    async def load_url(self, url: str) -> None:
        """加载目标地址"""
        pass

    @abstractmethod
    def on_closed(self, callback: Callable[[], None]) -> None:
        """注册关闭回调（用户关闭窗口时调用）"""
        pass


class WindowHost(ABC):
    """窗口宿主（GUI 工具包或 headless 替代）"""

    @abstractmethod
    def create_window(self) -> Window:
        """创建一个新窗口"""
        pass

    @abstractmethod
    def quit(self, exit_code: int = 0) -> None:
        """请求进程退出"""
        pass
