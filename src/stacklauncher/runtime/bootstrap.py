"""Bootstrap - 集中构造运行时组件

职责：
- 根据 LaunchSettings 选择后端（pywebview 桌面 / headless）
- 创建 StackController, ReadinessProber, UserPrompt, InstallAssistant
- 创建 LauncherApp 并绑定编排器工厂
- 返回 RuntimeComponents 供调用方使用

不负责：
- 日志配置（由 cli 负责）
- 进程退出（调用方根据 serve() 的返回值退出）
"""

import asyncio
from dataclasses import dataclass, field
from pathlib import Path

from .. import config
from ..adapters.base import InstallAssistant, ReadinessProber, StackController, UserPrompt, Window, WindowHost
from ..adapters.console import BrowserWindowHost, ConsolePrompt
from ..adapters.desktop import SystemOpener
from ..adapters.docker import DockerClient, DockerStackController
from ..adapters.install import DockerInstallAssistant
from ..adapters.readiness import HttpReadinessProber
from ..app import LauncherApp
from ..bootstrap.orchestrator import BootstrapOrchestrator
from ..splash import compose_command, render_placeholder
from ..telemetry import get_logger

logger = get_logger(__name__)


@dataclass
class LaunchSettings:
    """启动参数（CLI 覆盖配置）"""

    url: str = field(default_factory=lambda: config.APP_URL)
    compose_files: list[str] = field(default_factory=lambda: list(config.COMPOSE_FILES))
    project_dir: str | None = field(default_factory=lambda: config.COMPOSE_PROJECT_DIR)
    project_name: str | None = field(default_factory=lambda: config.COMPOSE_PROJECT_NAME)
    max_wait: float = field(default_factory=lambda: config.READINESS_MAX_WAIT_SECONDS)
    docker_binary: str = field(default_factory=lambda: config.DOCKER_BINARY)
    headless: bool = False


@dataclass
class RuntimeComponents:
    """Bootstrap 返回的运行时组件集合"""

    settings: LaunchSettings
    host: WindowHost
    prompt: UserPrompt
    stack: StackController
    prober: ReadinessProber
    installer: InstallAssistant
    app: LauncherApp
    placeholder_html: str

    def serve(self) -> int:
        """运行宿主直到退出

        Returns:
            进程退出码
        """
        if self.settings.headless:
            outcome = asyncio.run(self.app.on_ready())
            if outcome is None:
                return config.EXIT_UNEXPECTED_ERROR
            return outcome.exit_code

        return self.host.serve(self.app)  # type: ignore[attr-defined]


def bootstrap(settings: LaunchSettings | None = None) -> RuntimeComponents:
    """构造运行时组件

    Args:
        settings: 启动参数，None 使用配置默认值

    Returns:
        RuntimeComponents 包含所有构造好的组件
    """
    settings = settings or LaunchSettings()
    opener = SystemOpener()

    placeholder_html = render_placeholder(
        url=settings.url,
        command=compose_command(settings.compose_files, settings.project_name),
    )

    # 1. 窗口宿主与对话框
    host: WindowHost
    prompt: UserPrompt
    if settings.headless:
        host = BrowserWindowHost(opener)
        prompt = ConsolePrompt()
    else:
        # pywebview 只在桌面模式导入
        from ..adapters.webview import WebviewPrompt, WebviewWindowHost

        host = WebviewWindowHost(placeholder_html=placeholder_html)
        prompt = WebviewPrompt(host)

    # 2. 协作方
    stack = DockerStackController(
        client=DockerClient(binary=settings.docker_binary),
        compose_files=settings.compose_files,
        project_dir=Path(settings.project_dir) if settings.project_dir else None,
        project_name=settings.project_name,
    )
    prober = HttpReadinessProber()
    installer = DockerInstallAssistant(prompt, opener)

    # 3. 每次编排一个新的编排器，复用同一窗口
    def create_orchestrator(window: Window) -> BootstrapOrchestrator:
        return BootstrapOrchestrator(
            stack,
            prober,
            prompt,
            installer,
            url=settings.url,
            max_wait=settings.max_wait,
            window=window,
            placeholder_html=placeholder_html,
        )

    app = LauncherApp(host, create_orchestrator)

    logger.info(
        f"[Bootstrap] Components created ({'headless' if settings.headless else 'desktop'}, url={settings.url})"
    )

    return RuntimeComponents(
        settings=settings,
        host=host,
        prompt=prompt,
        stack=stack,
        prober=prober,
        installer=installer,
        app=app,
        placeholder_html=placeholder_html,
    )
