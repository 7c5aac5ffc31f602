"""对话框目录：将编排结果映射为用户可见的提示

每个函数返回一个 PromptSpec。两个按钮的用于 UserPrompt.ask，
一个按钮的用于 UserPrompt.notify。协作方的原始错误信息只写日志，不展示给用户。
"""

import sys
from dataclasses import dataclass

from .. import config
from .types import PromptKind, UserDecision


@dataclass(frozen=True)
class PromptSpec:
    """对话框描述

    Attributes:
        kind: 级别（图标/样式）
        title: 标题
        message: 主文本
        detail: 补充说明
        buttons: 按钮文字
        choices: 每个按钮对应的 UserDecision（与 buttons 等长）
        default_index: 默认按钮
        cancel_index: Esc/关闭对应的按钮
    """

    kind: PromptKind
    title: str
    message: str
    detail: str = ""
    buttons: tuple[str, ...] = ("OK",)
    choices: tuple[UserDecision, ...] = (UserDecision.CONFIRM,)
    default_index: int = 0
    cancel_index: int = 0

    def __post_init__(self):
        if len(self.buttons) != len(self.choices):
            raise ValueError("buttons and choices must have the same length")
        if not 1 <= len(self.buttons) <= 2:
            raise ValueError("a prompt offers one or two buttons")

    @property
    def is_choice(self) -> bool:
        """是否为二选一对话框"""
        return len(self.buttons) == 2

    @property
    def default_choice(self) -> UserDecision:
        return self.choices[self.default_index]

    @property
    def cancel_choice(self) -> UserDecision:
        return self.choices[self.cancel_index]

    def decision_for(self, index: int) -> UserDecision:
        """按钮下标 -> UserDecision，越界时视为取消"""
        if 0 <= index < len(self.choices):
            return self.choices[index]
        return self.cancel_choice


def _notice(title: str, message: str, detail: str = "", kind: PromptKind = PromptKind.ERROR,
            button: str = "OK") -> PromptSpec:
    return PromptSpec(
        kind=kind,
        title=title,
        message=message,
        detail=detail,
        buttons=(button,),
        choices=(UserDecision.CONFIRM,),
    )


# === 编排器使用 ===


def runtime_missing(platform: str | None = None, app_name: str | None = None) -> PromptSpec:
    """Docker 未安装（由 InstallAssistant 展示）"""
    platform = platform or sys.platform
    app_name = app_name or config.APP_NAME

    if platform == "darwin":
        message = (
            "Docker Desktop is not installed or not available.\n\n"
            f"You need Docker Desktop for Mac to run {app_name}."
        )
    elif platform == "win32":
        message = (
            "Docker Desktop is not installed or not available.\n\n"
            f"You need Docker Desktop for Windows to run {app_name}."
        )
    else:
        message = (
            "Docker is not installed or not available.\n\n"
            f"You need Docker Engine or Docker Desktop to run {app_name}."
        )

    return PromptSpec(
        kind=PromptKind.ERROR,
        title="Docker is not installed",
        message=message,
        buttons=("Open Docker download page", "Quit"),
        choices=(UserDecision.CONFIRM, UserDecision.CANCEL),
        default_index=0,
        cancel_index=1,
    )


def daemon_not_running() -> PromptSpec:
    """Docker 已安装但未运行：唯一可重试的分支"""
    return PromptSpec(
        kind=PromptKind.WARNING,
        title="Docker is not running",
        message="Docker Desktop is installed but not running.",
        detail="Start Docker Desktop, wait until it finishes starting, then click “Retry”.",
        buttons=("Retry", "Quit"),
        choices=(UserDecision.RETRY, UserDecision.QUIT),
        default_index=0,
        cancel_index=1,
    )


def stack_start_failed() -> PromptSpec:
    return _notice(
        "Failed to start Docker stack",
        "Docker Compose returned an error. Open the app from the terminal to see logs, "
        "or check Docker Desktop.",
    )


def backend_not_responding() -> PromptSpec:
    return _notice(
        "Backend not responding",
        "The containers started, but the web server did not respond in time.",
    )


def unexpected_error() -> PromptSpec:
    return _notice(
        "Unexpected error",
        "Something went wrong while starting the Docker stack.",
    )


# === 安装助手使用 ===


def auto_download_unsupported() -> PromptSpec:
    return _notice(
        "Auto-download not supported",
        "Automatic Docker installer download is only supported on macOS and Windows.",
    )


def download_manually() -> PromptSpec:
    return _notice(
        "Download Docker manually",
        "Automatic download is not configured. The app will open the Docker website instead.",
        kind=PromptKind.INFO,
        button="Open website",
    )


def downloading_installer() -> PromptSpec:
    return _notice(
        "Downloading Docker Desktop…",
        "Docker Desktop will be downloaded. Your OS will then ask you to confirm the installation.",
        kind=PromptKind.INFO,
    )


def run_installer(app_name: str | None = None) -> PromptSpec:
    app_name = app_name or config.APP_NAME
    return _notice(
        "Run the installer",
        "Run through the Docker Desktop installer.\n\n"
        f"After installation completes and Docker is running, restart {app_name}.",
        kind=PromptKind.INFO,
    )


def download_failed(error: str) -> PromptSpec:
    return _notice(
        "Failed to download installer",
        f"Error while downloading Docker Desktop: {error}",
    )
