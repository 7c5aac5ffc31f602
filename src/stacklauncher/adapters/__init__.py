"""Adapters 模块

提供编排器依赖的能力接口和具体后端：
- base: 抽象接口（StackController, ReadinessProber, UserPrompt, ...）
- docker: Docker CLI / Compose 控制器
- readiness: httpx 就绪探测器
- install: Docker 安装助手
- desktop: 系统打开器
- console: headless 后端（rich 对话框 + 浏览器）
- webview: 桌面后端（pywebview，按需导入）
- memory: 脚本化替身
"""

from .base import (
    ExternalOpener,
    InstallAssistant,
    ReadinessProber,
    StackController,
    UserPrompt,
    Window,
    WindowHost,
)

__all__ = [
    "StackController",
    "ReadinessProber",
    "UserPrompt",
    "InstallAssistant",
    "ExternalOpener",
    "Window",
    "WindowHost",
]
