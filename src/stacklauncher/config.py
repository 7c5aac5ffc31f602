"""StackLauncher 配置

配置分为以下几类：
- 应用配置：名称、目标地址
- Docker 配置：CLI、compose 文件、超时
- 就绪探测配置：最长等待、轮询间隔
- 安装配置：下载页、安装包地址
- 窗口配置：尺寸、颜色、关闭策略
- 日志/指标配置
"""

import os
import sys

# === 应用配置 ===
APP_NAME = os.environ.get("STACKLAUNCHER_APP_NAME", "Flumio")
APP_URL = os.environ.get("STACKLAUNCHER_APP_URL", "http://localhost:8080")  # 就绪探测与窗口加载的地址

# === Docker 配置 ===
DOCKER_BINARY = os.environ.get("STACKLAUNCHER_DOCKER_BINARY", "docker")
COMPOSE_FILES: list[str] = [
    path for path in os.environ.get("STACKLAUNCHER_COMPOSE_FILES", "").split(os.pathsep) if path
]  # 空 => 使用 compose 默认查找规则
COMPOSE_PROJECT_DIR = os.environ.get("STACKLAUNCHER_COMPOSE_PROJECT_DIR") or None
COMPOSE_PROJECT_NAME = os.environ.get("STACKLAUNCHER_COMPOSE_PROJECT_NAME") or None
DOCKER_COMMAND_TIMEOUT_SECONDS = 15.0  # docker --version / docker info
COMPOSE_UP_TIMEOUT_SECONDS = 600.0  # 首次启动可能需要拉取镜像

# === 就绪探测配置 ===
READINESS_MAX_WAIT_SECONDS = float(os.environ.get("STACKLAUNCHER_READINESS_TIMEOUT", "60"))
READINESS_POLL_INTERVAL = 1.0  # 轮询间隔（秒）
READINESS_REQUEST_TIMEOUT = 2.0  # 单次请求超时（秒）
READINESS_READY_STATUS_BELOW = 500  # 低于此状态码视为已就绪

# === 安装配置 ===
DOCKER_DOWNLOAD_URL = "https://www.docker.com/products/docker-desktop/"
# platform -> 安装包直链；默认为空，地址经常变化，需要手动维护
DOCKER_INSTALLER_URLS: dict[str, str] = {}
DOCKER_INSTALLER_FILENAMES = {
    "darwin": "Docker.dmg",
    "win32": "DockerDesktopInstaller.exe",
}
AUTO_DOWNLOAD_INSTALLER = False  # True => 下载安装包并打开，而不是打开下载页
INSTALLER_DOWNLOAD_TIMEOUT = 300.0

# === 窗口配置 ===
WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 800
WINDOW_BACKGROUND = "#020617"
WINDOW_FOREGROUND = "#e5e7eb"
# macOS 约定：关闭所有窗口后进程保持存活
QUIT_ON_ALL_WINDOWS_CLOSED = sys.platform != "darwin"
OPEN_BROWSER_WHEN_HEADLESS = True  # headless 模式下就绪后在浏览器中打开

# === 状态机配置 ===
STATE_HISTORY_MAX_LENGTH = 30  # 内存中转换历史最大长度

# === 退出码 ===
EXIT_OK = 0
EXIT_UNEXPECTED_ERROR = 1
EXIT_RUNTIME_MISSING = 3
EXIT_STACK_START_FAILED = 4
EXIT_READINESS_TIMEOUT = 5

# === 日志配置 ===
LOG_LEVEL = os.environ.get("STACKLAUNCHER_LOG_LEVEL", "INFO")  # 日志级别
LOG_MAX_STDERR_LEN = 2000  # docker stderr 日志截断长度

# === 指标配置 ===
METRICS_ENABLED = True  # 是否启用指标收集
