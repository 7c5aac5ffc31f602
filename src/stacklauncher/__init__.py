"""StackLauncher - 启动本地容器化后端并在应用窗口中展示"""

__version__ = "0.1.0"
