"""Telemetry - 统一日志和指标入口

提供统一的日志工厂和指标 facade，便于观测性追踪。

日志格式: [module] [Component] msg
指标示例: bootstrap.pass, bootstrap.retry, stack.status, bootstrap.outcome
"""

import logging

# 全局日志配置
_LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
_LOG_DATEFMT = "%H:%M:%S"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """获取带模块前缀的 logger

    Args:
        name: 模块名（通常使用 __name__）

    Returns:
        配置好的 Logger 实例
    """
    return logging.getLogger(name)


def setup_logging(level: str | int | None = None) -> None:
    """配置根 logger（进程内只生效一次）

    Args:
        level: 日志级别，None 使用配置默认值
    """
    global _configured

    if level is None:
        from .config import LOG_LEVEL

        level = LOG_LEVEL
    if isinstance(level, str):
        level = level.upper()

    if _configured:
        logging.getLogger().setLevel(level)
        return

    logging.basicConfig(level=level, format=_LOG_FORMAT, datefmt=_LOG_DATEFMT)
    # httpx 每次请求都会打 INFO 日志，就绪轮询时过于嘈杂
    logging.getLogger("httpx").setLevel(logging.WARNING)
    _configured = True


def truncate(text: str, limit: int) -> str:
    """截断长文本用于日志"""
    text = text.strip()
    if len(text) <= limit:
        return text
    return text[:limit] + f"... ({len(text) - limit} more chars)"


class Metrics:
    """指标收集 facade

    提供简单的计数器和 gauge 接口。
    当前实现为内存存储，可扩展为 Prometheus/StatsD 等。
    """

    def __init__(self):
        self._counters: dict[str, int] = {}
        self._gauges: dict[str, float] = {}

    def inc(self, name: str, labels: dict[str, str] | None = None, value: int = 1) -> None:
        """递增计数器

        Args:
            name: 指标名（如 "bootstrap.retry"）
            labels: 可选标签（如 {"status": "ready"}）
            value: 递增值，默认 1
        """
        key = self._make_key(name, labels)
        self._counters[key] = self._counters.get(key, 0) + value

    def gauge(self, name: str, value: float, labels: dict[str, str] | None = None) -> None:
        """设置 gauge 值"""
        key = self._make_key(name, labels)
        self._gauges[key] = value

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> int:
        """获取计数器值（用于测试）"""
        return self._counters.get(self._make_key(name, labels), 0)

    def get_gauge(self, name: str, labels: dict[str, str] | None = None) -> float:
        """获取 gauge 值（用于测试）"""
        return self._gauges.get(self._make_key(name, labels), 0.0)

    def reset(self) -> None:
        """重置所有指标（用于测试）"""
        self._counters.clear()
        self._gauges.clear()

    def _make_key(self, name: str, labels: dict[str, str] | None) -> str:
        if not labels:
            return name
        label_str = ",".join(f"{k}={v}" for k, v in sorted(labels.items()))
        return f"{name}{{{label_str}}}"

    def get_all_counters(self) -> dict[str, int]:
        """获取所有计数器（用于调试）"""
        return dict(self._counters)


# 全局指标实例
metrics = Metrics()
