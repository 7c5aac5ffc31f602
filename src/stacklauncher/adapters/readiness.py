"""HTTP 就绪探测器：轮询目标地址直到响应或超时"""

import asyncio
import logging

import httpx

from .. import config
from ..bootstrap.types import ReadinessResult
from .base import ReadinessProber

logger = logging.getLogger(__name__)


class HttpReadinessProber(ReadinessProber):
    """基于 httpx 的就绪探测器

    每隔 poll_interval 请求一次 URL：
    - 状态码 < ready_status_below：就绪
    - 连接错误 / 超时 / 5xx：继续轮询
    - 超过 max_wait：返回未就绪

    返回时间不超过 max_wait + request_timeout。
    """

    def __init__(
        self,
        poll_interval: float | None = None,
        request_timeout: float | None = None,
        ready_status_below: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """初始化探测器

        Args:
            poll_interval: 两次请求间隔（秒）
            request_timeout: 单次请求超时（秒）
            ready_status_below: 低于此状态码视为就绪
            transport: 自定义 httpx transport（测试用 MockTransport）
        """
        self._poll_interval = poll_interval or config.READINESS_POLL_INTERVAL
        self._request_timeout = request_timeout or config.READINESS_REQUEST_TIMEOUT
        self._ready_below = ready_status_below or config.READINESS_READY_STATUS_BELOW
        self._transport = transport

    async def wait_until_ready(self, url: str, max_wait: float) -> ReadinessResult:
        loop = asyncio.get_running_loop()
        started = loop.time()
        deadline = started + max_wait
        attempts = 0
        last_error: str | None = None

        async with httpx.AsyncClient(transport=self._transport, follow_redirects=True) as client:
            while True:
                attempts += 1
                # 最后一次请求不越过 deadline 太多
                timeout = max(min(self._request_timeout, deadline - loop.time()), 0.05)
                try:
                    response = await client.get(url, timeout=timeout)
                    if response.status_code < self._ready_below:
                        elapsed = loop.time() - started
                        logger.info(
                            f"[Readiness] {url} answered {response.status_code} "
                            f"after {elapsed:.1f}s ({attempts} attempts)"
                        )
                        return ReadinessResult(ready=True, elapsed=elapsed, attempts=attempts)
                    last_error = f"HTTP {response.status_code}"
                except httpx.HTTPError as e:
                    last_error = f"{type(e).__name__}: {e}"

                logger.debug(f"[Readiness] {url} not ready (attempt {attempts}): {last_error}")

                remaining = deadline - loop.time()
                if remaining <= 0:
                    break
                await asyncio.sleep(min(self._poll_interval, remaining))

        elapsed = loop.time() - started
        logger.warning(
            f"[Readiness] {url} did not answer within {max_wait}s "
            f"({attempts} attempts, last error: {last_error})"
        )
        return ReadinessResult(ready=False, elapsed=elapsed, attempts=attempts, last_error=last_error)
