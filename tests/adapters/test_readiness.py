"""HttpReadinessProber 测试（httpx.MockTransport）"""

import httpx
import pytest

from stacklauncher.adapters.readiness import HttpReadinessProber

URL = "http://localhost:18080/"


def make_prober(handler, poll_interval=0.01):
    return HttpReadinessProber(
        poll_interval=poll_interval,
        request_timeout=0.5,
        transport=httpx.MockTransport(handler),
    )


class TestHttpReadinessProber:
    @pytest.mark.asyncio
    async def test_ready_on_first_answer(self):
        prober = make_prober(lambda request: httpx.Response(200))

        result = await prober.wait_until_ready(URL, max_wait=1.0)

        assert result.ready
        assert bool(result) is True
        assert result.attempts == 1
        assert result.last_error is None

    @pytest.mark.asyncio
    async def test_connection_errors_then_ready(self):
        """连接被拒绝时继续轮询"""
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) < 3:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200)

        result = await make_prober(handler).wait_until_ready(URL, max_wait=5.0)

        assert result.ready
        assert result.attempts == 3

    @pytest.mark.asyncio
    async def test_server_errors_are_not_ready(self):
        prober = make_prober(lambda request: httpx.Response(503))

        result = await prober.wait_until_ready(URL, max_wait=0.1)

        assert not result.ready
        assert result.attempts >= 1
        assert result.last_error == "HTTP 503"

    @pytest.mark.asyncio
    async def test_client_errors_count_as_ready(self):
        """服务在应答即视为就绪（如 404）"""
        prober = make_prober(lambda request: httpx.Response(404))

        result = await prober.wait_until_ready(URL, max_wait=1.0)

        assert result.ready

    @pytest.mark.asyncio
    async def test_zero_wait_makes_one_attempt(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = await make_prober(handler).wait_until_ready(URL, max_wait=0)

        assert not result.ready
        assert result.attempts == 1
        assert "ConnectError" in result.last_error

    @pytest.mark.asyncio
    async def test_redirect_is_followed(self):
        def handler(request):
            if request.url.path == "/":
                return httpx.Response(302, headers={"Location": "/login"})
            return httpx.Response(200)

        result = await make_prober(handler).wait_until_ready(URL, max_wait=1.0)

        assert result.ready
        assert result.attempts == 1
