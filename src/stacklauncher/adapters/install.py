"""Docker 安装助手

完全自动、静默地安装 Docker Desktop 并不现实：需要管理员权限、需要展示
Docker 的许可协议，操作系统安全机制（Gatekeeper、SmartScreen）也会弹窗。

这里能做的：
- 提示用户 Docker 未安装
- 打开 Docker 下载页，或（可选）把安装包下载到临时目录并打开
- 安装完成后由用户启动 Docker 并重新打开应用
"""

import logging
import sys
import tempfile
from pathlib import Path

import httpx

from .. import config
from ..bootstrap import prompts
from ..bootstrap.types import UserDecision
from .base import ExternalOpener, InstallAssistant, UserPrompt

logger = logging.getLogger(__name__)


class DockerInstallAssistant(InstallAssistant):
    """Docker 未安装时的补救流程"""

    def __init__(
        self,
        prompt: UserPrompt,
        opener: ExternalOpener,
        *,
        platform: str | None = None,
        download_url: str | None = None,
        installer_urls: dict[str, str] | None = None,
        auto_download: bool | None = None,
        download_dir: Path | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """初始化安装助手

        Args:
            prompt: 对话框
            opener: 浏览器/文件打开器
            platform: sys.platform 取值，None 使用当前平台
            download_url: Docker 下载页
            installer_urls: platform -> 安装包直链
            auto_download: 是否下载安装包（否则只打开下载页）
            download_dir: 安装包保存目录，None 使用系统临时目录
            transport: 自定义 httpx transport（测试用）
        """
        self._prompt = prompt
        self._opener = opener
        self._platform = platform or sys.platform
        self._download_url = download_url or config.DOCKER_DOWNLOAD_URL
        self._installer_urls = installer_urls if installer_urls is not None else config.DOCKER_INSTALLER_URLS
        self._auto_download = config.AUTO_DOWNLOAD_INSTALLER if auto_download is None else auto_download
        self._download_dir = download_dir
        self._transport = transport

    async def offer_install(self) -> UserDecision:
        decision = await self._prompt.ask(prompts.runtime_missing(self._platform))

        if decision == UserDecision.CONFIRM:
            if self._auto_download:
                await self.download_and_open_installer()
            else:
                await self._opener.open_url(self._download_url)
        else:
            logger.info("[Install] User declined to install Docker")

        # 用户安装 Docker 后需要手动重启应用
        return decision

    async def download_and_open_installer(self) -> None:
        """下载安装包到临时目录并打开

        这仍然不是静默安装：操作系统会展示安装程序界面。
        """
        filename = config.DOCKER_INSTALLER_FILENAMES.get(self._platform)
        if filename is None:
            await self._prompt.notify(prompts.auto_download_unsupported())
            return

        direct_url = self._installer_urls.get(self._platform)
        if not direct_url:
            await self._prompt.notify(prompts.download_manually())
            await self._opener.open_url(self._download_url)
            return

        target = (self._download_dir or Path(tempfile.gettempdir())) / filename
        await self._prompt.notify(prompts.downloading_installer())

        try:
            await self._download(direct_url, target)
            await self._opener.open_path(target)
        except (httpx.HTTPError, OSError) as e:
            logger.error(f"[Install] Installer download failed: {e}")
            await self._prompt.notify(prompts.download_failed(str(e)))
            return

        await self._prompt.notify(prompts.run_installer())

    async def _download(self, url: str, target: Path) -> None:
        """流式下载到 .part 文件，完成后再改名为 target

        失败时删除 .part，target 只会是完整的安装包。
        """
        logger.info(f"[Install] Downloading {url} -> {target}")
        partial = target.with_suffix(target.suffix + ".part")
        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                follow_redirects=True,
                timeout=config.INSTALLER_DOWNLOAD_TIMEOUT,
            ) as client:
                async with client.stream("GET", url) as response:
                    response.raise_for_status()
                    with partial.open("wb") as f:
                        async for chunk in response.aiter_bytes():
                            f.write(chunk)
            partial.replace(target)
        except (httpx.HTTPError, OSError):
            partial.unlink(missing_ok=True)
            raise
        logger.info(f"[Install] Saved installer to {target}")
