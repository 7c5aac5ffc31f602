"""系统打开器：浏览器打开 URL，系统默认程序打开文件"""

import asyncio
import logging
import os
import sys
import webbrowser
from pathlib import Path

from .base import ExternalOpener

logger = logging.getLogger(__name__)


class SystemOpener(ExternalOpener):
    """使用操作系统默认程序打开外部资源"""

    def __init__(self, platform: str | None = None):
        self._platform = platform or sys.platform

    async def open_url(self, url: str) -> None:
        logger.info(f"[Opener] Opening {url}")
        opened = await asyncio.to_thread(webbrowser.open, url)
        if not opened:
            logger.warning(f"[Opener] No browser available to open {url}")

    async def open_path(self, path: Path) -> None:
        """像在 Finder/Explorer 中双击一样打开文件"""
        logger.info(f"[Opener] Opening {path}")

        if self._platform == "win32":
            await asyncio.to_thread(os.startfile, str(path))  # type: ignore[attr-defined]
            return

        command = "open" if self._platform == "darwin" else "xdg-open"
        proc = await asyncio.create_subprocess_exec(
            command,
            str(path),
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.PIPE,
        )
        _, stderr = await proc.communicate()
        if proc.returncode != 0:
            raise OSError(f"{command} {path} failed: {stderr.decode(errors='replace').strip()}")
