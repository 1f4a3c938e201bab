"""能力获取网关。

acquire() 把"命名空间是否存在 / 能力状态 / 是否需要下载"三层判断
收敛成一个调用：要么返回可直接 invoke 的会话，要么抛出 ApiUnavailableError。
"""

import asyncio
from typing import Any, Dict, Optional

from lingua_core.capabilities.base import CapabilityHost, CapabilitySession, DownloadMonitor
from lingua_core.config.settings import settings
from lingua_core.domain.exceptions import ApiUnavailableError, NetworkError
from lingua_core.infrastructure.logging.logger import logger


class CapabilityGateway:
    def __init__(self, host: CapabilityHost, ready_timeout: Optional[float] = None):
        self._host = host
        self._ready_timeout = ready_timeout if ready_timeout is not None else settings.capability_ready_timeout

    async def acquire(self, capability: str, options: Optional[Dict[str, Any]] = None) -> CapabilitySession:
        """返回已就绪的会话。

        Raises:
            ApiUnavailableError: reason 为 "api-missing"、"model-unusable" 或 "timeout"。
        """
        log_ctx = {"capability": capability, "host": getattr(self._host, "name", "unknown")}
        try:
            provider = await self._host.get(capability)
        except NetworkError as e:
            # 宿主不可达与命名空间缺失同样处理
            logger.info("Capability host unreachable", extra={"extra": {**log_ctx, "error": e.message}})
            provider = None
        if provider is None:
            logger.info("Capability API is unavailable", extra={"extra": log_ctx})
            raise ApiUnavailableError(capability, "api-missing")

        status = await provider.status()
        if status == "no":
            logger.info("Capability model is not usable", extra={"extra": log_ctx})
            raise ApiUnavailableError(capability, "model-unusable")

        if status in ("readily", "ready"):
            return await provider.create_session(options)

        logger.info("Capability can be used after model download", extra={"extra": log_ctx})
        session = await provider.create_session(options, monitor=self._progress_monitor(capability))
        try:
            if self._ready_timeout is None:
                await session.ready()
            else:
                await asyncio.wait_for(session.ready(), timeout=self._ready_timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Timed out waiting for model download",
                extra={"extra": {**log_ctx, "timeout": self._ready_timeout}},
            )
            raise ApiUnavailableError(capability, "timeout")
        return session

    @staticmethod
    def _progress_monitor(capability: str) -> DownloadMonitor:
        def _on_progress(loaded: int, total: int) -> None:
            logger.info(
                f"Downloaded {loaded} of {total} bytes.",
                extra={"extra": {"capability": capability, "loaded": loaded, "total": total}},
            )

        return _on_progress
