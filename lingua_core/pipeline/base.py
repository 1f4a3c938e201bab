"""Stage 公共逻辑：获取会话并调用一次，失败统一分类。"""

from typing import Any, Dict, Optional

from lingua_core.capabilities.gateway import CapabilityGateway
from lingua_core.domain.exceptions import ApiUnavailableError, CapabilityRuntimeError
from lingua_core.infrastructure.logging.logger import logger


class CapabilityStage:
    """单个能力的调用步骤。

    _invoke() 只会抛出两类异常：
    - ApiUnavailableError: 能力不可用，由子类决定降级方式。
    - CapabilityRuntimeError: 其余任何失败。
    """

    capability: str = ""

    def __init__(self, gateway: CapabilityGateway):
        self._gateway = gateway

    async def _invoke(self, payload: str, options: Optional[Dict[str, Any]] = None, **log_extra: Any) -> Any:
        log_ctx = {"capability": self.capability, **log_extra}
        try:
            session = await self._gateway.acquire(self.capability, options)
            return await session.invoke(payload)
        except ApiUnavailableError:
            raise
        except Exception as e:
            logger.error(f"{self.capability} failed: {e}", extra={"extra": {**log_ctx, "error": str(e)}})
            raise CapabilityRuntimeError(self.capability, str(e)) from e
