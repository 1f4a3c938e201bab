from typing import Optional

from lingua_core.capabilities.registry import SUMMARIZER, SUMMARIZER_OPTIONS
from lingua_core.domain.exceptions import ApiUnavailableError
from lingua_core.infrastructure.logging.logger import logger
from lingua_core.pipeline.base import CapabilityStage


class SummarizationStage(CapabilityStage):
    """按固定参数生成要点摘要。

    是否可摘要由 Controller 判断，这里不再校验。能力不可用时返回 None。
    """

    capability = SUMMARIZER

    async def summarize(self, message_id: int, text: str) -> Optional[str]:
        try:
            summary = await self._invoke(text, SUMMARIZER_OPTIONS.to_payload(), message_id=message_id)
        except ApiUnavailableError as e:
            logger.info("The Summarizer API isn't usable", extra={"extra": {"message_id": message_id, "reason": e.reason}})
            return None
        return None if summary is None else str(summary)
