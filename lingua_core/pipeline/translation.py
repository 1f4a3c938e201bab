from typing import Optional

from lingua_core.capabilities.registry import TRANSLATOR, TranslatorOptions
from lingua_core.domain.exceptions import ApiUnavailableError
from lingua_core.infrastructure.logging.logger import logger
from lingua_core.pipeline.base import CapabilityStage


class TranslationStage(CapabilityStage):
    capability = TRANSLATOR

    async def translate(
        self,
        message_id: int,
        text: str,
        target_language: str,
        source_language: Optional[str] = None,
    ) -> Optional[str]:
        """翻译消息文本；能力不可用时返回 None。

        source_language 为空时与目标语言相同。
        """
        options = TranslatorOptions(
            source_language=source_language or target_language,
            target_language=target_language,
        )
        try:
            translated = await self._invoke(
                text,
                options.to_payload(),
                message_id=message_id,
                target=target_language,
            )
        except ApiUnavailableError as e:
            logger.info("The Translator API isn't usable", extra={"extra": {"message_id": message_id, "reason": e.reason}})
            return None
        return None if translated is None else str(translated)
