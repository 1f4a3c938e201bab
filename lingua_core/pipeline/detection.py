"""Language detection with a confidence gate."""

from typing import Any, Optional, Tuple

from lingua_core.capabilities.gateway import CapabilityGateway
from lingua_core.capabilities.registry import DETECTOR
from lingua_core.config.settings import settings
from lingua_core.domain.exceptions import ApiUnavailableError, CapabilityRuntimeError, EmptyInputError
from lingua_core.domain.models import UNKNOWN_LANGUAGE, DetectionResult
from lingua_core.infrastructure.logging.logger import logger
from lingua_core.pipeline.base import CapabilityStage


class LanguageDetectionStage(CapabilityStage):
    """检测提交文本的语言。

    能力不可用时降级为 Unknown（检测是尽力而为，不能阻塞消息提交）；
    最高候选的置信度严格小于阈值时同样返回 Unknown，并标记 low_confidence。
    """

    capability = DETECTOR

    def __init__(self, gateway: CapabilityGateway, threshold: Optional[float] = None):
        super().__init__(gateway)
        self._threshold = settings.confidence_threshold if threshold is None else threshold

    async def detect(self, text: str) -> DetectionResult:
        if not text or not text.strip():
            raise EmptyInputError()
        try:
            results = await self._invoke(text)
        except ApiUnavailableError as e:
            logger.info("Language detection degraded to Unknown", extra={"extra": {"reason": e.reason}})
            return DetectionResult(language=UNKNOWN_LANGUAGE, confidence=0.0)

        top = self._top_candidate(results)
        if top is None:
            return DetectionResult(language=UNKNOWN_LANGUAGE, confidence=0.0)
        code, confidence = top
        if confidence < self._threshold:
            logger.warning(
                "Low confidence detection discarded",
                extra={"extra": {"candidate": code, "confidence": confidence, "threshold": self._threshold}},
            )
            return DetectionResult(language=UNKNOWN_LANGUAGE, confidence=confidence, low_confidence=True)
        return DetectionResult(language=code, confidence=confidence)

    def _top_candidate(self, results: Any) -> Optional[Tuple[str, float]]:
        # 结果按置信度降序排列，只取第一个
        if not results:
            return None
        try:
            first = results[0]
            code = first.get("detectedLanguage") or first.get("code")
            confidence = float(first.get("confidence", 0.0))
        except (AttributeError, IndexError, KeyError, TypeError, ValueError) as e:
            raise CapabilityRuntimeError(self.capability, f"malformed detection result: {e}") from e
        if not code:
            return None
        return code, confidence
