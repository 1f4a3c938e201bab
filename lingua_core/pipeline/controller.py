"""流水线编排模块。

提交：语言检测 -> 追加消息；
用户操作：摘要 / 翻译在后台任务中执行，结果以 MessageUpdate 事件写回 ConversationStore。
"""

import asyncio
import logging
from typing import Any, Coroutine, Dict, Optional, Set

from lingua_core.capabilities.registry import SUPPORTED_LANGUAGES
from lingua_core.config.settings import settings
from lingua_core.domain.conversation import ConversationStore
from lingua_core.domain.exceptions import CapabilityRuntimeError, EmptyInputError, ValidationError
from lingua_core.domain.models import UNKNOWN_LANGUAGE, Message, MessageUpdate, UserNotice
from lingua_core.infrastructure.logging.logger import logger
from lingua_core.pipeline.detection import LanguageDetectionStage
from lingua_core.pipeline.summarization import SummarizationStage
from lingua_core.pipeline.translation import TranslationStage


EMPTY_INPUT_NOTICE = "Please enter some text before sending."
LOW_CONFIDENCE_NOTICE = "Check the spelling to be sure"
DETECTION_FAILED_NOTICE = "Failed to detect language."
SUMMARY_FAILED_NOTICE = "Failed to summarize the text."
TRANSLATION_FAILED_NOTICE = "Failed to translate text."


def summary_eligible(message: Message, min_length: int = 150, language: str = "en") -> bool:
    """只有指定语言且长度严格大于 min_length 的消息才提供摘要。"""

    return message.language == language and len(message.text) > min_length


class PipelineController:
    def __init__(
        self,
        store: ConversationStore,
        detector: LanguageDetectionStage,
        summarizer: SummarizationStage,
        translator: TranslationStage,
        cfg=settings,
    ):
        self._store = store
        self._detector = detector
        self._summarizer = summarizer
        self._translator = translator
        self._settings = cfg
        self._pending: Set[asyncio.Task] = set()
        # 待提交文本：检测硬失败时保留，便于用户修改后重发
        self.draft = ""
        self.detected_language: Optional[str] = None

    @property
    def store(self) -> ConversationStore:
        return self._store

    # ---- 提交 ----

    async def submit_message(self, text: Optional[str] = None) -> Message:
        """检测语言后追加消息。

        Raises:
            EmptyInputError: 文本为空或只有空白，不追加消息。
            CapabilityRuntimeError: 检测意外失败，不追加消息，draft 保持不变。
        """
        # 并发提交时 draft 可能被后一次调用覆盖，本次只使用局部 text
        if text is None:
            text = self.draft
        else:
            self.draft = text
        self._store.set_error(None)

        try:
            result = await self._detector.detect(text)
        except EmptyInputError:
            self._store.set_error(UserNotice(kind="empty-input", message=EMPTY_INPUT_NOTICE))
            raise
        except CapabilityRuntimeError as e:
            self._store.set_error(
                UserNotice(kind="runtime-error", message=DETECTION_FAILED_NOTICE, meta={"error": e.message})
            )
            raise

        if result.low_confidence:
            self._store.set_error(
                UserNotice(
                    kind="low-confidence",
                    message=LOW_CONFIDENCE_NOTICE,
                    meta={"confidence": result.confidence},
                )
            )

        message = self._store.append(text, result.language)
        self.detected_language = result.language
        if self.draft == text:
            self.draft = ""
        return message

    # ---- 摘要 ----

    def summary_eligible(self, message: Message) -> bool:
        return summary_eligible(
            message,
            min_length=self._settings.summary_min_length,
            language=self._settings.summary_language,
        )

    def request_summary(self, message_id: int) -> Optional[asyncio.Task]:
        """在后台生成摘要；消息不符合条件时不做任何事并返回 None。"""

        message = self._store.get_message(message_id)
        if not self.summary_eligible(message):
            self._log(logging.INFO, "Summary not offered for message", {"message_id": message_id})
            return None
        return self._spawn(self._run_summary(message.id, message.text))

    async def _run_summary(self, message_id: int, text: str) -> None:
        try:
            summary = await self._summarizer.summarize(message_id, text)
        except CapabilityRuntimeError as e:
            self._fail(SUMMARY_FAILED_NOTICE, message_id, e)
            return
        if summary is not None:
            self._store.apply(MessageUpdate(message_id=message_id, field="summary", value=summary))

    # ---- 翻译 ----

    def request_translation(self, message_id: int, target_language: str) -> asyncio.Task:
        """在后台翻译消息，成功后覆盖之前的翻译结果。"""

        target = (target_language or "").strip().lower()
        if target not in SUPPORTED_LANGUAGES:
            raise ValidationError(code="UNSUPPORTED_LANGUAGE", message=f"Unsupported language: {target_language!r}")
        message = self._store.get_message(message_id)
        return self._spawn(self._run_translation(message.id, message.text, target, self._source_for(message, target)))

    def _source_for(self, message: Message, target: str) -> str:
        if self._settings.translation_use_detected_source and message.language != UNKNOWN_LANGUAGE:
            return message.language
        return target

    async def _run_translation(self, message_id: int, text: str, target: str, source: str) -> None:
        try:
            translated = await self._translator.translate(message_id, text, target, source_language=source)
        except CapabilityRuntimeError as e:
            self._fail(TRANSLATION_FAILED_NOTICE, message_id, e)
            return
        if translated is not None:
            self._store.apply(MessageUpdate(message_id=message_id, field="translation", value=translated))

    # ---- 任务管理 ----

    async def join(self) -> None:
        """等待所有进行中的后台任务完成。"""

        while self._pending:
            await asyncio.gather(*list(self._pending))

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def _fail(self, notice: str, message_id: int, error: CapabilityRuntimeError) -> None:
        self._log(
            logging.ERROR,
            notice,
            {"message_id": message_id, "capability": error.capability},
            error=error.message,
        )
        self._store.set_error(UserNotice(kind="runtime-error", message=notice, meta={"message_id": message_id}))

    @staticmethod
    def _log(level: int, message: str, log_ctx: Dict[str, Any], **fields: Any) -> None:
        payload = dict(log_ctx)
        payload.update(fields)
        logger.log(level, message, extra={"extra": payload})
