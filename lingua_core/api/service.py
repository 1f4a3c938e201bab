"""对外 API 服务模块。

提供简化的函数接口供展示层调用，返回可直接序列化的字典。
"""

from typing import Any, Dict, List, Optional

from lingua_core.capabilities import CapabilityGateway, create_capability_host
from lingua_core.capabilities.registry import language_name
from lingua_core.domain.models import Message
from lingua_core.infrastructure.storage.memory_store import InMemoryConversationStore
from lingua_core.pipeline import (
    LanguageDetectionStage,
    PipelineController,
    SummarizationStage,
    TranslationStage,
)


_controller: Optional[PipelineController] = None


def build_controller(gateway: CapabilityGateway) -> PipelineController:
    return PipelineController(
        store=InMemoryConversationStore(),
        detector=LanguageDetectionStage(gateway),
        summarizer=SummarizationStage(gateway),
        translator=TranslationStage(gateway),
    )


def get_default_controller() -> PipelineController:
    """获取默认的 PipelineController 实例（单例）。"""
    global _controller
    if _controller is None:
        _controller = build_controller(CapabilityGateway(create_capability_host()))
    return _controller


def reset_default_controller() -> None:
    global _controller
    _controller = None


def _message_dict(m: Message, controller: PipelineController) -> Dict[str, Any]:
    return {
        "id": m.id,
        "text": m.text,
        "language": m.language,
        "language_name": language_name(m.language),
        "summary": m.summary,
        "translation": m.translation,
        "summary_eligible": controller.summary_eligible(m),
    }


async def submit_message(text: str) -> Dict[str, Any]:
    """检测语言并追加消息。

    Raises:
        EmptyInputError / CapabilityRuntimeError，错误同时写入 current_error 槽。
    """
    controller = get_default_controller()
    message = await controller.submit_message(text)
    return _message_dict(message, controller)


def request_summary(message_id: int) -> None:
    get_default_controller().request_summary(message_id)


def request_translation(message_id: int, target_language: str) -> None:
    get_default_controller().request_translation(message_id, target_language)


def list_messages() -> List[Dict[str, Any]]:
    controller = get_default_controller()
    return [_message_dict(m, controller) for m in controller.store.list_messages()]


def current_error() -> Optional[Dict[str, Any]]:
    notice = get_default_controller().store.current_error
    if notice is None:
        return None
    return {"kind": notice.kind, "message": notice.message, "fatal": notice.is_fatal, **notice.meta}
