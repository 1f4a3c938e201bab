"""流水线共享的数据结构。

- Message: 会话中的一条消息，text 创建后不可变，注解字段可被覆盖。
- DetectionResult: 一次语言检测的结果（含低置信度标记）。
- MessageUpdate: Stage 结果对应的单字段更新事件，由 ConversationStore 统一应用。
- UserNotice: 单一错误槽中展示给用户的提示。
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Literal, Optional


UNKNOWN_LANGUAGE = "Unknown"

# 能力状态：与宿主 status() 的返回值对应，readily 与 ready 都表示可直接创建会话
CapabilityStatus = Literal["no", "after-download", "readily", "ready"]

# 可被 Stage 写入的注解字段（language 只在创建时写入）
AnnotationField = Literal["summary", "translation"]

NoticeKind = Literal["empty-input", "low-confidence", "runtime-error"]


@dataclass(frozen=True)
class Message:
    """一条消息快照。

    frozen: 注解更新通过 ConversationStore 生成新快照完成，
    订阅者拿到的旧快照不会被改动。
    """

    id: int
    text: str
    language: str = UNKNOWN_LANGUAGE
    summary: Optional[str] = None
    translation: Optional[str] = None

    def with_annotation(self, field_name: AnnotationField, value: str) -> "Message":
        return replace(self, **{field_name: value})


@dataclass(frozen=True)
class DetectionResult:
    language: str
    confidence: float
    low_confidence: bool = False

    @property
    def is_unknown(self) -> bool:
        return self.language == UNKNOWN_LANGUAGE


@dataclass(frozen=True)
class MessageUpdate:
    """{message_id, field, value} 形式的更新事件。"""

    message_id: int
    field: AnnotationField
    value: str


@dataclass(frozen=True)
class UserNotice:
    kind: NoticeKind
    message: str
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_fatal(self) -> bool:
        return self.kind != "low-confidence"
