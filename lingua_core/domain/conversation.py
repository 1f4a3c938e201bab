from typing import Callable, List, Optional, Protocol

from .models import Message, MessageUpdate, UserNotice

# 订阅回调：收到已应用的更新事件（追加消息时 update 为 None）以及最新消息快照
StoreListener = Callable[[Optional[MessageUpdate], Message], None]
# 错误槽订阅回调：收到新的提示（清空时为 None）
ErrorListener = Callable[[Optional[UserNotice]], None]


class ConversationStore(Protocol):
    def append(self, text: str, language: str) -> Message:
        ...

    def get_message(self, message_id: int) -> Message:
        ...

    def list_messages(self) -> List[Message]:
        ...

    def apply(self, update: MessageUpdate) -> Optional[Message]:
        ...

    @property
    def current_error(self) -> Optional[UserNotice]:
        ...

    def set_error(self, notice: Optional[UserNotice]) -> None:
        ...

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        ...

    def subscribe_errors(self, listener: ErrorListener) -> Callable[[], None]:
        ...
