"""进程内 ConversationStore 实现。

消息序列只追加不删除，注解更新全部经过 apply()，
这是 Stage 结果写入消息状态的唯一入口。
"""

import itertools
from typing import Callable, Dict, List, Optional

from lingua_core.domain.conversation import ConversationStore, ErrorListener, StoreListener
from lingua_core.domain.exceptions import MessageNotFoundError
from lingua_core.domain.models import Message, MessageUpdate, UserNotice
from lingua_core.infrastructure.logging.logger import logger


class InMemoryConversationStore(ConversationStore):
    def __init__(self):
        self._ids = itertools.count(1)
        self._order: List[int] = []
        self._messages: Dict[int, Message] = {}
        self._error: Optional[UserNotice] = None
        self._listeners: List[StoreListener] = []
        self._error_listeners: List[ErrorListener] = []

    def append(self, text: str, language: str) -> Message:
        msg = Message(id=next(self._ids), text=text, language=language)
        self._messages[msg.id] = msg
        self._order.append(msg.id)
        logger.info(
            "Appended message",
            extra={"extra": {"message_id": msg.id, "language": language, "length": len(text)}},
        )
        self._notify(None, msg)
        return msg

    def get_message(self, message_id: int) -> Message:
        try:
            return self._messages[message_id]
        except KeyError:
            raise MessageNotFoundError(message_id)

    def list_messages(self) -> List[Message]:
        return [self._messages[mid] for mid in self._order]

    def apply(self, update: MessageUpdate) -> Optional[Message]:
        current = self._messages.get(update.message_id)
        if current is None:
            logger.warning(
                "Dropped update for unknown message",
                extra={"extra": {"message_id": update.message_id, "field": update.field}},
            )
            return None
        updated = current.with_annotation(update.field, update.value)
        self._messages[update.message_id] = updated
        logger.info(
            "Applied annotation",
            extra={"extra": {"message_id": update.message_id, "field": update.field}},
        )
        self._notify(update, updated)
        return updated

    @property
    def current_error(self) -> Optional[UserNotice]:
        return self._error

    def set_error(self, notice: Optional[UserNotice]) -> None:
        if notice == self._error:
            return
        self._error = notice
        for listener in list(self._error_listeners):
            try:
                listener(notice)
            except Exception:
                logger.exception("Error listener failed", extra={"extra": {"kind": notice.kind if notice else None}})

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """注册订阅者，返回取消订阅的函数。"""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def subscribe_errors(self, listener: ErrorListener) -> Callable[[], None]:
        """订阅错误槽变化，返回取消订阅的函数。"""
        self._error_listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._error_listeners:
                self._error_listeners.remove(listener)

        return _unsubscribe

    def _notify(self, update: Optional[MessageUpdate], message: Message) -> None:
        for listener in list(self._listeners):
            try:
                listener(update, message)
            except Exception:
                logger.exception("Store listener failed", extra={"extra": {"message_id": message.id}})
