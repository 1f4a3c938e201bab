from lingua_core.infrastructure.storage.memory_store import InMemoryConversationStore

__all__ = ["InMemoryConversationStore"]
