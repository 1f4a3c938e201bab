"""领域层模型与协议。

包含：
- models: Message / DetectionResult / MessageUpdate / UserNotice 等数据结构。
- conversation: ConversationStore 协议（消息序列 + 单一错误槽）。
- exceptions: 业务异常类型定义。
"""
