"""统一业务异常模型。

所有跨模块抛出的业务级错误都应该继承自 BusinessError，
便于在 Controller 或 UI 层做统一捕获与用户提示。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "EMPTY_INPUT"）。
        message: 用户可读错误信息。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 capability、reason 等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class NetworkError(BusinessError):
    """网络层错误，例如连接推理守护进程失败、超时等。"""


class ApiError(BusinessError):
    """能力宿主返回非 2xx 响应时抛出。"""


class ValidationError(BusinessError):
    """参数或配置校验失败。"""


class EmptyInputError(ValidationError):
    """提交的文本去除空白后为空，可由用户修正。"""

    def __init__(self, message: str = "Input cannot be empty."):
        super().__init__(code="EMPTY_INPUT", message=message)


class ApiUnavailableError(BusinessError):
    """能力不可用（命名空间缺失、模型不可用或等待下载超时）。

    reason 取值: "api-missing" / "model-unusable" / "timeout"。
    """

    def __init__(self, capability: str, reason: str):
        self.capability = capability
        self.reason = reason
        super().__init__(
            code="API_UNAVAILABLE",
            message=f"{capability} unavailable: {reason}",
            http_status=503,
            capability=capability,
            reason=reason,
        )


class CapabilityRuntimeError(BusinessError):
    """能力调用过程中出现的意外失败。"""

    def __init__(self, capability: str, message: str):
        self.capability = capability
        super().__init__(code="CAPABILITY_ERROR", message=message, http_status=500, capability=capability)


class MessageNotFoundError(BusinessError):
    def __init__(self, message_id: int):
        self.message_id = message_id
        super().__init__(code="MESSAGE_NOT_FOUND", message=str(message_id), http_status=404)
