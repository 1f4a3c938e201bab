"""能力宿主集成层。

该包下的模块负责：
- 定义宿主 / 能力 / 会话的抽象接口 (base)。
- 维护能力名称与调用策略常量 (registry)。
- 提供具体宿主实现 (http_host) 以及统一的获取网关 (gateway)。
"""

from typing import Optional

from lingua_core.config.settings import settings
from lingua_core.capabilities.base import CapabilityHost
from lingua_core.capabilities.gateway import CapabilityGateway
from lingua_core.capabilities.http_host import HttpCapabilityHost
from lingua_core.domain.exceptions import ValidationError


def create_capability_host(name: Optional[str] = None) -> CapabilityHost:
    """根据名称创建能力宿主，默认取配置中的 capability_host。"""

    host_name = (name or getattr(settings, "capability_host", "http")).lower()
    if host_name == "http":
        return HttpCapabilityHost(settings)
    raise ValidationError(code="UNKNOWN_HOST", message=f"Unknown capability host: {host_name!r}")


__all__ = ["CapabilityGateway", "CapabilityHost", "HttpCapabilityHost", "create_capability_host"]
