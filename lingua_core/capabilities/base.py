"""能力宿主抽象接口。

流水线不直接依赖某个具体宿主（本地推理守护进程、测试替身等），而是依赖此协议：

- CapabilityHost: 能力命名空间，get(name) 返回 None 表示宿主没有该能力。
- CapabilityProvider: 单个能力，提供 status() 与 create_session()。
- CapabilitySession: 协商完成后的会话句柄，ready() 之后才能 invoke()。
"""

from typing import Any, Callable, Dict, Optional, Protocol

from lingua_core.domain.models import CapabilityStatus

# 下载进度回调: (loaded, total)
DownloadMonitor = Callable[[int, int], None]


class CapabilitySession(Protocol):
    async def ready(self) -> None:
        """等待会话就绪（模型下载完成）。"""

        ...

    async def invoke(self, payload: str) -> Any:
        ...


class CapabilityProvider(Protocol):
    name: str

    async def status(self) -> CapabilityStatus:
        ...

    async def create_session(
        self,
        options: Optional[Dict[str, Any]] = None,
        monitor: Optional[DownloadMonitor] = None,
    ) -> CapabilitySession:
        ...


class CapabilityHost(Protocol):
    name: str

    async def get(self, capability: str) -> Optional[CapabilityProvider]:
        ...
