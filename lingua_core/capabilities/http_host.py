"""本地推理守护进程能力宿主。

守护进程在本机暴露语言检测 / 摘要 / 翻译三个能力，接口约定：
- GET  {base_url}/capabilities                  -> {"capabilities": [...]}
- GET  {base_url}/capabilities/{name}           -> {"available": "no"|"after-download"|"readily"}
- POST {base_url}/capabilities/{name}/sessions  -> {"id": ..., "state": "ready"|"downloading"}
- GET  {base_url}/sessions/{id}                 -> {"state": ..., "loaded": n, "total": m}
- POST {base_url}/sessions/{id}/invoke          -> {"result": ...}
"""

import asyncio
from typing import Any, Dict, Optional

import httpx

from lingua_core.config.settings import settings
from lingua_core.domain.exceptions import ApiError, NetworkError
from lingua_core.domain.models import CapabilityStatus
from lingua_core.capabilities.base import DownloadMonitor


class HttpCapabilityHost:
    """通过 httpx 访问本地推理守护进程。"""

    name = "http"

    def __init__(self, cfg=settings):
        self._settings = cfg

    async def get(self, capability: str) -> Optional["HttpCapability"]:
        data = await self.request("GET", "/capabilities")
        if capability not in (data.get("capabilities") or []):
            return None
        return HttpCapability(self, capability)

    async def request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            async with httpx.AsyncClient(
                base_url=self._settings.capability_base_url,
                timeout=self._settings.http_timeout,
                trust_env=False,
            ) as client:
                resp = await client.request(method, path, json=payload)
        except httpx.RequestError as e:
            raise NetworkError(code="NETWORK_ERROR", message=str(e))
        if resp.status_code >= 400:
            raise ApiError(code="API_ERROR", message=resp.text, http_status=resp.status_code)
        return resp.json() or {}

    @property
    def poll_interval(self) -> float:
        return self._settings.download_poll_interval


class HttpCapability:
    def __init__(self, host: HttpCapabilityHost, name: str):
        self._host = host
        self.name = name

    async def status(self) -> CapabilityStatus:
        data = await self._host.request("GET", f"/capabilities/{self.name}")
        return data.get("available") or "no"

    async def create_session(
        self,
        options: Optional[Dict[str, Any]] = None,
        monitor: Optional[DownloadMonitor] = None,
    ) -> "HttpCapabilitySession":
        data = await self._host.request("POST", f"/capabilities/{self.name}/sessions", payload=options or {})
        return HttpCapabilitySession(
            self._host,
            session_id=str(data["id"]),
            state=data.get("state") or "downloading",
            monitor=monitor,
        )


class HttpCapabilitySession:
    def __init__(
        self,
        host: HttpCapabilityHost,
        session_id: str,
        state: str,
        monitor: Optional[DownloadMonitor] = None,
    ):
        self._host = host
        self.id = session_id
        self.state = state
        self._monitor = monitor

    async def ready(self) -> None:
        while self.state != "ready":
            await asyncio.sleep(self._host.poll_interval)
            data = await self._host.request("GET", f"/sessions/{self.id}")
            self.state = data.get("state") or self.state
            if self.state == "failed":
                raise ApiError(code="SESSION_FAILED", message=f"session {self.id} failed to load", http_status=500)
            if self._monitor is not None and "loaded" in data:
                self._monitor(int(data.get("loaded") or 0), int(data.get("total") or 0))

    async def invoke(self, payload: str) -> Any:
        data = await self._host.request("POST", f"/sessions/{self.id}/invoke", payload={"input": payload})
        return data.get("result")
