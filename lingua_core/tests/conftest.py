"""共享的能力宿主替身，以 fixture 形式提供给各测试模块。"""

import asyncio
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest


class FakeSession:
    def __init__(
        self,
        result: Any = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
        progress: Optional[List[Tuple[int, int]]] = None,
        monitor=None,
        never_ready: bool = False,
    ):
        self._result = result
        self._error = error
        self._delay = delay
        self._progress = progress or []
        self._monitor = monitor
        self._never_ready = never_ready
        self.ready_called = False
        self.inputs: List[str] = []

    async def ready(self) -> None:
        self.ready_called = True
        for loaded, total in self._progress:
            if self._monitor is not None:
                self._monitor(loaded, total)
        if self._never_ready:
            await asyncio.Event().wait()

    async def invoke(self, payload: str) -> Any:
        self.inputs.append(payload)
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        if callable(self._result):
            return self._result(payload)
        return self._result


class FakeCapability:
    def __init__(
        self,
        name: str,
        status: str = "readily",
        result: Any = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
        progress: Optional[List[Tuple[int, int]]] = None,
        never_ready: bool = False,
    ):
        self.name = name
        self._status = status
        self._result = result
        self._error = error
        self._delay = delay
        self._progress = progress
        self._never_ready = never_ready
        self.status_calls = 0
        self.created: List[Dict[str, Any]] = []
        self.sessions: List[FakeSession] = []

    async def status(self) -> str:
        self.status_calls += 1
        return self._status

    async def create_session(self, options=None, monitor=None) -> FakeSession:
        self.created.append({"options": options, "monitor": monitor})
        session = FakeSession(
            result=self._result,
            error=self._error,
            delay=self._delay,
            progress=self._progress,
            monitor=monitor,
            never_ready=self._never_ready,
        )
        self.sessions.append(session)
        return session

    @property
    def invocations(self) -> List[str]:
        return [p for s in self.sessions for p in s.inputs]


class FakeHost:
    name = "fake"

    def __init__(self, *capabilities: FakeCapability, error: Optional[Exception] = None):
        self._capabilities = {c.name: c for c in capabilities}
        self._error = error
        self.lookups: List[str] = []

    async def get(self, capability: str) -> Optional[FakeCapability]:
        self.lookups.append(capability)
        if self._error is not None:
            raise self._error
        return self._capabilities.get(capability)


@pytest.fixture
def fake_capability():
    return FakeCapability


@pytest.fixture
def fake_host():
    return FakeHost


@pytest.fixture
def detections() -> Callable[[str, float], Callable[[str], List[Dict[str, Any]]]]:
    def _detections(code: str, confidence: float):
        return lambda _text: [{"detectedLanguage": code, "confidence": confidence}]

    return _detections
