import pytest

from lingua_core.api import service
from lingua_core.domain.exceptions import EmptyInputError


@pytest.fixture
def service_host(monkeypatch, fake_capability, fake_host, detections):
    host = fake_host(
        fake_capability("languageDetector", result=detections("en", 0.97)),
        fake_capability("summarizer", result="- one\n- two"),
        fake_capability("translator", result="Bonjour"),
    )
    monkeypatch.setattr("lingua_core.api.service.create_capability_host", lambda: host)
    service.reset_default_controller()
    yield host
    service.reset_default_controller()


@pytest.mark.asyncio
async def test_service_round(service_host):
    created = await service.submit_message("x" * 200)
    assert created["id"] == 1
    assert created["language_name"] == "English"
    assert created["summary_eligible"] is True

    service.request_summary(1)
    service.request_translation(1, "fr")
    await service.get_default_controller().join()

    [msg] = service.list_messages()
    assert msg["summary"] == "- one\n- two"
    assert msg["translation"] == "Bonjour"
    assert service.current_error() is None


@pytest.mark.asyncio
async def test_service_reports_empty_input(service_host):
    with pytest.raises(EmptyInputError):
        await service.submit_message("   ")
    error = service.current_error()
    assert error["kind"] == "empty-input"
    assert error["fatal"] is True
    assert service.list_messages() == []
