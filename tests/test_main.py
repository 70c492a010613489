"""
tests.test_main

Process entrypoint: configuration errors exit before serving.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from webhook_gateway.api import __main__ as entrypoint
from webhook_gateway.settings import get_settings


@pytest.fixture
def logging_calls(monkeypatch: pytest.MonkeyPatch) -> Iterator[list[dict[str, str]]]:
    calls: list[dict[str, str]] = []
    monkeypatch.setattr(entrypoint, "configure_logging", lambda **kw: calls.append(kw))
    monkeypatch.setattr(
        entrypoint.uvicorn, "run", lambda *a, **kw: pytest.fail("server started")
    )
    for name in ("GATEWAY_WEBHOOK_URLS", "DISCORD_WEBHOOK_URLS", "PORT", "GATEWAY_API_PORT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield calls
    get_settings.cache_clear()


def test_configuration_error_uses_configured_log_level(
    monkeypatch: pytest.MonkeyPatch, logging_calls: list[dict[str, str]]
) -> None:
    monkeypatch.setenv("GATEWAY_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("GATEWAY_SERVICE_NAME", "hooks-east")

    with pytest.raises(SystemExit) as excinfo:
        entrypoint.main()

    assert excinfo.value.code == 1
    assert logging_calls[0] == {"service_name": "hooks-east", "level": "DEBUG"}


def test_unreadable_settings_fall_back_to_default_logging(
    monkeypatch: pytest.MonkeyPatch, logging_calls: list[dict[str, str]]
) -> None:
    monkeypatch.setenv("GATEWAY_API_PORT", "not-a-port")

    with pytest.raises(SystemExit) as excinfo:
        entrypoint.main()

    assert excinfo.value.code == 1
    assert logging_calls == [{"service_name": "webhook-gateway", "level": "INFO"}]
