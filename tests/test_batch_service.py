"""Tests for BatchService and the scheduled entrypoint"""

from __future__ import annotations

import logging
from typing import Dict, List

import pytest
import requests

from keepwarm.application.batch_service import BatchService
from keepwarm.application.ping_service import PingService
from keepwarm.application.scheduled_task import run_scheduled_task, scheduled
from keepwarm.domain.config import AppConfig, RetryConfig, TargetsConfig
from keepwarm.infrastructure.config.config_manager import ConfigurationError


class FakePingService(PingService):
    def __init__(self, verdicts: Dict[str, bool]):
        super().__init__()
        self.verdicts = verdicts
        self.visited: List[str] = []

    def run(self, url: str) -> bool:
        self.visited.append(url)
        return self.verdicts.get(url, True)


def test_run_all_visits_every_url_in_order():
    urls = ["https://a.test", "https://b.test", "https://c.test"]
    ping_service = FakePingService({"https://a.test": False, "https://b.test": False})

    BatchService(ping_service).run_all(urls)

    assert ping_service.visited == urls


def test_run_all_logs_give_up_per_exhausted_url(caplog):
    ping_service = FakePingService({"https://down.test": False})

    with caplog.at_level(logging.INFO):
        result = BatchService(ping_service).run_all(["https://down.test", "https://up.test"])

    assert result is None
    give_ups = [r.getMessage() for r in caplog.records if r.getMessage().startswith("Giving up")]
    assert give_ups == ["Giving up on https://down.test"]
    assert caplog.records[-1].getMessage() == "All ping tasks finished."


def test_run_all_visits_duplicates_each_time():
    ping_service = FakePingService({})

    BatchService(ping_service).run_all(["https://a.test", "https://a.test"])

    assert ping_service.visited == ["https://a.test", "https://a.test"]


def test_empty_batch_only_logs_markers(caplog):
    ping_service = FakePingService({})

    with caplog.at_level(logging.DEBUG, logger="keepwarm"):
        BatchService(ping_service).run_all([])

    assert ping_service.visited == []
    messages = [r.getMessage() for r in caplog.records]
    assert len(messages) == 2
    assert messages[0].startswith("Scheduled ping batch started for 0 target(s)")
    assert messages[1] == "All ping tasks finished."


def test_batch_continues_after_real_exhaustion(monkeypatch, caplog):
    calls: List[str] = []

    def fake_get(url, timeout, **kwargs):
        calls.append(url)
        if "fail" in url:
            raise requests.exceptions.ConnectionError("connection refused")
        r = requests.Response()
        r.status_code = 200
        r._content = b""  # type: ignore[attr-defined]
        r._content_consumed = True  # type: ignore[attr-defined]
        return r

    monkeypatch.setattr(requests, "get", fake_get)
    sleeps: List[float] = []
    ping_service = PingService(
        RetryConfig(max_attempts=2, retry_interval_ms=5), sleep=sleeps.append
    )

    with caplog.at_level(logging.INFO):
        BatchService(ping_service).run_all(["https://fail.test", "https://ok.test"])

    assert calls == ["https://fail.test", "https://fail.test", "https://ok.test"]
    assert sleeps == [0.005]
    assert "Giving up on https://fail.test" in caplog.text
    assert "Giving up on https://ok.test" not in caplog.text


def test_run_scheduled_task_uses_configured_targets():
    config = AppConfig(targets=TargetsConfig(urls=["https://a.test", "https://b.test"]))
    ping_service = FakePingService({})

    run_scheduled_task(config, ping_service=ping_service)

    assert ping_service.visited == ["https://a.test", "https://b.test"]


def test_scheduled_reads_injected_environment(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    seen = {}

    def fake_run(config, ping_service=None):
        seen["config"] = config

    monkeypatch.setattr("keepwarm.application.scheduled_task.run_scheduled_task", fake_run)

    scheduled(
        environ={
            "API_LIST": '["https://a.test"]',
            "MAX_RETRIES": "5",
            "RETRY_INTERVAL": "250",
        }
    )

    config = seen["config"]
    assert config.targets.urls == ["https://a.test"]
    assert config.retry.max_attempts == 5
    assert config.retry.retry_interval_ms == 250


def test_scheduled_fails_closed_on_malformed_api_list(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    called = []
    monkeypatch.setattr(
        "keepwarm.application.scheduled_task.run_scheduled_task",
        lambda *a, **kw: called.append(a),
    )

    with pytest.raises(ConfigurationError, match="API_LIST"):
        scheduled(environ={"API_LIST": "[https://a.test"})
    assert called == []
