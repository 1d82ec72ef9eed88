from __future__ import annotations

import runpy
import threading
from pathlib import Path

import pytest


def test_main_module_invokes_server(monkeypatch) -> None:
    executed = {}

    def fake_main() -> None:
        executed["called"] = True

    monkeypatch.setattr("webcontainer.main.server.main", fake_main)

    runpy.run_module("webcontainer.main.__main__", run_name="__main__")

    assert executed["called"] is True


@pytest.mark.integration
def test_run_returns_once_stop_event_is_set(
    monkeypatch: pytest.MonkeyPatch, catalina_home: Path
) -> None:
    monkeypatch.setenv("SERVLET_CONTAINER_CATALINA_HOME", str(catalina_home))
    monkeypatch.setenv("SERVLET_CONTAINER_ADDRESS", "127.0.0.1")
    monkeypatch.setenv("SERVLET_CONTAINER_PORT", "0")
    monkeypatch.setattr("webcontainer.main.container._app_container", None)

    from webcontainer.main import server
    from webcontainer.main.container import get_container

    stop_event = threading.Event()
    stop_event.set()

    server.run(stop_event)

    assert get_container().servlet_container().state.value == "stopped"
