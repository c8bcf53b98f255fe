"""A client that hangs up mid-fetch must stop the fetches on a real server."""

from __future__ import annotations

import socket
import threading
import time

import httpx
import pytest
import uvicorn

from zip_bundler.dependencies import get_fetcher
from zip_bundler.main import app

from conftest import FakeFetcher, file_node

SLOW_FETCH_SECONDS = 3.0


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture
def live_server(fake_fetcher: FakeFetcher):
    app.dependency_overrides[get_fetcher] = lambda: fake_fetcher
    port = _free_port()
    server = uvicorn.Server(
        uvicorn.Config(app, host="127.0.0.1", port=port, lifespan="off", log_config=None, log_level="warning")
    )
    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()
    deadline = time.monotonic() + 10
    while not server.started:
        if time.monotonic() > deadline or not thread.is_alive():
            pytest.fail("uvicorn did not start")
        time.sleep(0.02)
    try:
        yield f"http://127.0.0.1:{port}"
    finally:
        server.should_exit = True
        thread.join(timeout=10)
        app.dependency_overrides.clear()


def test_disconnect_cancels_in_flight_fetches(live_server: str, fake_fetcher: FakeFetcher) -> None:
    fake_fetcher.content["http://x/slow"] = b"slow"
    fake_fetcher.delays["http://x/slow"] = SLOW_FETCH_SECONDS
    body = {"name": "bundle", "roots": [file_node("slow.bin", "http://x/slow")]}

    with pytest.raises(httpx.ReadTimeout):
        httpx.post(f"{live_server}/api/zip/download", json=body, timeout=0.3)
    hung_up = time.monotonic()

    # well before the fetch would have finished on its own
    while fake_fetcher.active and time.monotonic() - hung_up < 2.0:
        time.sleep(0.05)

    assert fake_fetcher.calls == ["http://x/slow"]
    assert fake_fetcher.active == 0
    assert time.monotonic() - hung_up < SLOW_FETCH_SECONDS - 0.3
