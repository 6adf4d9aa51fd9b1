from concurrent.futures import Future

import pytest

from core import EventBus
from web.app import create_app


class FakeSender:
    def __init__(self, error=None):
        self.error = error
        self.sent = []

    def send(self, params):
        self.sent.append(dict(params))
        if self.error is not None:
            raise self.error


class InlineExecutor:
    """Runs submitted work immediately so send outcomes are deterministic."""

    def submit(self, fn, *args, **kwargs):
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future


@pytest.fixture
def sender():
    return FakeSender()


@pytest.fixture
def site_dir(tmp_path):
    root = tmp_path / "public"
    root.mkdir()
    (root / "index.html").write_text("<h1>home</h1>")
    (root / "style.css").write_text("body {}")
    return root


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def app(site_dir, upload_dir, sender, bus):
    app = create_app(site_dir, upload_dir, sender=sender, event_bus=bus)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()
