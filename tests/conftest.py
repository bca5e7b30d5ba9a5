"""Pytest configuration: a manually advanced scheduler and a scripted appearance port."""

import heapq
import itertools
from datetime import datetime

import pytest

from appearance_switch.core import config as config_module
from appearance_switch.core.enums import AppearanceEvent
from appearance_switch.services.events import EventBus
from appearance_switch.services.settings import ConfigStore, SettingsStore

# ================================
# FAKES
# ================================


class FakeScheduler:
    """IScheduler whose clock only moves when the test advances it."""

    def __init__(self):
        self.now_ms = 0
        self._heap = []
        self._pending = {}
        self._counter = itertools.count(1)

    def after(self, delay_ms, callback, *args):
        seq = next(self._counter)
        after_id = f"fake#{seq}"
        self._pending[after_id] = (callback, args)
        heapq.heappush(self._heap, (self.now_ms + max(0, delay_ms), seq, after_id))
        return after_id

    def after_cancel(self, after_id):
        self._pending.pop(after_id, None)

    def advance(self, ms):
        """Move the clock forward, running every callback that falls due on the way."""
        target = self.now_ms + ms
        while self._heap and self._heap[0][0] <= target:
            due, _, after_id = heapq.heappop(self._heap)
            if after_id not in self._pending:
                continue
            self.now_ms = due
            callback, args = self._pending.pop(after_id)
            callback(*args)
        self.now_ms = target

    def run_pending(self):
        self.advance(0)

    @property
    def scheduled(self):
        return len(self._pending)


class FakeAppearancePort:
    """In-memory appearance port recording every request."""

    def __init__(self, is_dark=False, auto_complete=True, succeed=True):
        self.is_dark = is_dark
        self.auto_complete = auto_complete
        self.succeed = succeed
        self.read_error = None
        self.requests = []
        self.permission_requests = 0
        self._in_flight = []

    def read(self):
        if self.read_error is not None:
            raise self.read_error
        return self.is_dark

    def request_change(self, target, on_complete=None):
        self.requests.append(target)
        self._in_flight.append((target, on_complete))
        if self.auto_complete:
            self.complete_all()

    def request_permissions(self):
        self.permission_requests += 1

    def complete_all(self):
        while self._in_flight:
            target, on_complete = self._in_flight.pop(0)
            if self.succeed:
                self.is_dark = target
            if on_complete is not None:
                on_complete()


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def set(self, hour, minute, second=0):
        self.now = self.now.replace(hour=hour, minute=minute, second=second)


# ================================
# FIXTURES
# ================================


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep AppConfig away from real config files and the user's home directory."""
    home = tmp_path / "home"
    monkeypatch.setattr(config_module, "CONFIG_DIR", home)
    monkeypatch.chdir(tmp_path)
    config_module.reset_config()
    yield home
    config_module.reset_config()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def appearance():
    return FakeAppearancePort()


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 14, 12, 0))


@pytest.fixture
def settings_path(tmp_path):
    return tmp_path / "settings" / "settings.json"


@pytest.fixture
def settings_store(settings_path):
    return SettingsStore(settings_path)


@pytest.fixture
def config_store(settings_store):
    return ConfigStore(settings_store)


@pytest.fixture
def event_bus(scheduler):
    return EventBus(AppearanceEvent, scheduler, poll_interval_ms=50)
