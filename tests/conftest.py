import pytest

from ddc_brightness_control import config

from .mocks.channel_mock import MockChannel
from .mocks.notifier_mock import MockNotifier
from .mocks.store_mock import MockStore


@pytest.fixture(autouse=True)
def isolate_config(monkeypatch: pytest.MonkeyPatch, tmp_path):
    '''Never touch the real state file or the real display from tests'''
    monkeypatch.setattr(config, 'STATE_FILE', str(tmp_path / 'brightness.value'))
    monkeypatch.setattr(config, 'USE_SUDO', False)


@pytest.fixture
def state_file(tmp_path) -> str:
    return str(tmp_path / 'brightness.value')


@pytest.fixture
def channel() -> MockChannel:
    return MockChannel()


@pytest.fixture
def store() -> MockStore:
    return MockStore()


@pytest.fixture
def notifier() -> MockNotifier:
    return MockNotifier()
