import pytest

from textvision.config import Config
from textvision.core import command_set
from textvision.core.app import Application
from textvision.core.palette import reset_app_palette
from textvision.core.terminal import Terminal
from textvision.io.mock_io import MockBackend


@pytest.fixture(autouse=True)
def fresh_globals():
    """Every test starts with an all-enabled command set and the color palette."""
    command_set.set_commands(command_set.CommandSet.all_enabled())
    command_set.clear_command_set_changed()
    reset_app_palette()
    yield
    command_set.set_commands(command_set.CommandSet.all_enabled())
    command_set.clear_command_set_changed()
    reset_app_palette()


@pytest.fixture
def config(tmp_path):
    return Config(backend="mock", dump_dir=str(tmp_path), flash_duration=0.0, poll_timeout=0.0)


@pytest.fixture
def backend():
    return MockBackend(40, 12)


@pytest.fixture
def terminal(backend, config):
    term = Terminal(backend, config)
    term.init()
    return term


@pytest.fixture
def app(backend, config):
    application = Application(config, backend)
    yield application
    application.shutdown()
