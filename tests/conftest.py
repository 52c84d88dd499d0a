import pytest

from custombullets.core.plugin import CustomBulletsPlugin, EditorHost
from custombullets.core.settings_store import SettingsStore


class FakeHost(EditorHost):
    """Records what the plugin asks of the host."""

    def __init__(self):
        self.processors = []
        self.commands = {}
        self.statuses = []
        self.refresh_count = 0

    def register_line_processor(self, processor):
        self.processors.append(processor)

    def unregister_line_processor(self, processor):
        self.processors.remove(processor)

    def register_command(self, command_id, name, callback):
        self.commands[command_id] = (name, callback)

    def set_status(self, text):
        self.statuses.append(text)

    def refresh(self):
        self.refresh_count += 1

    def render(self, text):
        lines = []
        for line in text.split("\n"):
            for processor in self.processors:
                line = processor(line)
            lines.append(line)
        return "\n".join(lines)


@pytest.fixture
def settings_path(tmp_path):
    return tmp_path / "settings.json"


@pytest.fixture
def store(settings_path):
    store = SettingsStore(settings_path)
    yield store
    store.close()


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def plugin(host, store):
    plugin = CustomBulletsPlugin(host)
    handle = plugin.start(store)
    yield plugin
    plugin.stop(handle)
