import pytest


class FakeRunner:
    """Records every command instead of spawning it."""

    def __init__(self, stdout="", path="/usr/bin/dnf"):
        self.stdout = stdout
        self.path = path
        self.calls = []
        self.lookups = []

    def look_path(self, name):
        self.lookups.append(name)
        return self.path

    def run(self, argv, output=None):
        self.calls.append((list(argv), output))
        return self.stdout


@pytest.fixture
def runner():
    return FakeRunner()
