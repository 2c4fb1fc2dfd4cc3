"""Shared fixtures."""

import pytest

from dockprov.errors import CommandExecutionFailure
from dockprov.providers.docker import DockerProvider
from dockprov.utils.process import CommandResult


class FakeRunner:
    """Command runner that records commands and returns scripted results."""

    def __init__(self):
        self.commands = []
        self.responses = []

    def respond(self, fragment, stdout="", returncode=0, stderr=""):
        """Script the result of any command whose text contains ``fragment``."""
        self.responses.append((fragment, CommandResult(returncode, stdout, stderr)))

    async def run(self, cmd, check=True):
        self.commands.append(list(cmd))
        line = " ".join(cmd)

        result = CommandResult(returncode=0)
        for fragment, scripted in self.responses:
            if fragment in line:
                result = scripted
                break

        if check and result.returncode != 0:
            raise CommandExecutionFailure(list(cmd), result.returncode, result.stdout, result.stderr)
        return result

    @property
    def lines(self):
        """Recorded commands joined with spaces."""
        return [" ".join(cmd) for cmd in self.commands]


def listing_with_ports(*ports):
    """A ``docker container ls -a`` output forwarding ``ports`` to 22."""
    header = "CONTAINER ID   IMAGE      COMMAND   CREATED   STATUS   PORTS   NAMES\n"
    rows = [
        f"{port:012x}   debian:9   \"bash\"   1 min ago   Up   0.0.0.0:{port}->22/tcp   debian_9-{port}\n"
        for port in ports
    ]
    return header + "".join(rows)


@pytest.fixture
def fake_runner():
    """Fresh fake runner."""
    return FakeRunner()


@pytest.fixture
def docker(fake_runner):
    """Docker provider backed by the fake runner."""
    return DockerProvider(runner=fake_runner)


@pytest.fixture
def make_listing():
    """Builder for fake container listings."""
    return listing_with_ports
