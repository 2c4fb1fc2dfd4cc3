"""Tests for per-family SSH bootstrap and hardening."""

import pytest

from dockprov.errors import CommandExecutionFailure, UnsupportedPlatform
from dockprov.models.platform import Family
from dockprov.platforms.debian import DebianHandler
from dockprov.platforms.fedora import FedoraHandler
from dockprov.platforms.redhat import RedHatHandler
from dockprov.platforms.registry import PlatformRegistry
from dockprov.platforms.sles import SlesHandler
from dockprov.platforms.archlinux import ArchLinuxHandler


SSHD_EDITS = [
    'sed -ri s/^#?PermitRootLogin .*/PermitRootLogin yes/ /etc/ssh/sshd_config',
    'sed -ri s/^#?PasswordAuthentication .*/PasswordAuthentication yes/ /etc/ssh/sshd_config',
    'sed -ri s/^#?UseDNS .*/UseDNS no/ /etc/ssh/sshd_config',
    'sed -e /HostKey.*ssh_host_e.*_key/ s/^#*/#/ -ri /etc/ssh/sshd_config',
]

COMMON_TAIL = [
    "mkdir -p /var/run/sshd",
    "bash -c echo root:root | /usr/sbin/chpasswd",
]


def exec_lines(runner, container):
    """Recorded commands with the ``docker exec <container>`` prefix removed."""
    prefix = f"docker exec {container} "
    return [line[len(prefix):] for line in runner.lines if line.startswith(prefix)]


@pytest.mark.asyncio
class TestInstallSsh:
    """Test bootstrap command sequences."""

    async def test_debian_sequence(self, docker, fake_runner):
        """Test debian drops the ESM list then installs openssh."""
        await DebianHandler(docker).install_ssh("9", "debian_9-2222")

        assert exec_lines(fake_runner, "debian_9-2222") == [
            "rm -f /etc/apt/sources.list.d/ubuntu-esm-infra-trusty.list",
            "apt-get update",
            "apt-get install -y openssh-server openssh-client",
        ] + COMMON_TAIL

    async def test_fedora_sequence(self, docker, fake_runner):
        """Test fedora cleans the cache, installs and generates keys."""
        await FedoraHandler(docker).install_ssh("31", "fedora_31-2222")

        assert exec_lines(fake_runner, "fedora_31-2222") == [
            "dnf clean all",
            "dnf install -y sudo openssh-server openssh-clients",
            "ssh-keygen -A",
        ] + COMMON_TAIL

    async def test_redhat_6_rebuilds_rpmdb_before_install(self, docker, fake_runner):
        """Test the rpmdb recovery runs ahead of the package install."""
        await RedHatHandler(docker).install_ssh("6", "redhat_6-2222")

        first = fake_runner.commands[0]
        assert first[:5] == ["docker", "exec", "redhat_6-2222", "bash", "-exc"]
        script = first[5]
        assert script.index("rm -f /var/lib/rpm/__db*") < script.index("rpm --rebuilddb")
        assert script.index("rpm --rebuilddb") < script.index("yum clean all")
        assert script.index("yum clean all") < script.index("yum install -y sudo openssh-server openssh-clients")

    async def test_redhat_7_skips_rpmdb_recovery(self, docker, fake_runner):
        """Test other versions install directly."""
        await RedHatHandler(docker).install_ssh("7", "redhat_7-2222")

        lines = exec_lines(fake_runner, "redhat_7-2222")
        assert lines[0] == "yum install -y sudo openssh-server openssh-clients"
        assert not any("rebuilddb" in line for line in fake_runner.lines)

    async def test_redhat_generates_missing_keys(self, docker, fake_runner):
        """Test both host keys are generated when /etc/ssh has none."""
        fake_runner.respond("ls /etc/ssh/", stdout="moduli\nssh_config\nsshd_config\n")

        await RedHatHandler(docker).install_ssh("7", "redhat_7-2222")

        assert exec_lines(fake_runner, "redhat_7-2222") == [
            "yum install -y sudo openssh-server openssh-clients",
            "ls /etc/ssh/",
            "ssh-keygen -t rsa -f /etc/ssh/ssh_host_rsa_key -N ",
            "ssh-keygen -t dsa -f /etc/ssh/ssh_host_dsa_key -N ",
        ] + COMMON_TAIL

    async def test_redhat_skips_existing_keys(self, docker, fake_runner):
        """Test existing host keys are not regenerated."""
        fake_runner.respond(
            "ls /etc/ssh/",
            stdout="ssh_host_rsa_key\nssh_host_rsa_key.pub\nsshd_config\n",
        )

        await RedHatHandler(docker).install_ssh("7", "redhat_7-2222")

        keygens = [cmd for cmd in fake_runner.commands if "ssh-keygen" in cmd]
        assert len(keygens) == 1
        assert "dsa" in keygens[0]

    async def test_redhat_no_keygen_when_all_present(self, docker, fake_runner):
        """Test re-running with every key present generates nothing."""
        fake_runner.respond(
            "ls /etc/ssh/",
            stdout="ssh_host_dsa_key\nssh_host_rsa_key\n",
        )

        await RedHatHandler(docker).install_ssh("7", "redhat_7-2222")

        assert not any("ssh-keygen" in cmd for cmd in fake_runner.commands)

    async def test_sles_always_generates_keys(self, docker, fake_runner):
        """Test sles regenerates keys and disables PAM."""
        await SlesHandler(docker).install_ssh("15", "sles_15-2222")

        assert exec_lines(fake_runner, "sles_15-2222") == [
            "zypper -n in openssh",
            "ssh-keygen -t rsa -f /etc/ssh/ssh_host_rsa_key -N ",
            "ssh-keygen -t dsa -f /etc/ssh/ssh_host_dsa_key -N ",
            "sed -ri s/^#?UsePAM .*/UsePAM no/ /etc/ssh/sshd_config",
        ] + COMMON_TAIL

    async def test_archlinux_sequence(self, docker, fake_runner):
        """Test archlinux upgrades, installs and enables sshd."""
        await ArchLinuxHandler(docker).install_ssh("latest", "archlinux_latest-2222")

        assert exec_lines(fake_runner, "archlinux_latest-2222") == [
            "pacman --noconfirm -Sy archlinux-keyring",
            "pacman --noconfirm -Syu",
            "pacman -S --noconfirm openssh",
            "ssh-keygen -A",
            "sed -ri s/^#?UsePAM .*/UsePAM no/ /etc/ssh/sshd_config",
            "systemctl enable sshd",
        ] + COMMON_TAIL

    async def test_failure_aborts_sequence(self, docker, fake_runner):
        """Test a failing step stops the remaining steps."""
        fake_runner.respond("apt-get update", returncode=100, stderr="E: network")

        with pytest.raises(CommandExecutionFailure) as exc_info:
            await DebianHandler(docker).install_ssh("9", "debian_9-2222")

        assert exc_info.value.returncode == 100
        assert "E: network" in str(exc_info.value)
        assert fake_runner.lines[-1] == "docker exec debian_9-2222 apt-get update"


@pytest.mark.asyncio
class TestHardenSsh:
    """Test sshd configuration and restart."""

    async def test_debian_restarts_service(self, docker, fake_runner):
        """Test debian edits sshd_config then restarts ssh."""
        await DebianHandler(docker).harden_ssh("debian_9-2222")

        assert exec_lines(fake_runner, "debian_9-2222") == SSHD_EDITS + ["service ssh restart"]

    async def test_redhat_legacy_restarts_service(self, docker, fake_runner):
        """Test names without 7 or 8 use the service manager."""
        await RedHatHandler(docker).harden_ssh("redhat_6-2222")

        assert fake_runner.lines[-1] == "docker exec redhat_6-2222 service sshd restart"

    async def test_redhat_modern_runs_sshd_detached(self, docker, fake_runner):
        """Test names containing 7 or 8 launch sshd directly."""
        await RedHatHandler(docker).harden_ssh("redhat_7-2222")

        assert fake_runner.lines[-1] == "docker exec -d redhat_7-2222 /usr/sbin/sshd -D"

    async def test_redhat_match_includes_port(self, docker, fake_runner):
        """Test the 7/8 check looks at the whole container name."""
        await RedHatHandler(docker).harden_ssh("redhat_6-2227")

        assert fake_runner.lines[-1] == "docker exec -d redhat_6-2227 /usr/sbin/sshd -D"

    @pytest.mark.parametrize("handler_class,container", [
        (FedoraHandler, "fedora_31-2222"),
        (SlesHandler, "sles_15-2222"),
        (ArchLinuxHandler, "archlinux_latest-2222"),
    ])
    async def test_other_families_run_sshd_detached(self, docker, fake_runner, handler_class, container):
        """Test families without a service restart launch sshd directly."""
        await handler_class(docker).harden_ssh(container)

        assert exec_lines(fake_runner, container) == SSHD_EDITS
        assert fake_runner.lines[-1] == f"docker exec -d {container} /usr/sbin/sshd -D"


class TestPlatformRegistry:
    """Test family to handler dispatch."""

    def test_every_family_has_handler(self, docker):
        registry = PlatformRegistry(docker)

        for family in Family:
            assert registry.get_handler(family).family == family

    def test_handler_is_cached(self, docker):
        registry = PlatformRegistry(docker)

        assert registry.get_handler("debian") is registry.get_handler(Family.DEBIAN)
        assert isinstance(registry.get_handler("debian"), DebianHandler)

    def test_unknown_family_is_unsupported(self, docker):
        registry = PlatformRegistry(docker)

        with pytest.raises(UnsupportedPlatform) as exc_info:
            registry.get_handler("solaris")

        assert exc_info.value.platform == "solaris"

    def test_list_families(self, docker):
        registry = PlatformRegistry(docker)

        assert registry.list_families() == ["debian", "fedora", "redhat", "sles", "archlinux"]
