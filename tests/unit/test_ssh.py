"""Unit tests for prodaccess.services.ssh module."""

import logging
from pathlib import Path

import pytest

from prodaccess.models.credentials import KnownHostsEntry, SSHCertificate
from prodaccess.models.results import Outcome
from prodaccess.services.errors import ErrorKind, KeyReadError, MaterialIOError
from prodaccess.services.ssh import (
    SSHActivator,
    describe_public_key,
    ensure_known_hosts_entry,
    private_key_path,
)
from prodaccess.utils.files import file_mode

CERT_TEXT = "ssh-ecdsa-cert-v01 AAAA... user@host"
EXISTING_HOSTS = "github.com ssh-ed25519 AAAAC3NzaC1lZDI1NTE5AAAAIOMqqnkVzrm0SdG6UOoqKLsabgH5C9okWi0dh2l9GKJl\n"


@pytest.fixture
def ssh_home(config):
    config.ssh_pubkey.write_text("ecdsa-sha2-nistp521 AAAAE2Vj user@host\n")
    config.ssh_known_hosts.write_text(EXISTING_HOSTS)
    return config


class TestPrivateKeyPath:

    def test_strips_cert_suffix(self):
        assert private_key_path(Path("/home/a/.ssh/id_ecdsa-cert.pub")) == Path("/home/a/.ssh/id_ecdsa")

    def test_unconventional_name(self):
        assert private_key_path(Path("/home/a/.ssh/mycert")) is None

    def test_suffix_only(self):
        assert private_key_path(Path("/home/a/.ssh/-cert.pub")) is None


class TestEnsureKnownHostsEntry:

    def test_appends_once(self, tmp_path):
        path = tmp_path / "known_hosts"
        path.write_text(EXISTING_HOSTS)
        entry = KnownHostsEntry.parse("@cert-authority *.example.com ssh-ed25519 AAAAC3 ca@example.com")

        assert ensure_known_hosts_entry(path, entry) is True
        assert ensure_known_hosts_entry(path, entry) is False

        content = path.read_text()
        assert content.count(entry.line) == 1
        assert content == EXISTING_HOSTS + entry.line + "\n"

    def test_adds_newline_to_unterminated_file(self, tmp_path):
        path = tmp_path / "known_hosts"
        path.write_text("host1 ssh-rsa AAAAB3")
        entry = KnownHostsEntry.parse("@cert-authority *.example.com ssh-ed25519 AAAAC3")

        ensure_known_hosts_entry(path, entry)

        assert path.read_text() == "host1 ssh-rsa AAAAB3\n" + entry.line + "\n"

    def test_missing_file_raises(self, tmp_path):
        entry = KnownHostsEntry.parse("@cert-authority *.example.com ssh-ed25519 AAAAC3")

        with pytest.raises(MaterialIOError):
            ensure_known_hosts_entry(tmp_path / "known_hosts", entry)

        assert not (tmp_path / "known_hosts").exists()

    def test_non_utf8_content_is_preserved(self, tmp_path):
        path = tmp_path / "known_hosts"
        original = b"h\xe9te.example ssh-rsa AAAAB3\n"
        path.write_bytes(original)
        entry = KnownHostsEntry.parse("@cert-authority *.example.com ssh-ed25519 AAAAC3")

        assert ensure_known_hosts_entry(path, entry) is True
        assert ensure_known_hosts_entry(path, entry) is False

        assert path.read_bytes() == original + entry.line.encode() + b"\n"


class TestDescribePublicKey:

    def test_drops_key_data(self):
        assert describe_public_key("ecdsa-sha2-nistp521 AAAAE2Vj user@host\n") == "ecdsa-sha2-nistp521 user@host"

    def test_without_comment(self):
        assert describe_public_key("ssh-ed25519 AAAAC3") == "ssh-ed25519"

    def test_garbage(self):
        assert describe_public_key("nonsense") == "<unrecognised key>"


class TestSSHActivator:

    def test_writes_certificate_and_trust_line(self, ssh_home, fake_runner):
        result = SSHActivator(ssh_home, fake_runner).activate(SSHCertificate(CERT_TEXT))

        assert result.outcome is Outcome.OK
        assert result.warnings == ()
        assert ssh_home.ssh_cert.read_text() == CERT_TEXT
        assert ssh_home.ssh_known_hosts.read_text() == (
            EXISTING_HOSTS + ssh_home.cert_authority.line + "\n"
        )

    def test_certificate_not_group_or_world_writable(self, ssh_home, fake_runner):
        SSHActivator(ssh_home, fake_runner).activate(SSHCertificate(CERT_TEXT))

        assert file_mode(ssh_home.ssh_cert) & 0o022 == 0

    def test_certificate_replaced_verbatim(self, ssh_home, fake_runner):
        ssh_home.ssh_cert.write_text("old certificate")
        activator = SSHActivator(ssh_home, fake_runner)

        activator.activate(SSHCertificate(CERT_TEXT + "\n"))

        assert ssh_home.ssh_cert.read_bytes() == (CERT_TEXT + "\n").encode()

    def test_running_twice_keeps_single_trust_line(self, ssh_home, fake_runner):
        activator = SSHActivator(ssh_home, fake_runner)

        activator.activate(SSHCertificate(CERT_TEXT))
        activator.activate(SSHCertificate(CERT_TEXT))

        assert ssh_home.ssh_known_hosts.read_text().count(ssh_home.cert_authority.line) == 1

    def test_reloads_private_key_into_agent(self, ssh_home, fake_runner):
        SSHActivator(ssh_home, fake_runner).activate(SSHCertificate(CERT_TEXT))

        assert fake_runner.calls == [("ssh-add", str(ssh_home.ssh_cert.parent / "id_ecdsa"))]

    def test_agent_failure_is_a_warning(self, ssh_home, fake_runner):
        fake_runner.results["ssh-add"] = (2, "", "Could not open a connection to your authentication agent.")

        result = SSHActivator(ssh_home, fake_runner).activate(SSHCertificate(CERT_TEXT))

        assert result.ok
        assert len(result.warnings) == 1
        assert "authentication agent" in result.warnings[0]

    def test_missing_known_hosts_is_a_warning(self, ssh_home, fake_runner):
        ssh_home.ssh_known_hosts.unlink()

        result = SSHActivator(ssh_home, fake_runner).activate(SSHCertificate(CERT_TEXT))

        assert result.ok
        assert any("known hosts" in w for w in result.warnings)
        assert not ssh_home.ssh_known_hosts.exists()
        assert ssh_home.ssh_cert.read_text() == CERT_TEXT

    def test_logs_key_being_certified(self, ssh_home, fake_runner, caplog):
        with caplog.at_level(logging.INFO, logger="prodaccess.services.ssh"):
            SSHActivator(ssh_home, fake_runner).activate(SSHCertificate(CERT_TEXT))

        assert "for key ecdsa-sha2-nistp521 user@host" in caplog.text
        assert "AAAAE2Vj" not in caplog.text

    def test_unconventional_cert_path_skips_agent(self, ssh_home, fake_runner):
        config = ssh_home.model_copy(update={"ssh_cert": ssh_home.ssh_cert.parent / "signed.pub"})

        result = SSHActivator(config, fake_runner).activate(SSHCertificate(CERT_TEXT))

        assert result.ok
        assert fake_runner.calls == []
        assert any("ssh-add" in w for w in result.warnings)

    def test_missing_public_key_fails(self, config, fake_runner):
        result = SSHActivator(config, fake_runner).activate(SSHCertificate(CERT_TEXT))

        assert result.outcome is Outcome.FAILED
        assert result.kind is ErrorKind.KEY_READ
        assert not config.ssh_cert.exists()
        assert fake_runner.calls == []

    def test_read_public_key(self, ssh_home, fake_runner):
        key = SSHActivator(ssh_home, fake_runner).read_public_key()

        assert key.startswith("ecdsa-sha2-nistp521 ")

    def test_read_public_key_missing(self, config, fake_runner):
        with pytest.raises(KeyReadError):
            SSHActivator(config, fake_runner).read_public_key()

    def test_unwritable_certificate_path_fails(self, ssh_home, fake_runner):
        config = ssh_home.model_copy(update={"ssh_cert": ssh_home.ssh_cert.parent / "nope" / "id-cert.pub"})

        result = SSHActivator(config, fake_runner).activate(SSHCertificate(CERT_TEXT))

        assert result.kind is ErrorKind.IO
        assert fake_runner.calls == []
