"""Shared fixtures for prodaccess unit tests."""

import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from prodaccess.models.config import MaterializerConfig
from prodaccess.models.credentials import ClientCertKeyPair
from prodaccess.services.runner import CommandResult, CommandRunner


class FakeRunner(CommandRunner):
    """Command runner that records invocations instead of spawning processes."""

    def __init__(self, installed=("ssh-add", "kubectl", "openssl"), results=None, on_run=None):
        super().__init__(timeout=1)
        self.installed = set(installed)
        self.results = dict(results or {})
        self.on_run = on_run
        self.calls = []

    def which(self, binary):
        return binary if binary in self.installed else None

    def run(self, command):
        args = tuple(str(c) for c in command)
        self.calls.append(args)

        if self.on_run is not None:
            self.on_run(args)

        returncode, stdout, stderr = self.results.get(args[0], (0, "", ""))
        return CommandResult(args, returncode, stdout=stdout, stderr=stderr)

    def calls_for(self, binary):
        return [c for c in self.calls if c[0] == binary]


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def private_tmp(tmp_path, monkeypatch):
    """Point tempfile at an empty directory so leftovers can be counted."""
    directory = tmp_path / "tmp"
    directory.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(directory))
    return directory


@pytest.fixture
def undeletable_tmp(private_tmp, monkeypatch):
    """Make files under the private temp directory fail to unlink."""
    unlink = Path.unlink

    def failing_unlink(self, *args, **kwargs):
        if self.parent == private_tmp:
            raise PermissionError(13, "Permission denied", str(self))
        return unlink(self, *args, **kwargs)

    monkeypatch.setattr(Path, "unlink", failing_unlink)
    return private_tmp


@pytest.fixture
def home(tmp_path):
    directory = tmp_path / "home"
    (directory / ".ssh").mkdir(parents=True)
    return directory


@pytest.fixture
def config(home):
    return MaterializerConfig(
        ssh_pubkey=home / ".ssh" / "id_ecdsa.pub",
        ssh_cert=home / ".ssh" / "id_ecdsa-cert.pub",
        ssh_known_hosts=home / ".ssh" / "known_hosts",
        vault_token=home / ".vault-token",
        vmware_cert_path=home / "vmware-user.pfx",
        browser_cert_path=home / "browser-user.pfx",
    )


def make_client_pair(common_name="alice", days=1):
    """Generate a self-signed EC certificate and matching key as PEM."""
    key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.now(timezone.utc)

    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=2))
        .not_valid_after(now + timedelta(days=days))
        .sign(key, hashes.SHA256())
    )

    cert_pem = cert.public_bytes(serialization.Encoding.PEM)
    key_pem = key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )
    return ClientCertKeyPair(cert=cert_pem, key=key_pem)


@pytest.fixture
def client_pair():
    return make_client_pair()


@pytest.fixture
def pair_factory():
    return make_client_pair
