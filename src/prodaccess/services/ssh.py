# prodaccess/services/ssh.py

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from prodaccess.constants import CONSUMER_SSH, MODE_OWNER_RW, SSH_ADD_BIN, SSH_CERT_SUFFIX
from prodaccess.models.credentials import KnownHostsEntry, SSHCertificate
from prodaccess.models.results import ActivationResult
from prodaccess.services.activator import Activator
from prodaccess.services.errors import KeyReadError, MaterialIOError
from prodaccess.utils.files import append_bytes, read_bytes, read_text, write_bytes

log = logging.getLogger(__name__)


def private_key_path(cert_path: Path) -> Optional[Path]:
    """
    Derive the private key path from an OpenSSH certificate path.

    ``~/.ssh/id_ecdsa-cert.pub`` -> ``~/.ssh/id_ecdsa``. Returns None when
    the path does not follow the ``-cert.pub`` convention.
    """
    name = cert_path.name

    if not name.endswith(SSH_CERT_SUFFIX) or name == SSH_CERT_SUFFIX:
        return None

    return cert_path.with_name(name[:-len(SSH_CERT_SUFFIX)])


def describe_public_key(public_key: str) -> str:
    """ Key type and comment of an OpenSSH public key line, without the key data """
    fields = public_key.split()

    if len(fields) < 2:
        return "<unrecognised key>"

    return " ".join([fields[0]] + fields[2:])


def ensure_known_hosts_entry(path: Path, entry: KnownHostsEntry) -> bool:
    """
    Append a trust line to known_hosts unless it is already present.

    Existing lines are never rewritten. The file must already exist.

    Returns:
        bool: True if the line was appended, False if it was already there.

    Raises:
        MaterialIOError: if the file cannot be read or appended to.
    """
    content = read_bytes(path)
    line = entry.line.encode("utf-8")

    if line in content:
        log.info("Skipping SSH known hosts, already exists")
        return False

    log.info("Adding server identity to SSH known hosts")

    prefix = b"\n" if content and not content.endswith(b"\n") else b""
    append_bytes(path, prefix + line + b"\n")

    return True


class SSHActivator(Activator[SSHCertificate]):
    """ Install a signed SSH certificate and reload it into the agent """
    consumer = CONSUMER_SSH

    def read_public_key(self) -> str:
        """
        Return the SSH public key that the certificate is issued for.

        Raises:
            KeyReadError: if the key is missing or unreadable.
        """
        try:
            return read_text(self.config.ssh_pubkey)
        except MaterialIOError as e:
            raise KeyReadError(f"Could not read SSH public key: {e}") from e

    def _activate(self, credential: SSHCertificate, warnings: List[str]) -> ActivationResult:
        """ The public key must be readable; without it there is no key pair to reload """
        public_key = self.read_public_key()
        log.info("Installing SSH certificate for key %s", describe_public_key(public_key))

        cert_path = self.config.ssh_cert
        write_bytes(cert_path, credential.text.encode("utf-8"), mode=MODE_OWNER_RW)
        log.info("Wrote SSH certificate to %s", cert_path)

        try:
            ensure_known_hosts_entry(self.config.ssh_known_hosts, self.config.cert_authority)
        except MaterialIOError as e:
            warnings.append(f"known hosts not updated: {e}")

        key_path = private_key_path(cert_path)

        if key_path is None:
            warnings.append(
                f"cannot derive private key from {cert_path} (expected *{SSH_CERT_SUFFIX}); run ssh-add manually"
            )
        else:
            # OpenSSH only loads a new certificate when its private key is added again
            res = self.runner.run([SSH_ADD_BIN, str(key_path)])
            if not res.ok:
                warnings.append(
                    f"ssh-add {key_path} failed ({res.diagnostics or res.returncode}); run it manually"
                )

        return ActivationResult.success(self.consumer, f"certificate written to {cert_path}", warnings)
