# prodaccess/models/credentials.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

CERT_AUTHORITY_MARKER = "@cert-authority"


def _as_bytes(data: Union[str, bytes]) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else data


@dataclass(frozen=True)
class KnownHostsEntry:
    """A ``@cert-authority`` trust line for a known_hosts file."""
    host_pattern: str
    key_type: str
    public_key: str
    comment: str = ""

    @classmethod
    def parse(cls, line: str) -> "KnownHostsEntry":
        parts = line.strip().split(None, 4)

        if len(parts) < 4 or parts[0] != CERT_AUTHORITY_MARKER:
            raise ValueError(
                f"Expected '{CERT_AUTHORITY_MARKER} <hosts> <key-type> <key> [comment]', got {line!r}"
            )

        comment = parts[4] if len(parts) == 5 else ""
        return cls(host_pattern=parts[1], key_type=parts[2], public_key=parts[3], comment=comment)

    @property
    def line(self) -> str:
        fields = [CERT_AUTHORITY_MARKER, self.host_pattern, self.key_type, self.public_key]
        if self.comment:
            fields.append(self.comment)
        return " ".join(fields)

    def __str__(self) -> str:
        return self.line


@dataclass(frozen=True)
class SSHCertificate:
    text: str

    def __post_init__(self):
        if isinstance(self.text, bytes):
            object.__setattr__(self, "text", self.text.decode("utf-8"))


@dataclass(frozen=True)
class SecretToken:
    value: str

    def __repr__(self) -> str:
        return "SecretToken(value=<redacted>)"


@dataclass(frozen=True)
class ClientCertKeyPair:
    """ PEM certificate and private key destined for one consumer """
    cert: bytes
    key: bytes = field(repr=False)

    def __post_init__(self):
        object.__setattr__(self, "cert", _as_bytes(self.cert))
        object.__setattr__(self, "key", _as_bytes(self.key))


@dataclass(frozen=True)
class CredentialMaterial:
    """
    Everything the authentication exchange handed back.

    Any field may be None when the exchange did not issue that credential;
    the matching consumer is then left untouched.
    """
    ssh_certificate: Optional[SSHCertificate] = None
    vault_token: Optional[SecretToken] = None
    kubernetes: Optional[ClientCertKeyPair] = None
    vmware: Optional[ClientCertKeyPair] = None
    browser: Optional[ClientCertKeyPair] = None
