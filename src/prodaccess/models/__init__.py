# prodaccess/models/__init__.py

from prodaccess.models.credentials import (
    ClientCertKeyPair,
    CredentialMaterial,
    KnownHostsEntry,
    SecretToken,
    SSHCertificate,
)
from prodaccess.models.results import ActivationResult, Outcome
from prodaccess.models.config import MaterializerConfig

__all__ = [
    "ActivationResult",
    "ClientCertKeyPair",
    "CredentialMaterial",
    "KnownHostsEntry",
    "MaterializerConfig",
    "Outcome",
    "SecretToken",
    "SSHCertificate",
]
