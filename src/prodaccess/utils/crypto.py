# prodaccess/utils/crypto.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Union

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization

from prodaccess.utils.datetime import format_datetime, now_utc


@dataclass(frozen=True)
class CertificateSummary:
    subject: str
    issuer: str
    not_after: datetime

    @property
    def expired(self) -> bool:
        return now_utc() > self.not_after

    def __str__(self) -> str:
        return f"{self.subject} (valid until {format_datetime(self.not_after)})"


def load_certificate_pem(pem: Union[str, bytes]) -> x509.Certificate:
    """
    Load a PEM-encoded certificate into a cryptography.x509.Certificate.

    Args:
        pem: Certificate bytes or UTF-8 string containing a PEM block.

    Returns:
        x509.Certificate

    Raises:
        ValueError: If the data is missing, not PEM, or cannot be parsed.
    """
    if pem is None:
        raise ValueError("No certificate data provided.")

    data = pem.encode("utf-8") if isinstance(pem, str) else pem
    data = data.strip()

    header = b"-----BEGIN CERTIFICATE-----"
    footer = b"-----END CERTIFICATE-----"
    if header not in data or footer not in data:
        raise ValueError("Certificate must be PEM with BEGIN/END CERTIFICATE markers.")

    try:
        return x509.load_pem_x509_certificate(data)
    except ValueError as exc:
        raise ValueError("Failed to parse PEM certificate.") from exc

def summarise_certificate(pem: Union[str, bytes]) -> CertificateSummary:
    certificate = load_certificate_pem(pem)

    return CertificateSummary(
        subject=certificate.subject.rfc4514_string(),
        issuer=certificate.issuer.rfc4514_string(),
        not_after=certificate.not_valid_after_utc,
    )

def key_matches_certificate(cert_pem: bytes, key_pem: bytes) -> bool:
    """
    Check that a PEM private key belongs to a PEM certificate.

    Raises:
        ValueError: if either input cannot be parsed.
    """
    certificate = load_certificate_pem(cert_pem)

    try:
        private_key = serialization.load_pem_private_key(key_pem, password=None)
    except (TypeError, ValueError, UnsupportedAlgorithm) as exc:
        raise ValueError("Failed to parse PEM private key.") from exc

    fmt = serialization.PublicFormat.SubjectPublicKeyInfo
    enc = serialization.Encoding.DER

    return (certificate.public_key().public_bytes(enc, fmt)
            == private_key.public_key().public_bytes(enc, fmt))

def inspect_client_pair(cert_pem: bytes, key_pem: bytes) -> List[str]:
    """
    Sanity check a certificate/key pair before handing it to a consumer.

    The consumer's own tool remains the authority on what it accepts, so
    problems are returned as warnings rather than raised.
    """
    warnings: List[str] = []

    try:
        summary = summarise_certificate(cert_pem)
    except ValueError as exc:
        warnings.append(f"certificate could not be inspected: {exc}")
        return warnings

    if summary.expired:
        warnings.append(f"certificate for {summary.subject} expired {format_datetime(summary.not_after)}")

    try:
        if not key_matches_certificate(cert_pem, key_pem):
            warnings.append(f"private key does not match certificate for {summary.subject}")
    except ValueError as exc:
        warnings.append(str(exc))

    return warnings
