# prodaccess/models/config.py

from __future__ import annotations

import os
from argparse import Namespace
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from prodaccess.constants import (
    DEFAULT_CERT_AUTHORITY,
    DEFAULT_KUBE_PROFILE,
    DEFAULT_PATHS,
    DEFAULT_TOOL_TIMEOUT,
)
from prodaccess.models.credentials import KnownHostsEntry
from prodaccess.services.errors import ConfigError


def expand_path(value: str | os.PathLike) -> Path:
    """ Expand $VARS and ~ in a configured path """
    return Path(os.path.expanduser(os.path.expandvars(os.fspath(value))))


class MaterializerConfig(BaseModel):
    """
    Immutable configuration for the credential materializer.

    Every path is expanded for environment variables and ``~`` at
    construction time, so consumers only ever see concrete paths.
    """
    model_config = ConfigDict(frozen=True)

    ssh_pubkey: Path = Field(default_factory=lambda: expand_path(DEFAULT_PATHS['ssh_pubkey']))
    ssh_cert: Path = Field(default_factory=lambda: expand_path(DEFAULT_PATHS['ssh_cert']))
    ssh_known_hosts: Path = Field(default_factory=lambda: expand_path(DEFAULT_PATHS['ssh_known_hosts']))
    vault_token: Path = Field(default_factory=lambda: expand_path(DEFAULT_PATHS['vault_token']))
    vmware_cert_path: Path = Field(default_factory=lambda: expand_path(DEFAULT_PATHS['vmware_cert_path']))
    browser_cert_path: Path = Field(default_factory=lambda: expand_path(DEFAULT_PATHS['browser_cert_path']))

    cert_authority: KnownHostsEntry = Field(
        default_factory=lambda: KnownHostsEntry.parse(DEFAULT_CERT_AUTHORITY)
    )
    kube_profile: str = DEFAULT_KUBE_PROFILE
    tool_timeout: float = Field(default=DEFAULT_TOOL_TIMEOUT, gt=0)

    @field_validator(
        "ssh_pubkey",
        "ssh_cert",
        "ssh_known_hosts",
        "vault_token",
        "vmware_cert_path",
        "browser_cert_path",
        mode="before",
    )
    @classmethod
    def _expand(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("path must not be empty")
        return expand_path(value)

    @field_validator("cert_authority", mode="before")
    @classmethod
    def _parse_cert_authority(cls, value):
        if isinstance(value, str):
            return KnownHostsEntry.parse(value)
        return value

    @field_validator("kube_profile")
    @classmethod
    def _check_profile(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("kubectl profile name must not be empty")
        return value

    @classmethod
    def from_args(cls, args: Namespace) -> "MaterializerConfig":
        """ Build from parsed CLI arguments; unset options keep their defaults """
        fields = cls.model_fields.keys()
        data = {k: v for k, v in vars(args).items() if k in fields and v is not None}

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e
