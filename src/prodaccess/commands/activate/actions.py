# prodaccess/commands/activate/actions.py

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, model_validator

from prodaccess import __title__, __version__
from prodaccess.commands.helpers import prune_opts
from prodaccess.constants import (
    COLOUR_BRIGHT,
    COLOUR_RESET,
    EXIT_OK,
)
from prodaccess.models.app import App
from prodaccess.models.credentials import (
    ClientCertKeyPair,
    CredentialMaterial,
    SecretToken,
    SSHCertificate,
)
from prodaccess.models.results import ActivationResult
from prodaccess.utils.files import read_bytes, read_text
from prodaccess.utils.formatting import banner, error, print_result, status, warning

log = logging.getLogger(__name__)


class ActivateOptions(BaseModel):
    ssh_certificate: Optional[Path] = None
    vault_token_file: Optional[Path] = None
    kube_cert: Optional[Path] = None
    kube_key: Optional[Path] = None
    vmware_cert: Optional[Path] = None
    vmware_key: Optional[Path] = None
    browser_cert: Optional[Path] = None
    browser_key: Optional[Path] = None

    @model_validator(mode="after")
    def _check_pairs(self) -> "ActivateOptions":
        for name in ("kube", "vmware", "browser"):
            cert = getattr(self, f"{name}_cert")
            key = getattr(self, f"{name}_key")
            if (cert is None) != (key is None):
                raise ValueError(f"--{name}-cert and --{name}-key must be given together")

        if all(v is None for v in self.model_dump().values()):
            raise ValueError("no credential material given")

        return self

    def load(self) -> CredentialMaterial:
        """
        Read every given file into credential material.

        Raises:
            MaterialIOError: if any input cannot be read.
        """
        def pair(cert: Optional[Path], key: Optional[Path]) -> Optional[ClientCertKeyPair]:
            if cert is None:
                return None
            return ClientCertKeyPair(cert=read_bytes(cert), key=read_bytes(key))

        ssh = SSHCertificate(read_text(self.ssh_certificate)) if self.ssh_certificate else None
        token = SecretToken(read_text(self.vault_token_file).strip()) if self.vault_token_file else None

        return CredentialMaterial(
            ssh_certificate=ssh,
            vault_token=token,
            kubernetes=pair(self.kube_cert, self.kube_key),
            vmware=pair(self.vmware_cert, self.vmware_key),
            browser=pair(self.browser_cert, self.browser_key),
        )


def report_results(results: List[ActivationResult]) -> None:
    """ Print a status line per consumer and one diagnostic line per problem """
    for result in results:
        status(f'Activating [ {COLOUR_BRIGHT}{result.consumer}{COLOUR_RESET} ]')
        print_result(result.outcome.value)

        for note in result.warnings:
            warning(f'{result.consumer}: {note}')

        if not result.ok:
            error(result.describe())


def handle_activate(app: App) -> int:
    """
    Install every credential given on the command line.

    Per-consumer failures are reported but do not change the exit status.
    """
    banner(f'{__title__} v{__version__}')

    opts = prune_opts(ActivateOptions, app.args)
    material = opts.load()

    results = app.materializer.activate_all(material)
    report_results(results)

    failed = [r for r in results if not r.ok]
    if failed:
        log.info("%d of %d consumers failed", len(failed), len(results))

    return EXIT_OK
