# prodaccess/services/pkcs12.py

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List

from prodaccess.constants import (
    CONSUMER_BROWSER,
    CONSUMER_VMWARE,
    MODE_OWNER_RW,
    OPENSSL_BIN,
    TEMP_PREFIX,
)
from prodaccess.models.credentials import ClientCertKeyPair
from prodaccess.models.results import ActivationResult
from prodaccess.services.activator import Activator
from prodaccess.services.errors import MaterialIOError
from prodaccess.utils.crypto import inspect_client_pair
from prodaccess.utils.files import create_exclusive, file_mode, is_group_or_world_accessible, remove_file
from prodaccess.utils.tempfiles import EphemeralKeyPair

log = logging.getLogger(__name__)


class PKCS12Activator(Activator[ClientCertKeyPair]):
    """
    Export a certificate and key as a password-less PKCS#12 bundle.

    One implementation serves every bundle consumer; they differ only in
    target path and label. See :meth:`vmware` and :meth:`browser`.
    """
    def __init__(self, config, runner=None, *, target: Path, label: str):
        super().__init__(config, runner)
        self.target = Path(target)
        self.consumer = label

    @classmethod
    def vmware(cls, config, runner=None) -> "PKCS12Activator":
        return cls(config, runner, target=config.vmware_cert_path, label=CONSUMER_VMWARE)

    @classmethod
    def browser(cls, config, runner=None) -> "PKCS12Activator":
        return cls(config, runner, target=config.browser_cert_path, label=CONSUMER_BROWSER)

    def _activate(self, credential: ClientCertKeyPair, warnings: List[str]) -> ActivationResult:
        warnings.extend(inspect_client_pair(credential.cert, credential.key))

        prefix = f"{TEMP_PREFIX}{self.consumer.lower()}-"

        pair = EphemeralKeyPair(credential.cert, credential.key, prefix=prefix)
        try:
            with pair:
                self._export(pair)
        finally:
            warnings.extend(str(e) for e in pair.cleanup_errors)

        if is_group_or_world_accessible(self.target):
            # openssl may recreate the file with its own mode
            mode = file_mode(self.target)
            log.warning("%s bundle %s has mode %o, tightening", self.consumer, self.target, mode)
            warnings.append(f"{self.target} was created with mode {mode:o}, reset to 600")
            try:
                os.chmod(self.target, MODE_OWNER_RW)
            except OSError as e:
                raise MaterialIOError(f"Failed to restrict permissions on '{self.target}': {e}") from e

        log.info("Wrote %s certificate to %s", self.consumer, self.target)

        return ActivationResult.success(self.consumer, f"bundle written to {self.target}", warnings)

    def _export(self, pair: EphemeralKeyPair) -> None:
        remove_file(self.target)
        create_exclusive(self.target, MODE_OWNER_RW)

        res = self.runner.run([
            OPENSSL_BIN, 'pkcs12', '-export', '-password', 'pass:',
            '-in', str(pair.cert_path),
            '-inkey', str(pair.key_path),
            '-out', str(self.target),
        ])

        if res.ok:
            return

        log.debug("%s openssl stdout: %s", self.consumer, res.stdout)
        log.debug("%s openssl stderr: %s", self.consumer, res.stderr)

        # Do not leave an empty or half-written bundle behind
        try:
            remove_file(self.target)
        except MaterialIOError as e:
            log.warning("Could not remove incomplete bundle %s: %s", self.target, e)

        res.check(f"Failed to emit {self.consumer} certificate")
