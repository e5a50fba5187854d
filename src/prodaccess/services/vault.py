# prodaccess/services/vault.py

from __future__ import annotations

import logging
from typing import List

from prodaccess.constants import CONSUMER_VAULT, MODE_OWNER_RO
from prodaccess.models.credentials import SecretToken
from prodaccess.models.results import ActivationResult
from prodaccess.services.activator import Activator
from prodaccess.utils.files import remove_file, write_bytes

log = logging.getLogger(__name__)


class VaultTokenActivator(Activator[SecretToken]):
    """ Replace the Vault token file with an owner read-only copy of the new token """
    consumer = CONSUMER_VAULT

    def _activate(self, credential: SecretToken, warnings: List[str]) -> ActivationResult:
        path = self.config.vault_token

        # The old file may be 0400 or wider; drop it so its mode cannot carry over
        if remove_file(path):
            log.debug("Removed previous Vault token %s", path)

        write_bytes(path, credential.value.encode("utf-8"), mode=MODE_OWNER_RO)
        log.info("Wrote Vault token to %s", path)

        return ActivationResult.success(self.consumer, f"token written to {path}", warnings)
