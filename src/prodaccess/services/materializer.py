# prodaccess/services/materializer.py

from __future__ import annotations

import logging
from typing import List, Optional

from prodaccess.models.config import MaterializerConfig
from prodaccess.models.credentials import (
    ClientCertKeyPair,
    CredentialMaterial,
    SecretToken,
    SSHCertificate,
)
from prodaccess.models.results import ActivationResult
from prodaccess.services.kubectl import KubectlActivator
from prodaccess.services.pkcs12 import PKCS12Activator
from prodaccess.services.runner import CommandRunner
from prodaccess.services.ssh import SSHActivator
from prodaccess.services.vault import VaultTokenActivator

log = logging.getLogger(__name__)


class CredentialMaterializer:
    """
    Install freshly issued credentials for every downstream consumer.

    Each consumer is handled by an independent activator. A failure for one
    consumer is reported in its result and never stops the others.

    Args:
        config: Paths and settings for every consumer
        runner: Command runner for external tools (a fake in tests)
    """
    def __init__(self, config: MaterializerConfig, runner: Optional[CommandRunner] = None):
        self.config = config
        self.runner = runner or CommandRunner(timeout=config.tool_timeout)

        self.ssh = SSHActivator(config, self.runner)
        self.vault = VaultTokenActivator(config, self.runner)
        self.kubectl = KubectlActivator(config, self.runner)
        self.vmware = PKCS12Activator.vmware(config, self.runner)
        self.browser = PKCS12Activator.browser(config, self.runner)

    def public_key(self) -> str:
        """ The SSH public key to send for signing. Raises KeyReadError """
        return self.ssh.read_public_key()

    def activate_ssh(self, certificate: SSHCertificate) -> ActivationResult:
        return self.ssh.activate(certificate)

    def activate_vault_token(self, token: SecretToken) -> ActivationResult:
        return self.vault.activate(token)

    def activate_kubectl(self, pair: ClientCertKeyPair) -> ActivationResult:
        return self.kubectl.activate(pair)

    def activate_vmware(self, pair: ClientCertKeyPair) -> ActivationResult:
        return self.vmware.activate(pair)

    def activate_browser(self, pair: ClientCertKeyPair) -> ActivationResult:
        return self.browser.activate(pair)

    def activate_all(self, material: CredentialMaterial) -> List[ActivationResult]:
        """
        Run every activator that has material, in a fixed order.

        Returns:
            list[ActivationResult]: one entry per consumer that was attempted
        """
        plan = (
            (material.ssh_certificate, self.ssh),
            (material.vault_token, self.vault),
            (material.kubernetes, self.kubectl),
            (material.vmware, self.vmware),
            (material.browser, self.browser),
        )

        results: List[ActivationResult] = []

        for credential, activator in plan:
            if credential is None:
                log.debug("No %s credential issued, skipping", activator.consumer)
                continue
            results.append(activator.activate(credential))

        return results
