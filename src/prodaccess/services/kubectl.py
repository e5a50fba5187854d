# prodaccess/services/kubectl.py

from __future__ import annotations

import logging
from typing import List

from prodaccess.constants import CONSUMER_KUBECTL, KUBECTL_BIN, TEMP_PREFIX
from prodaccess.models.credentials import ClientCertKeyPair
from prodaccess.models.results import ActivationResult
from prodaccess.services.activator import Activator
from prodaccess.services.errors import ToolNotFoundError
from prodaccess.utils.crypto import inspect_client_pair
from prodaccess.utils.tempfiles import EphemeralKeyPair

log = logging.getLogger(__name__)


class KubectlActivator(Activator[ClientCertKeyPair]):
    """
    Store a client certificate as embedded kubectl credentials.

    ``--embed-certs=true`` makes kubectl copy the PEM data into its own
    config, so the ephemeral files handed to it can be deleted straight away.
    """
    consumer = CONSUMER_KUBECTL

    def _activate(self, credential: ClientCertKeyPair, warnings: List[str]) -> ActivationResult:
        try:
            kubectl = self.runner.require(KUBECTL_BIN)
        except ToolNotFoundError as e:
            # kubectl is optional; nothing to configure
            log.debug("%s", e)
            return ActivationResult.skipped(self.consumer, f"{KUBECTL_BIN} not installed")

        warnings.extend(inspect_client_pair(credential.cert, credential.key))

        profile = self.config.kube_profile

        with EphemeralKeyPair(credential.cert, credential.key, prefix=f"{TEMP_PREFIX}k8s-") as pair:
            res = self.runner.run([
                kubectl, 'config', 'set-credentials', profile,
                '--embed-certs=true',
                f'--client-certificate={pair.cert_path}',
                f'--client-key={pair.key_path}',
            ])

        warnings.extend(str(e) for e in pair.cleanup_errors)

        res.check(f"kubectl set-credentials {profile}")
        log.info("Updated kubectl credentials for %s", profile)

        return ActivationResult.success(self.consumer, f"kubectl credentials '{profile}' updated", warnings)
