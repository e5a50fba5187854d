# prodaccess/services/activator.py

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

from prodaccess.models.config import MaterializerConfig
from prodaccess.models.results import ActivationResult
from prodaccess.services.errors import MaterializeError
from prodaccess.services.runner import CommandRunner

log = logging.getLogger(__name__)

CredentialT = TypeVar("CredentialT")


class Activator(ABC, Generic[CredentialT]):
    """
    Abstract base class for consumer activators.

    An activator persists one credential where its consumer expects it and
    runs whatever tool makes the consumer pick it up. Errors never escape
    ``activate()``; they come back as a failed ActivationResult so sibling
    activators are unaffected.
    """
    consumer: str = ""

    def __init__(self, config: MaterializerConfig, runner: Optional[CommandRunner] = None):
        self.config = config
        self.runner = runner or CommandRunner(timeout=config.tool_timeout)

    def activate(self, credential: CredentialT) -> ActivationResult:
        warnings: List[str] = []

        try:
            result = self._activate(credential, warnings)
        except MaterializeError as e:
            log.debug("%s activation failed: %s", self.consumer, e)
            return ActivationResult.failure(self.consumer, e, warnings)

        for note in warnings:
            log.debug("%s: %s", self.consumer, note)

        return result

    @abstractmethod
    def _activate(self, credential: CredentialT, warnings: List[str]) -> ActivationResult:
        """
        Install the credential.

        Args:
            credential: The credential material for this consumer
            warnings: Collects non-fatal problems to report with the result

        Returns:
            ActivationResult

        Raises:
            MaterializeError: on the first fatal problem
        """
        pass
