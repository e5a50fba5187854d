# prodaccess/models/app.py

import logging
from argparse import Namespace
from dataclasses import dataclass
from typing import Optional

from prodaccess.models.config import MaterializerConfig
from prodaccess.services.materializer import CredentialMaterializer
from prodaccess.services.runner import CommandRunner

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class App:
    """
    Lightweight application context passed to all handlers.
    Holds the immutable configuration and the materializer built from it.
    """
    args: Namespace
    config: MaterializerConfig
    materializer: CredentialMaterializer

    @classmethod
    def from_args(cls, args: Namespace, runner: Optional[CommandRunner] = None) -> "App":
        config = MaterializerConfig.from_args(args)
        log.debug("Using configuration: %s", config)

        return cls(args=args, config=config, materializer=CredentialMaterializer(config, runner))
