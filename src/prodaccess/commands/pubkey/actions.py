# prodaccess/commands/pubkey/actions.py

from __future__ import annotations

import sys

from prodaccess.constants import EXIT_OK
from prodaccess.models.app import App


def handle_pubkey(app: App) -> int:
    """ Write the configured SSH public key to stdout. KeyReadError propagates """
    key = app.materializer.public_key()

    sys.stdout.write(key if key.endswith("\n") else f"{key}\n")

    return EXIT_OK
