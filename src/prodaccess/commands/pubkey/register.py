# prodaccess/commands/pubkey/register.py

from __future__ import annotations

import argparse

from .actions import handle_pubkey


def register(subparsers: argparse._SubParsersAction) -> None:
    """
    Register the `pubkey` command.
    """
    parser = subparsers.add_parser(
        'pubkey',
        help='Print the SSH public key to submit for signing',
    )

    parser.set_defaults(handler=handle_pubkey)
