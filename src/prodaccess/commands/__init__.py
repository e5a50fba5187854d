# prodaccess/commands/__init__.py

from __future__ import annotations

import argparse

from . import activate, pubkey

def register_all(subparsers: argparse._SubParsersAction) -> None:
    """
    Register all subcommands here
    """
    activate.register(subparsers)
    pubkey.register(subparsers)
