#!/usr/bin/env python3
"""
#
# prodaccess - Production Access
#

Installs short-lived credentials issued after authentication: an SSH
certificate, a Vault token, kubectl client credentials and PKCS#12 bundles
for VMware and browsers.

Requirements:
  - Python 3.9+
  - Cryptography (pyca/cryptography) - https://cryptography.io
  - Pydantic v2

External tools:
  - ssh-add, kubectl (optional), openssl

"""
from __future__ import annotations

import argparse
import logging
from typing import Optional, Callable

from prodaccess import __version__, __title__, __short_title__
from .constants import (
    DEFAULT_KUBE_PROFILE,
    DEFAULT_PATHS,
    DEFAULT_TOOL_TIMEOUT,
    EXIT_FATAL,
)
from .commands import register_all
from .models.app import App
from .utils.formatting import error

from .services.errors import MaterializeError


def build_parser(prog_desc: str) -> argparse.ArgumentParser:
    """ Build the command line argument parser """

    parser = argparse.ArgumentParser(
        prog="prodaccess",
        description=prog_desc,
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument("--sshpubkey",
        dest="ssh_pubkey",
        default=DEFAULT_PATHS['ssh_pubkey'],
        help="SSH public key to request signed"
    )

    parser.add_argument("--sshcert",
        dest="ssh_cert",
        default=DEFAULT_PATHS['ssh_cert'],
        help="SSH certificate to write"
    )

    parser.add_argument("--sshknownhosts",
        dest="ssh_known_hosts",
        default=DEFAULT_PATHS['ssh_known_hosts'],
        help="SSH known hosts file to use"
    )

    parser.add_argument("--vault_token",
        dest="vault_token",
        default=DEFAULT_PATHS['vault_token'],
        help="Path to Vault token to update"
    )

    parser.add_argument("--vmware_cert_path",
        dest="vmware_cert_path",
        default=DEFAULT_PATHS['vmware_cert_path'],
        help="Path to store VMware user certificate"
    )

    parser.add_argument("--browser_cert_path",
        dest="browser_cert_path",
        default=DEFAULT_PATHS['browser_cert_path'],
        help="Path to store Browser user certificate"
    )

    parser.add_argument("--kube-profile",
        dest="kube_profile",
        default=DEFAULT_KUBE_PROFILE,
        help="kubectl user entry to store credentials under"
    )

    parser.add_argument("--tool-timeout",
        dest="tool_timeout",
        type=float,
        default=DEFAULT_TOOL_TIMEOUT,
        help="Seconds to wait for each external tool"
    )

    parser.add_argument("--log-level",
        default="WARNING",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Set logging verbosity",
    )

    parser.add_argument("--version",
        action="version",
        version=f"{__title__} {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="command", required=True)

    register_all(subparsers)

    return parser

# ---------------------
# Entry point
# ---------------------

def main(argv: Optional[list[str]] = None) -> int:

    description: str = f'{__title__} - {__short_title__} v{__version__}'

    parser: argparse.ArgumentParser = build_parser(description)
    args: argparse.Namespace = parser.parse_args(argv)
    handler: Optional[Callable[[App], int]] = getattr(args, "handler", None)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    if handler is None:
        logging.error("Unknown command: %s", getattr(args, "command", None))
        return EXIT_FATAL

    try:
        app: App = App.from_args(args=args)

        return handler(app)

    except MaterializeError as e:
        # Setup problems: bad configuration, unreadable input, missing public key
        error(str(e))
        return EXIT_FATAL
    except SystemExit:
        raise
    except Exception:
        logging.exception("Unexpected error")
        return EXIT_FATAL

if __name__ == "__main__":
    raise SystemExit(main())
