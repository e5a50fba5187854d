# prodaccess/commands/activate/register.py

from __future__ import annotations

import argparse

from .actions import handle_activate


def _add_pair_arguments(parser: argparse.ArgumentParser, name: str, label: str) -> None:
    group = parser.add_argument_group(f'{label} client certificate')

    group.add_argument(f'--{name}-cert',
        metavar='FILE',
        help=f'PEM certificate for {label}'
    )

    group.add_argument(f'--{name}-key',
        metavar='FILE',
        help=f'PEM private key for {label}'
    )


def register(subparsers: argparse._SubParsersAction) -> None:
    """
    Register the `activate` command.
    """
    parser = subparsers.add_parser(
        'activate',
        help='Install issued credentials for SSH, Vault, kubectl, VMware and browsers',
    )

    parser.add_argument('--ssh-certificate',
        metavar='FILE',
        help='Signed OpenSSH certificate'
    )

    parser.add_argument('--vault-token-file',
        metavar='FILE',
        help='File holding the new Vault token'
    )

    _add_pair_arguments(parser, 'kube', 'kubectl')
    _add_pair_arguments(parser, 'vmware', 'VMware')
    _add_pair_arguments(parser, 'browser', 'Browser')

    parser.set_defaults(handler=handle_activate)
