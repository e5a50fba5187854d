# prodaccess/constants.py

from __future__ import annotations

"""
Standardised exit codes for prodaccess CLI commands.

0 = success (including runs where individual consumers failed)
2 = fatal errors (bad configuration, unreadable input, unhandled exceptions)
"""
EXIT_OK: int = 0
EXIT_FATAL: int = 2

# ---- ANSI Colour Codes ----
COLOUR = {
    'green': '\033[32m',
    'yellow': '\033[33m',
    'bold_red': '\033[1;31m',
    'bold_yellow': '\033[1;33m',
    'bold_white': '\033[1;37m',
    'reset': '\033[0m'
}

# Convenience shortcuts
COLOUR_ERROR = COLOUR['bold_red']
COLOUR_OK = COLOUR['green']
COLOUR_SKIP = COLOUR['yellow']
COLOUR_BRIGHT = COLOUR['bold_white']
COLOUR_WARNING = COLOUR['bold_yellow']
COLOUR_RESET = COLOUR['reset']

# ---- External tools ----
SSH_ADD_BIN = 'ssh-add'
KUBECTL_BIN = 'kubectl'
OPENSSL_BIN = 'openssl'

DEFAULT_TOOL_TIMEOUT = 30.0

# ---- File modes ----
MODE_OWNER_RW = 0o600
MODE_OWNER_RO = 0o400

# ---- Consumer defaults ----
SSH_CERT_SUFFIX = '-cert.pub'
TEMP_PREFIX = 'prodaccess-'
DEFAULT_KUBE_PROFILE = 'dhtech'

DEFAULT_CERT_AUTHORITY = (
    '@cert-authority *.event.dreamhack.se ecdsa-sha2-nistp521 '
    'AAAAE2VjZHNhLXNoYTItbmlzdHA1MjEAAAAIbmlzdHA1MjEAAACFBAC/xT7a8A4Gm1Tf0mpKstqncWsOZpGPKa0lqf7E'
    'uYSpWUnx5QLaiP2TcI80AELTw2gP9jzOkpN7/QO91V3edRXGLAGk3NiNZLqvJspYfAnEo9f3/E4GBZf4kcDC93+04Szb'
    'Fg+qMY3iCmJNaIttUMdQwaR22c+HbOYhaGEFWN3OCa6Erw== vault@tech.dreamhack.se'
)

DEFAULT_PATHS = {
    'ssh_pubkey': '$HOME/.ssh/id_ecdsa.pub',
    'ssh_cert': '$HOME/.ssh/id_ecdsa-cert.pub',
    'ssh_known_hosts': '$HOME/.ssh/known_hosts',
    'vault_token': '$HOME/.vault-token',
    'vmware_cert_path': '$HOME/vmware-user.pfx',
    'browser_cert_path': '$HOME/browser-user.pfx',
}

# ---- Consumer labels ----
CONSUMER_SSH = 'SSH'
CONSUMER_VAULT = 'Vault'
CONSUMER_KUBECTL = 'Kubernetes'
CONSUMER_VMWARE = 'VMware'
CONSUMER_BROWSER = 'Browser'

# ---- View defaults ----
STATUS_COLUMN = 70
