# prodaccess/utils/formatting.py

from __future__ import annotations

import sys
from prodaccess.constants import COLOUR, COLOUR_RESET, STATUS_COLUMN
from prodaccess.constants import COLOUR_ERROR, COLOUR_OK, COLOUR_SKIP, COLOUR_WARNING

# outcome value -> (label, colour)
RESULT_LABELS = {
    'ok': ('  OK  ', COLOUR_OK),
    'skipped': (' SKIP ', COLOUR_SKIP),
    'failed': ('FAILED', COLOUR_ERROR),
}


def banner(text: str) -> None:
    """ Print the run heading """
    print(f"---===oooO {COLOUR['bold_yellow']}{text}{COLOUR_RESET} Oooo===---\n")

def status(text: str) -> None:
    """ Start a status line; finish it with print_result() """
    print(f'{text}...', end='')

def print_result(outcome: str) -> None:
    """
    Complete a status line with a right-aligned [ OK ] / [ SKIP ] / [FAILED] tag.

    Args:
        outcome (str): 'ok', 'skipped' or 'failed'
    """
    label, colour = RESULT_LABELS[outcome]

    print(f'\033[{STATUS_COLUMN}G[ {colour}{label}{COLOUR_RESET} ]')

def error(text: str) -> None:
    print(f'{COLOUR_ERROR}Error:{COLOUR_RESET} {text}', file=sys.stderr)

def warning(text: str) -> None:
    print(f'⚠️ {COLOUR_WARNING}Warning:{COLOUR_RESET} {text}', file=sys.stderr)
