# prodaccess/services/runner.py

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence

from prodaccess.constants import DEFAULT_TOOL_TIMEOUT
from prodaccess.services.errors import ToolExecutionError, ToolNotFoundError

log = logging.getLogger(__name__)

# Shell conventions for "could not run" and "timed out"
RC_NOT_STARTED = 127
RC_TIMEOUT = 124


@dataclass(frozen=True)
class CommandResult:
    """ Outcome of one external tool invocation """
    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""
    completed: bool = True

    @property
    def ok(self) -> bool:
        return self.completed and self.returncode == 0

    @property
    def diagnostics(self) -> str:
        """ Captured stderr, then stdout, whichever are non-empty """
        return "\n".join(s.strip() for s in (self.stderr, self.stdout) if s and s.strip())

    def check(self, label: str) -> "CommandResult":
        """ Raise ToolExecutionError if the command did not succeed """
        if self.ok:
            return self

        detail = self.diagnostics or "no output"

        if not self.completed:
            msg = f"{label}: {self.args[0]!r} did not complete: {detail}"
        else:
            msg = f"{label}: {self.args[0]!r} exited with status {self.returncode}: {detail}"

        raise ToolExecutionError(
            msg,
            returncode=self.returncode,
            stdout=self.stdout,
            stderr=self.stderr,
        )


class CommandRunner:
    """ Run external tools with captured output and a bounded timeout """
    def __init__(self, timeout: Optional[float] = DEFAULT_TOOL_TIMEOUT):
        self.timeout = timeout

    def which(self, binary: str) -> Optional[str]:
        """ Resolve a binary on PATH, or None if it is not installed """
        return shutil.which(binary)

    def require(self, binary: str) -> str:
        """ Resolve a binary on PATH, raising ToolNotFoundError when absent """
        resolved = self.which(binary)

        if not resolved:
            raise ToolNotFoundError(f"Command not found: {binary!r}. Is it installed?")

        return resolved

    def run(self, command: Sequence[str]) -> CommandResult:
        """
        Run a command and capture the output.

        Never raises for tool failures: a missing binary, an OS error at start
        or a timeout are reported through ``completed``/``returncode``. Output
        that is not valid UTF-8 is decoded with replacement characters.
        """
        args = tuple(str(c) for c in command)
        log.debug("Running %s", " ".join(args))

        try:
            res = subprocess.run(
                args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                check=False
            )
        except FileNotFoundError:
            return CommandResult(args, RC_NOT_STARTED, stderr=f"Command not found: {args[0]!r}", completed=False)
        except subprocess.TimeoutExpired as e:
            return CommandResult(
                args,
                RC_TIMEOUT,
                stdout=_as_text(e.stdout),
                stderr=_as_text(e.stderr) or f"Timed out after {self.timeout}s",
                completed=False,
            )
        except OSError as e:
            return CommandResult(args, RC_NOT_STARTED, stderr=str(e), completed=False)

        log.debug("%s exited with %d", args[0], res.returncode)

        return CommandResult(args, res.returncode, stdout=res.stdout or "", stderr=res.stderr or "")


def _as_text(data) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data
