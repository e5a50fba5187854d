# prodaccess/utils/tempfiles.py

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import List, Optional

from prodaccess.constants import TEMP_PREFIX
from prodaccess.services.errors import CleanupError, MaterialIOError

log = logging.getLogger(__name__)


class EphemeralKeyPair:
    """
    Context manager holding a certificate and private key in two private temp files.

    Files are created by mkstemp (random names, mode 0600) and are deleted on
    every exit path, including failures while writing the second file and
    exceptions raised inside the ``with`` block. Deletion failures never
    propagate; they are collected in ``cleanup_errors`` and logged.

    Example:
        with EphemeralKeyPair(cert_pem, key_pem, prefix="prodaccess-vmware-") as pair:
            runner.run(["openssl", ..., "-in", str(pair.cert_path), ...])
    """
    def __init__(
            self,
            cert: bytes,
            key: bytes,
            *,
            prefix: str = TEMP_PREFIX,
            directory: Optional[str] = None,
        ):
        self._cert = cert
        self._key = key
        self._prefix = prefix
        self._directory = directory
        self._paths: List[Path] = []
        self.cleanup_errors: List[CleanupError] = []

    @property
    def cert_path(self) -> Path:
        return self._paths[0]

    @property
    def key_path(self) -> Path:
        return self._paths[1]

    def __enter__(self) -> "EphemeralKeyPair":
        try:
            for data, suffix in ((self._cert, ".crt"), (self._key, ".key")):
                fd, name = tempfile.mkstemp(prefix=self._prefix, suffix=suffix, dir=self._directory)
                self._paths.append(Path(name))
                with os.fdopen(fd, "wb") as fh:
                    fh.write(data)
        except OSError as err:
            self.release()
            raise MaterialIOError(f"Failed to write ephemeral credential file: {err}") from err

        log.debug("Wrote ephemeral pair %s, %s", self._paths[0], self._paths[1])
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def release(self) -> List[CleanupError]:
        """ Delete every file this pair created. Safe to call more than once """
        remaining: List[Path] = []

        for path in self._paths:
            try:
                path.unlink()
            except FileNotFoundError:
                pass
            except OSError as err:
                cleanup = CleanupError(f"Failed to remove ephemeral file '{path}': {err}")
                log.warning("%s", cleanup)
                self.cleanup_errors.append(cleanup)
                remaining.append(path)

        self._paths = remaining
        return self.cleanup_errors
