# prodaccess/utils/files.py

from __future__ import annotations

from pathlib import Path
from typing import Union
import logging
import os
import stat
import tempfile

from prodaccess.constants import MODE_OWNER_RW
from prodaccess.services.errors import MaterialIOError

StrPath = Union[str, Path]

log = logging.getLogger(__name__)


def read_bytes(path: StrPath) -> bytes:
    """Read a file as bytes; raises MaterialIOError on failure."""
    file_path = Path(path)

    try:
        return file_path.read_bytes()
    except FileNotFoundError as e:
        raise MaterialIOError(f"File '{file_path}' not found.") from e
    except PermissionError as e:
        raise MaterialIOError(f"Permission denied for file '{file_path}'.") from e
    except IsADirectoryError as e:
        raise MaterialIOError(f"Path '{file_path}' is a directory.") from e
    except OSError as err:
        raise MaterialIOError(f"I/O error while reading file '{file_path}': {err}") from err

def read_text(path: StrPath, encoding: str = "utf-8") -> str:
    """Read a file as text; raises MaterialIOError on failure or bad encoding."""
    data = read_bytes(path)

    try:
        return data.decode(encoding)
    except UnicodeDecodeError as err:
        raise MaterialIOError(f"File '{path}' is not valid {encoding}: {err}") from err

def write_bytes(path: StrPath, data: bytes, *, mode: int = MODE_OWNER_RW) -> Path:
    """
    Write bytes to a file with a fixed permission mode, replacing any existing file.

    Writes to a private temp file in the destination directory,
    applies the mode, then os.replace()s it over the target. The temp file is
    created 0600 by mkstemp so data is never readable by group/world, even for
    a moment.

    Args:
        path: Destination file path.
        data: Bytes to write.
        mode: File permission mode to apply to the written file.

    Returns:
        The Path of the written file.

    Raises:
        MaterialIOError: on any filesystem failure.
    """
    file_path = Path(path)
    parent = file_path.parent
    tmp_name = None

    try:
        # Atomic write: temp file in same directory -> fsync -> replace -> fsync dir
        with tempfile.NamedTemporaryFile(delete=False, dir=str(parent), prefix=".tmp-") as tmp:
            tmp_name = tmp.name
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())

        os.chmod(tmp_name, mode)
        os.replace(tmp_name, file_path)
        tmp_name = None

        # fsync the containing directory so the rename is durable
        dir_fd = os.open(str(parent), os.O_DIRECTORY)
        try:
            os.fsync(dir_fd)
        finally:
            os.close(dir_fd)

        return file_path

    except PermissionError as e:
        raise MaterialIOError(f"Permission denied for file '{file_path}'.") from e
    except IsADirectoryError as e:
        raise MaterialIOError(f"Path '{file_path}' is a directory.") from e
    except FileNotFoundError as e:
        # e.g., parent directory missing
        raise MaterialIOError(f"Path '{file_path}' not found.") from e
    except OSError as err:
        raise MaterialIOError(f"I/O error while writing file '{file_path}': {err}") from err
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            except OSError as err:
                log.warning("Could not remove temp file %s: %s", tmp_name, err)

def append_bytes(path: StrPath, data: bytes) -> None:
    """Append bytes to an existing file without creating or truncating it."""
    file_path = Path(path)

    try:
        fd = os.open(file_path, os.O_WRONLY | os.O_APPEND)
        with os.fdopen(fd, "ab") as fh:
            fh.write(data)
    except FileNotFoundError as e:
        raise MaterialIOError(f"File '{file_path}' not found.") from e
    except PermissionError as e:
        raise MaterialIOError(f"Permission denied for file '{file_path}'.") from e
    except OSError as err:
        raise MaterialIOError(f"I/O error while appending to file '{file_path}': {err}") from err

def remove_file(path: StrPath) -> bool:
    """
    Remove a file if it exists.

    Returns:
        bool: True if a file was removed, False if nothing was there.
    """
    file_path = Path(path)

    try:
        file_path.unlink()
        return True
    except FileNotFoundError:
        return False
    except IsADirectoryError as e:
        raise MaterialIOError(f"Path '{file_path}' is a directory.") from e
    except PermissionError as e:
        raise MaterialIOError(f"Permission denied removing '{file_path}'.") from e
    except OSError as err:
        raise MaterialIOError(f"I/O error while removing '{file_path}': {err}") from err

def create_exclusive(path: StrPath, mode: int = MODE_OWNER_RW) -> Path:
    """Create an empty file with the given mode; fails if the path already exists."""
    file_path = Path(path)

    try:
        fd = os.open(file_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, mode)
        os.close(fd)
        # umask may have stripped bits, never added any
        os.chmod(file_path, mode)
        return file_path
    except FileExistsError as e:
        raise MaterialIOError(f"File '{file_path}' already exists.") from e
    except PermissionError as e:
        raise MaterialIOError(f"Permission denied for file '{file_path}'.") from e
    except FileNotFoundError as e:
        raise MaterialIOError(f"Path '{file_path}' not found.") from e
    except OSError as err:
        raise MaterialIOError(f"I/O error while creating '{file_path}': {err}") from err

def file_mode(path: StrPath) -> int:
    """Return the permission bits of a file."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except OSError as err:
        raise MaterialIOError(f"Cannot stat '{path}': {err}") from err

def is_group_or_world_accessible(path: StrPath) -> bool:
    return bool(file_mode(path) & (stat.S_IRWXG | stat.S_IRWXO))
