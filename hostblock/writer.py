"""File write strategies for the generated hosts file."""

import errno
import logging
import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Optional, Sequence

from .constants import ELEVATED_WRITE_COMMAND
from .exceptions import WriteError

logger = logging.getLogger(__name__)

# Rename failures that an in-place write can work around
_IN_PLACE_ERRNOS = (errno.EBUSY, errno.EXDEV)


class DirectWriter:
    """Writes files as the current user."""

    def write(self, path: str, content: str) -> None:
        """
        Atomically replace ``path`` with ``content``.

        Symlinks are followed, so the file they point to is updated. The
        content goes to a temporary file next to that file which is then
        renamed over it, so readers never see a partial file. The existing
        file's permission bits are kept. Where the rename is impossible
        (a bind-mounted file, a cross-device link) the file is rewritten
        in place instead.

        Args:
            path: Destination file
            content: Full file content

        Raises:
            PermissionError: If the current user may not write the file
            OSError: For any other filesystem failure
        """
        target = Path(os.path.realpath(path))
        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                delete=False,
                dir=target.parent,
                prefix=f".{target.name}.",
                encoding="utf-8",
                errors="surrogateescape",
                newline="",
            ) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write(content)

            if target.exists():
                shutil.copymode(target, tmp_path)
            else:
                tmp_path.chmod(0o644)

            try:
                tmp_path.replace(target)
            except OSError as e:
                if e.errno not in _IN_PLACE_ERRNOS:
                    raise
                logger.debug("Cannot rename over %s (%s), writing in place", target, e)
                self._write_in_place(target, content)
        finally:
            # Left behind unless the rename succeeded
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink(missing_ok=True)

    def _write_in_place(self, target: Path, content: str) -> None:
        with open(target, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
            f.write(content)


class ElevatedWriter:
    """Writes files through a privilege escalation helper (``sudo tee``)."""

    def __init__(self, command: Sequence[str] = ELEVATED_WRITE_COMMAND):
        """
        Initialize the elevated writer.

        Args:
            command: Helper command; the target path is appended and the
                content is passed on stdin
        """
        self.command = list(command)

    def available(self) -> bool:
        """Check whether the helper is installed."""
        return shutil.which(self.command[0]) is not None

    def write(self, path: str, content: str) -> None:
        """
        Write ``content`` to ``path`` via the helper.

        Args:
            path: Destination file
            content: Full file content

        Raises:
            WriteError: If the helper is missing or fails
        """
        cmd = self.command + [str(path)]
        logger.debug("Running: %s", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                input=content,
                text=True,
                encoding="utf-8",
                errors="surrogateescape",
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
            )
        except FileNotFoundError:
            raise WriteError(f"Write helper not found: {self.command[0]}")
        except Exception as e:
            raise WriteError(f"Failed to run write helper: {e}")

        if result.returncode != 0:
            stderr = result.stderr.strip()
            raise WriteError(f"Elevated write to {path} failed: {stderr}")


class FallbackWriter:
    """Writes directly, escalating privileges when permission is denied."""

    def __init__(
        self,
        direct: Optional[DirectWriter] = None,
        elevated: Optional[ElevatedWriter] = None,
    ):
        """
        Initialize the writer.

        Args:
            direct: Strategy tried first
            elevated: Strategy used after a permission error
        """
        self.direct = direct or DirectWriter()
        self.elevated = elevated or ElevatedWriter()

    def write(self, path: str, content: str) -> None:
        """
        Write ``content`` to ``path``.

        Args:
            path: Destination file
            content: Full file content

        Raises:
            WriteError: If no strategy could write the file
        """
        try:
            self.direct.write(path, content)
            return
        except PermissionError as e:
            if not self.elevated.available():
                raise WriteError(
                    f"Permission denied writing {path} and no elevation helper found"
                ) from e
            logger.info("Permission denied writing %s, retrying with elevated privileges", path)
        except (OSError, UnicodeError) as e:
            raise WriteError(f"Cannot write {path}: {e}") from e

        self.elevated.write(path, content)


def read_existing(path: str) -> Optional[str]:
    """
    Read a file's full content verbatim.

    Args:
        path: File to read

    Returns:
        The content, or None if the file does not exist

    Raises:
        WriteError: If the file exists but cannot be read
    """
    if not os.path.exists(path):
        return None
    try:
        with open(path, encoding="utf-8", errors="surrogateescape", newline="") as f:
            return f.read()
    except OSError as e:
        raise WriteError(f"Cannot read {path}: {e}") from e
