"""Read-only access to entries inside an APK archive."""

from __future__ import annotations

import fnmatch
import logging
from pathlib import Path
from types import TracebackType
from typing import Callable
from zipfile import ZipFile

logger = logging.getLogger(__name__)


class ApkArchive:
    """Context manager over the APK's ZIP container.

    Every lookup returns either the entry's decompressed bytes or None when
    the entry does not exist. The archive can be opened as many times as
    needed; nothing is cached between ``with`` blocks.
    """

    def __init__(self, apk_path: Path | str):
        self.apk_path = Path(apk_path)
        self._zip: ZipFile | None = None

    def __enter__(self) -> ApkArchive:
        self._zip = ZipFile(self.apk_path, "r")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._zip is not None:
            self._zip.close()
            self._zip = None

    @property
    def zip_file(self) -> ZipFile:
        if self._zip is None:
            raise RuntimeError("ApkArchive must be used as a context manager")
        return self._zip

    def namelist(self) -> list[str]:
        """List every entry name in the archive."""
        return self.zip_file.namelist()

    def exists(self, name: str) -> bool:
        """Check whether an entry exists."""
        try:
            self.zip_file.getinfo(name)
        except KeyError:
            return False
        return True

    def read(self, name: str) -> bytes | None:
        """Read an entry's decompressed bytes, or None if it is missing."""
        if not self.exists(name):
            logger.debug("Entry not found in %s: %s", self.apk_path.name, name)
            return None
        return self.zip_file.read(name)

    def glob(self, *patterns: str) -> list[str]:
        """Entry names matching any of the shell-style patterns, in archive order."""
        return [
            name
            for name in self.namelist()
            if any(fnmatch.fnmatchcase(name, pattern) for pattern in patterns)
        ]


# Opens a fresh archive handle for one operation
ArchiveOpener = Callable[[], ApkArchive]


def archive_opener(apk_path: Path | str) -> ArchiveOpener:
    """Build an opener bound to one APK path."""

    def _open() -> ApkArchive:
        return ApkArchive(apk_path)

    return _open

