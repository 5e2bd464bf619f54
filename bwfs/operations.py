"""File-system operations on a BWFS volume, in the shape a FUSE layer expects."""

from __future__ import annotations

import errno
import logging
import os
import stat
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List

from .layout import (
    BITMAP_BLOCK_NUMBER,
    FILENAME_LENGTH,
    INODES,
    Inode,
    PathLike,
    block_path,
)
from .storage import find_free_inode, load_inodes, save_inode

log = logging.getLogger(__name__)


def _error(code: int, path: str) -> OSError:
    return OSError(code, os.strerror(code), path)


@dataclass
class Attributes:
    """The attributes reported for one path."""

    mode: int
    nlink: int
    size: int = 0
    ctime: int = 0
    mtime: int = 0
    atime: int = 0


class BwfsOperations:
    """getattr, readdir and mkdir for the volume stored in ``folder``."""

    def __init__(self, folder: PathLike) -> None:
        self.folder = Path(folder)

    def getattr(self, path: str) -> Attributes:
        """Return the attributes of ``path``; raise FileNotFoundError if absent."""
        if path == "/":
            return Attributes(mode=stat.S_IFDIR | 0o755, nlink=2)
        name = path[1:]
        for inode in load_inodes(self.folder):
            if inode.used and inode.filename == name:
                if inode.is_directory:
                    attrs = Attributes(mode=stat.S_IFDIR | 0o755, nlink=2)
                else:
                    attrs = Attributes(
                        mode=stat.S_IFREG | 0o644, nlink=1, size=inode.size
                    )
                attrs.ctime = inode.created_at
                attrs.mtime = inode.modified_at
                attrs.atime = inode.modified_at
                return attrs
        raise _error(errno.ENOENT, path)

    def readdir(self, path: str) -> List[str]:
        """List the root directory: '.', '..' and every directory inode."""
        if path != "/":
            raise _error(errno.ENOENT, path)
        entries = [".", ".."]
        inodes = load_inodes(self.folder)
        log.debug("read %d inodes", len(inodes))
        for index, inode in enumerate(inodes):
            if inode.used and inode.is_directory:
                name = inode.filename[: FILENAME_LENGTH - 1]
                log.debug("readdir: inode %d -> %r", index, name)
                entries.append(name)
        return entries

    def mkdir(self, path: str, mode: int) -> int:
        """Create directory ``path`` and return the inode number it took."""
        del mode
        if path == "/":
            raise _error(errno.EEXIST, path)
        name = path[1:]
        try:
            index = find_free_inode(self.folder)
        except (OSError, ValueError) as exc:
            raise _error(errno.ENOSPC, path) from exc
        if index is None:
            raise _error(errno.ENOSPC, path)

        now = int(time.time())
        inode = Inode(
            used=True,
            is_directory=True,
            filename=name,
            size=0,
            created_at=now,
            modified_at=now,
        )
        save_inode(self.folder, index, inode)
        log.debug("assigned inode %d to %s", index, name)

        try:
            with open(block_path(self.folder, BITMAP_BLOCK_NUMBER), "r+b") as handle:
                handle.seek(-INODES, os.SEEK_END)
                bitmap = bytearray(handle.read(INODES))
                bitmap[index] = 1
                handle.seek(-INODES, os.SEEK_END)
                handle.write(bytes(bitmap))
        except OSError as exc:
            raise _error(errno.EIO, path) from exc
        return index