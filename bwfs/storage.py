"""Reading and writing the inode table and inode bitmap of a BWFS volume."""

from __future__ import annotations

import logging
import os
from typing import List, Optional

from .layout import (
    BITMAP_BLOCK_NUMBER,
    BITMAP_REGION_SIZE,
    INODE_BLOCKS,
    INODE_REGION_SIZE,
    INODES,
    INODES_PER_BLOCK,
    Inode,
    PathLike,
    block_path,
)

log = logging.getLogger(__name__)


def _inode_region_offset(file_size: int) -> int:
    return file_size - BITMAP_REGION_SIZE - INODE_REGION_SIZE


def load_inodes(folder: PathLike) -> List[Inode]:
    """Read every inode from the inode-table blocks; missing blocks are skipped."""
    inodes: List[Inode] = []
    for i in range(INODE_BLOCKS):
        path = block_path(folder, 1 + i)
        try:
            handle = open(path, "rb")
        except FileNotFoundError:
            continue
        with handle:
            file_size = handle.seek(0, os.SEEK_END)
            pos = _inode_region_offset(file_size)
            if pos < 0:
                continue
            handle.seek(pos)
            data = handle.read(INODE_REGION_SIZE)
        whole = len(data) // Inode.SIZE
        inodes.extend(
            Inode.unpack(data[k * Inode.SIZE:(k + 1) * Inode.SIZE])
            for k in range(whole)
        )
    return inodes


def save_inode(folder: PathLike, index: int, inode: Inode) -> None:
    """Write ``inode`` into slot ``index`` of the inode table."""
    if index < 0:
        raise ValueError(f"inode index must not be negative: {index}")
    block, offset = divmod(index, INODES_PER_BLOCK)
    path = block_path(folder, 1 + block)
    with open(path, "r+b") as handle:
        file_size = handle.seek(0, os.SEEK_END)
        base = _inode_region_offset(file_size)
        if base < 0:
            raise ValueError(f"{path} is too small to hold an inode table")
        handle.seek(base + offset * Inode.SIZE)
        handle.write(inode.pack())


def find_free_inode(folder: PathLike) -> Optional[int]:
    """Return the first unused inode number, or None if all are taken."""
    path = block_path(folder, BITMAP_BLOCK_NUMBER)
    with open(path, "rb") as handle:
        size = handle.seek(0, os.SEEK_END)
        if size < INODES:
            raise ValueError(f"{path} is too small to contain the inode bitmap")
        handle.seek(size - INODES)
        bitmap = handle.read(INODES)
    log.debug("inode bitmap head: %s", "".join(str(b) for b in bitmap[:10]))
    return next((i for i, bit in enumerate(bitmap) if bit == 0), None)