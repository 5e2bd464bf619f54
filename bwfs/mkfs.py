"""Creation of an empty BWFS volume inside a folder of PBM block images."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

from .layout import (
    BITMAP_BLOCK_NUMBER,
    BLOCK_COUNT,
    INODE_BLOCKS,
    INODES,
    INODES_PER_BLOCK,
    MAX_BLOCKS,
    Inode,
    PathLike,
    Superblock,
    block_path,
)

_PIXELS_PER_ROW = 100
_ROWS = 100


def _blank_image(block_num: int) -> bytes:
    header = f"P1\n# BWFS block {block_num}\n1000 1000\n"
    row = "0 " * (_PIXELS_PER_ROW - 1) + "0\n"
    return (header + row * _ROWS).encode("ascii")


def write_blank_block(path: PathLike, block_num: int) -> Path:
    """Write block ``block_num`` as a blank plain-text PBM image and return its path."""
    target = block_path(path, block_num)
    target.write_bytes(_blank_image(block_num))
    return target


def write_superblock(path: PathLike) -> Superblock:
    """Append a fresh superblock to block 0 and return it."""
    superblock = Superblock()
    with open(block_path(path, 0), "ab") as handle:
        handle.write(superblock.pack())
    return superblock


def write_inode_table(path: PathLike) -> int:
    """Append empty inodes to the inode-table blocks; return how many were written."""
    record = Inode().pack()
    written = 0
    for i in range(INODE_BLOCKS):
        count = min(INODES_PER_BLOCK, INODES - written)
        with open(block_path(path, 1 + i), "ab") as handle:
            handle.write(record * count)
        written += count
    return written


def write_bitmaps(path: PathLike) -> None:
    """Append the block and inode bitmaps to the bitmap block."""
    block_bitmap = bytearray(MAX_BLOCKS)
    # The superblock, the inode table and the bitmap block itself are in use.
    block_bitmap[: BITMAP_BLOCK_NUMBER + 1] = b"\x01" * (BITMAP_BLOCK_NUMBER + 1)
    inode_bitmap = bytes(INODES)
    with open(block_path(path, BITMAP_BLOCK_NUMBER), "r+b") as handle:
        handle.seek(0, 2)
        handle.write(bytes(block_bitmap))
        handle.write(inode_bitmap)


def make_filesystem(path: PathLike) -> int:
    """Create a complete empty volume in ``path``; return the number of inodes written."""
    folder = Path(path)
    folder.mkdir(mode=0o755, exist_ok=True)
    for block_num in range(BLOCK_COUNT):
        write_blank_block(folder, block_num)
    write_superblock(folder)
    written = write_inode_table(folder)
    write_bitmaps(folder)
    return written


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point: ``mkfs.bwfs <target_folder>``."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("Usage: mkfs.bwfs <target_folder>")
        return 1
    folder = args[0]
    print(f"Creating BWFS file system in: {folder}")
    try:
        written = make_filesystem(folder)
    except OSError as exc:
        print(f"Error creating file system: {exc}", file=sys.stderr)
        return 1
    print(f"Inode table initialised ({written} inodes).")
    print("Block and inode bitmaps initialised.")
    print(f"File system created with {BLOCK_COUNT} blocks.")
    return 0