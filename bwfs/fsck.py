"""Basic consistency check of a BWFS volume: superblock and bitmaps."""

from __future__ import annotations

import os
import sys
from typing import List, Optional, Sequence, Tuple

from .layout import (
    BITMAP_BLOCK_NUMBER,
    BITMAP_REGION_SIZE,
    MAX_BLOCKS,
    PathLike,
    Superblock,
    block_path,
)


class FsckError(Exception):
    """Raised when a volume cannot be read or is not a valid BWFS volume."""


def _read_tail(path: PathLike, block_num: int, length: int, what: str) -> bytes:
    try:
        with open(block_path(path, block_num), "rb") as handle:
            handle.seek(-length, os.SEEK_END)
            data = handle.read(length)
    except OSError as exc:
        raise FsckError(f"Error reading {what}: {exc}") from exc
    if len(data) != length:
        raise FsckError(f"Error reading {what}: truncated data")
    return data


def read_superblock(path: PathLike) -> Superblock:
    """Read the superblock stored at the end of block 0."""
    return Superblock.unpack(_read_tail(path, 0, Superblock.SIZE, "superblock"))


def read_bitmaps(path: PathLike) -> Tuple[bytes, bytes]:
    """Return the block bitmap and the inode bitmap of the volume."""
    data = _read_tail(path, BITMAP_BLOCK_NUMBER, BITMAP_REGION_SIZE, "bitmaps")
    return data[:MAX_BLOCKS], data[MAX_BLOCKS:]


def format_bitmap(label: str, bitmap: Sequence[int]) -> str:
    """Render a bitmap as its label followed by the indices that are set."""
    used = "".join(f" [{i}]" for i, bit in enumerate(bitmap) if bit)
    return f"🧾 {label}:\n{used}"


def check(path: PathLike) -> str:
    """Check the volume in ``path`` and return the report text."""
    sb = read_superblock(path)
    if not sb.is_valid:
        raise FsckError("❌ Invalid magic. Not a valid BWFS file system.")
    block_bitmap, inode_bitmap = read_bitmaps(path)
    lines = [
        "✅ Superblock OK",
        f"  Total blocks: {sb.total_blocks}",
        f"  Data blocks start at: {sb.data_block_start}",
        f"  Inode table starts at block: {sb.inode_table_start}",
        format_bitmap("Used blocks", block_bitmap),
        format_bitmap("Used inodes", inode_bitmap),
        "✅ fsck finished without errors (basic phase).",
    ]
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point: ``fsck.bwfs <fs_folder>``."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("Usage: fsck.bwfs <fs_folder>")
        return 1
    try:
        report = check(args[0])
    except FsckError as exc:
        print(exc, file=sys.stderr)
        return 1
    print(report)
    return 0