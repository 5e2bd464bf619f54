"""On-disk layout of a BWFS volume: constants, superblock and inode records."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar, Tuple, Union

MAGIC = 0x42574653
BLOCK_SIZE = 1024
MAX_BLOCKS = 1024
INODES = 128
FILENAME_LENGTH = 255
SIGNATURE = "BWFSv1"
BLOCK_COUNT = 128
INODE_BLOCKS = 4
BITMAP_BLOCK = 1
DIRECT_BLOCKS = 12

_SUPERBLOCK_STRUCT = struct.Struct("<6I")
# Two flag bytes, the name, three bytes of alignment padding, then the
# size, the direct block pointers and the two timestamps.
_INODE_STRUCT = struct.Struct(f"<BB{FILENAME_LENGTH}s3xI{DIRECT_BLOCKS}III")

SUPERBLOCK_SIZE = _SUPERBLOCK_STRUCT.size
INODE_SIZE = _INODE_STRUCT.size
INODES_PER_BLOCK = BLOCK_SIZE // INODE_SIZE
INODE_REGION_SIZE = INODES_PER_BLOCK * INODE_SIZE
BITMAP_REGION_SIZE = MAX_BLOCKS + INODES
BITMAP_BLOCK_NUMBER = 1 + INODE_BLOCKS

PathLike = Union[str, Path]


def block_path(folder: PathLike, block_num: int) -> Path:
    """Return the path of the image file that holds block ``block_num``."""
    return Path(folder) / f"block_{block_num:03d}.pbm"


@dataclass
class Superblock:
    """The volume descriptor stored at the end of block 0."""

    SIZE: ClassVar[int] = SUPERBLOCK_SIZE

    magic: int = MAGIC
    total_blocks: int = BLOCK_COUNT
    inode_table_start: int = 1
    data_block_start: int = 1 + INODE_BLOCKS + BITMAP_BLOCK
    free_block_bitmap: int = 1 + INODE_BLOCKS
    free_inode_bitmap: int = 1 + INODE_BLOCKS

    @property
    def is_valid(self) -> bool:
        """Whether the magic number identifies a BWFS volume."""
        return self.magic == MAGIC

    def pack(self) -> bytes:
        """Serialise to the fixed on-disk record."""
        try:
            return _SUPERBLOCK_STRUCT.pack(
                self.magic,
                self.total_blocks,
                self.inode_table_start,
                self.data_block_start,
                self.free_block_bitmap,
                self.free_inode_bitmap,
            )
        except struct.error as exc:
            raise ValueError(f"superblock field out of range: {exc}") from exc

    @classmethod
    def unpack(cls, data: bytes) -> "Superblock":
        """Parse a superblock from exactly ``SIZE`` bytes."""
        if len(data) != cls.SIZE:
            raise ValueError(
                f"superblock needs {cls.SIZE} bytes, got {len(data)}"
            )
        return cls(*_SUPERBLOCK_STRUCT.unpack(data))


def _encode_name(name: str) -> bytes:
    raw = name.encode("utf-8")[: FILENAME_LENGTH - 1]
    # Never leave half of a multi-byte character at the cut.
    return raw.decode("utf-8", "ignore").encode("utf-8")


@dataclass
class Inode:
    """A file or directory entry in the inode table."""

    SIZE: ClassVar[int] = INODE_SIZE

    used: bool = False
    is_directory: bool = False
    filename: str = ""
    size: int = 0
    blocks: Tuple[int, ...] = field(default_factory=lambda: (0,) * DIRECT_BLOCKS)
    created_at: int = 0
    modified_at: int = 0

    def __post_init__(self) -> None:
        blocks = tuple(self.blocks)
        if len(blocks) > DIRECT_BLOCKS:
            raise ValueError(
                f"an inode holds at most {DIRECT_BLOCKS} direct blocks"
            )
        self.blocks = blocks + (0,) * (DIRECT_BLOCKS - len(blocks))
        self.used = bool(self.used)
        self.is_directory = bool(self.is_directory)

    def pack(self) -> bytes:
        """Serialise to the fixed on-disk record; long names are truncated."""
        try:
            return _INODE_STRUCT.pack(
                int(self.used),
                int(self.is_directory),
                _encode_name(self.filename),
                self.size,
                *self.blocks,
                self.created_at,
                self.modified_at,
            )
        except struct.error as exc:
            raise ValueError(f"inode field out of range: {exc}") from exc

    @classmethod
    def unpack(cls, data: bytes) -> "Inode":
        """Parse an inode from exactly ``SIZE`` bytes."""
        if len(data) != cls.SIZE:
            raise ValueError(f"inode needs {cls.SIZE} bytes, got {len(data)}")
        used, is_dir, raw_name, size, *rest = _INODE_STRUCT.unpack(data)
        blocks = tuple(rest[:DIRECT_BLOCKS])
        created_at, modified_at = rest[DIRECT_BLOCKS:]
        name = raw_name.split(b"\0", 1)[0].decode("utf-8", "replace")
        return cls(
            used=bool(used),
            is_directory=bool(is_dir),
            filename=name,
            size=size,
            blocks=blocks,
            created_at=created_at,
            modified_at=modified_at,
        )